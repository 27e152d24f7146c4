"""Session store — the typed mapping from session id to Cart.

Carts are looked up by the shopper's session id. Creating a cart on first
access is the caller's job (``get_or_create``); the store itself only gets,
puts and destroys.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.locks import session_locks
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None) if moment.tzinfo else moment


def _idle(cart: Cart, cutoff: datetime) -> bool:
    return bool(cart.updated_at) and _naive(cart.updated_at) <= _naive(cutoff)


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_session(self, session_id) -> Cart | None:
        carts = self._dao.query.filter(session_id=str(session_id)).all().items
        return carts[0] if carts else None

    def idle_since(self, cutoff: datetime) -> list[Cart]:
        """Carts whose last change is at or before ``cutoff``."""
        carts = self._dao.query.all().items
        return [cart for cart in carts if _idle(cart, cutoff)]

    def destroy(self, cart: Cart) -> None:
        self._dao.delete(cart)


class SessionCarts:
    """Get, put and expire carts by session id.

    Resolves the cart repository from the active domain on every call, so a
    single instance can be shared across requests.
    """

    @property
    def repository(self) -> CartRepository:
        return current_domain.repository_for(Cart)

    def get(self, session_id) -> Cart | None:
        return self.repository.for_session(session_id)

    def put(self, session_id, cart: Cart) -> None:
        if str(cart.session_id) != str(session_id):
            raise ValidationError({"session_id": ["Cart belongs to a different session"]})
        self.repository.add(cart)

    def get_or_create(self, session_id) -> Cart:
        """Return the session's cart, starting an empty one on first access.

        A new cart is not stored until the caller ``put``s it.
        """
        cart = self.get(session_id)
        if cart is None:
            cart = Cart.create(session_id=str(session_id))
            logger.debug("Started a new cart", session_id=str(session_id))
        return cart

    def expire(self, session_id) -> bool:
        """Destroy the session's cart and forget its lock.

        Returns ``True`` when there was a cart to destroy.
        """
        with session_locks.hold(session_id):
            cart = self.get(session_id)
            if cart is not None:
                self.repository.destroy(cart)
        session_locks.discard(session_id)

        logger.info("Session expired", session_id=str(session_id), had_cart=cart is not None)
        return cart is not None

    def expire_if_idle(self, session_id, cutoff: datetime) -> bool:
        """Expire the session only if its cart is still untouched since ``cutoff``.

        The cart is re-read under the session's lock, so a shopper who
        changed it after the sweep listed it keeps their cart.
        """
        with session_locks.hold(session_id):
            cart = self.get(session_id)
            if cart is None or not _idle(cart, cutoff):
                return False
            self.repository.destroy(cart)
        session_locks.discard(session_id)

        logger.info("Idle session expired", session_id=str(session_id))
        return True

    def expire_idle(self, idle_minutes: int, as_of: datetime | None = None) -> int:
        """Expire every session whose cart has been idle for ``idle_minutes``."""
        as_of = as_of or datetime.now(UTC)
        cutoff = as_of - timedelta(minutes=idle_minutes)

        logger.info("Checking for idle sessions", cutoff=cutoff.isoformat(), idle_minutes=idle_minutes)

        expired = 0
        for cart in self.repository.idle_since(cutoff):
            if self.expire_if_idle(cart.session_id, cutoff):
                expired += 1

        logger.info("Idle session sweep complete", expired_count=expired)
        return expired


session_carts = SessionCarts()


def process_for_session(session_id, command):
    """Run a cart command synchronously while holding the session's lock."""
    with session_locks.hold(session_id):
        return current_domain.process(command, asynchronous=False)
