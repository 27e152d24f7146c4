"""Errors raised by the cart and checkout flow.

All of them are recoverable at the request boundary; the API layer turns
them into JSON error responses.
"""


class StorefrontError(Exception):
    """Base class for storefront failures a shopper can retry from."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.message, **self.context}


class ProductNotFound(StorefrontError):
    def __init__(self, product_id):
        super().__init__(f"Product {product_id} does not exist", product_id=str(product_id))


class EmptyCartError(StorefrontError):
    def __init__(self, session_id=None):
        context = {"session_id": str(session_id)} if session_id else {}
        super().__init__("Cannot check out an empty cart", **context)


class OrderRecordingFailed(StorefrontError):
    def __init__(self, session_id, reason):
        super().__init__(f"Order could not be recorded: {reason}", session_id=str(session_id))
