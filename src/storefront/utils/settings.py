"""Runtime settings for the storefront, read from the environment."""

import os


def _env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


ENV = _env()
LOG_DIR = os.getenv("LOG_DIR", "logs")

# Cookie carrying the shopper's session identifier
SESSION_COOKIE = os.getenv("STOREFRONT_SESSION_COOKIE", "session_id")

# Carts untouched for longer than this are destroyed by the idle sweep
SESSION_IDLE_MINUTES = _int("STOREFRONT_SESSION_IDLE_MINUTES", 30)

# Seed the starter catalogue at application startup when it is empty
SEED_CATALOGUE = _flag("STOREFRONT_SEED_CATALOGUE", True)
