"""Database models."""

from backend.models.trade import Trade
from backend.models.user import User

__all__ = [
    "Trade",
    "User",
]
