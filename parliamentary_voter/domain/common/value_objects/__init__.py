"""Common value objects shared across all domain modules."""

from .ids import UserProfileId

__all__ = [
    "UserProfileId",
]
