from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True, eq=False)
class UserProfileId(EntityId):
    """Strongly-typed user profile identifier."""
