"""Identity domain layer."""

from parliamentary_voter.domain.identity.entities.user_profile import (
    UserProfile,
    VotingReminderFrequency,
)
from parliamentary_voter.domain.identity.value_objects.province import JurisdictionType, Province

__all__ = [
    "JurisdictionType",
    "Province",
    "UserProfile",
    "VotingReminderFrequency",
]
