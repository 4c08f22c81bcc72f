from .user_profile import UserProfile, VotingReminderFrequency, default_time_zone_for

__all__ = [
    "UserProfile",
    "VotingReminderFrequency",
    "default_time_zone_for",
]
