"""User profile entity holding a voter's personal details and preferences."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from uuid import UUID

from parliamentary_voter.domain.common.entity import Entity, is_transient_id
from parliamentary_voter.domain.common.exceptions import InvalidArgumentError
from parliamentary_voter.domain.common.value_objects.ids import UserProfileId
from parliamentary_voter.domain.identity.value_objects.province import Province

# Domain constraints
MINIMUM_VOTING_AGE = 18
MAX_AGE_YEARS = 120
DEFAULT_TIME_ZONE = "America/Toronto"
DEFAULT_LANGUAGE = "en"


class VotingReminderFrequency(IntEnum):
    NEVER = 0
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    ON_NEW_BILLS_ONLY = 4


_TIME_ZONES_BY_PROVINCE = {
    "BC": "America/Vancouver",
    "YT": "America/Vancouver",
    "AB": "America/Edmonton",
    "NT": "America/Edmonton",
    "SK": "America/Regina",
    "MB": "America/Winnipeg",
    "ON": "America/Toronto",
    "NU": "America/Toronto",
    "QC": "America/Montreal",
    "NB": "America/Halifax",
    "NS": "America/Halifax",
    "PE": "America/Halifax",
    "NL": "America/St_Johns",
}


def default_time_zone_for(province: Province) -> str:
    """Return the IANA time zone most residents of the province use."""
    return _TIME_ZONES_BY_PROVINCE.get(province.code, DEFAULT_TIME_ZONE)


def _require_text(value: str | None, field_name: str, label: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{label} cannot be null or empty", field=field_name)
    return value.strip()


def _optional_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


@dataclass(eq=False)
class UserProfile(Entity[UserProfileId]):
    """
    User profile entity.

    Part of the user aggregate: identified by its own id and linked to the
    owning account through ``user_id``.

    Business Rules:
    - First and last name must be non-empty (stored trimmed)
    - Province must be one of the Canadian provinces or territories
    - Date of birth cannot be in the future or more than MAX_AGE_YEARS ago
    - Voting requires an age of at least MINIMUM_VOTING_AGE
    - Every change bumps the entity version through mark_updated
    """

    user_id: UUID
    first_name: str
    last_name: str
    province: Province
    date_of_birth: date | None = None
    phone_number: str | None = None
    avatar_url: str | None = None
    preferred_language: str = DEFAULT_LANGUAGE
    email_notifications_enabled: bool = True
    sms_notifications_enabled: bool = False
    political_interests: tuple[str, ...] = ()
    voting_reminder_frequency: VotingReminderFrequency = VotingReminderFrequency.WEEKLY
    public_voting_history: bool = False
    time_zone: str = DEFAULT_TIME_ZONE

    def __post_init__(self) -> None:
        """Validate invariants."""
        super().__post_init__()
        if is_transient_id(self.user_id):
            raise InvalidArgumentError("User ID cannot be empty", field="user_id")
        _require_text(self.first_name, "first_name", "First name")
        _require_text(self.last_name, "last_name", "Last name")
        if self.province is None:
            raise InvalidArgumentError("Province is required", field="province")

    # Query methods
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def age(self) -> int | None:
        """Age in whole years today, or None when the birth date is unknown."""
        return self.age_on(date.today())

    def age_on(self, day: date) -> int | None:
        if self.date_of_birth is None:
            return None

        born = self.date_of_birth
        age = day.year - born.year
        if (day.month, day.day) < (born.month, born.day):
            age -= 1
        return age

    def is_eligible_to_vote(self) -> bool:
        age = self.age
        return age is not None and age >= MINIMUM_VOTING_AGE

    def is_complete_for_voting(self) -> bool:
        """
        Check whether the profile holds what voting needs.

        An unknown age does not block voting here; eligibility is checked
        again where a ballot is cast.
        """
        age = self.age
        return (
            bool(self.first_name.strip())
            and bool(self.last_name.strip())
            and self.province is not None
            and (age is None or age >= MINIMUM_VOTING_AGE)
        )

    # Command methods
    def update_basic_info(
        self, first_name: str, last_name: str, province: Province, actor: UUID | None = None
    ) -> None:
        """
        Update name and province.

        Raises:
            InvalidArgumentError: If a name is blank or province is missing
        """
        first = _require_text(first_name, "first_name", "First name")
        last = _require_text(last_name, "last_name", "Last name")
        if province is None:
            raise InvalidArgumentError("Province is required", field="province")

        self.first_name = first
        self.last_name = last
        self.province = province
        self.mark_updated(actor)

    def update_contact_info(
        self,
        phone_number: str | None,
        preferred_language: str,
        time_zone: str,
        actor: UUID | None = None,
    ) -> None:
        """
        Update phone number, language and time zone.

        A blank phone number clears it.

        Raises:
            InvalidArgumentError: If language or time zone is blank
        """
        language = _require_text(preferred_language, "preferred_language", "Preferred language")
        zone = _require_text(time_zone, "time_zone", "Timezone")

        self.phone_number = _optional_text(phone_number)
        self.preferred_language = language
        self.time_zone = zone
        self.mark_updated(actor)

    def update_notification_preferences(
        self,
        email_notifications: bool,
        sms_notifications: bool,
        voting_reminder_frequency: VotingReminderFrequency,
        actor: UUID | None = None,
    ) -> None:
        self.email_notifications_enabled = email_notifications
        self.sms_notifications_enabled = sms_notifications
        self.voting_reminder_frequency = voting_reminder_frequency
        self.mark_updated(actor)

    def update_profile_details(
        self, date_of_birth: date | None, avatar_url: str | None, actor: UUID | None = None
    ) -> None:
        """
        Update birth date and avatar.

        Raises:
            InvalidArgumentError: If the birth date is in the future or too far in the past
        """
        if date_of_birth is not None:
            today = date.today()
            if date_of_birth > today:
                raise InvalidArgumentError(
                    "Date of birth cannot be in the future",
                    field="date_of_birth",
                    value=date_of_birth,
                )
            if date_of_birth < _years_before(today, MAX_AGE_YEARS):
                raise InvalidArgumentError(
                    "Date of birth is too far in the past",
                    field="date_of_birth",
                    value=date_of_birth,
                )

        self.date_of_birth = date_of_birth
        self.avatar_url = _optional_text(avatar_url)
        self.mark_updated(actor)

    def update_political_interests(self, interests: list[str], actor: UUID | None = None) -> None:
        """Replace the interests, trimming each and dropping blank entries."""
        if interests is None:
            raise InvalidArgumentError("Interests cannot be null", field="interests")

        self.political_interests = tuple(i.strip() for i in interests if i and i.strip())
        self.mark_updated(actor)

    def set_voting_history_visibility(self, is_public: bool, actor: UUID | None = None) -> None:
        self.public_voting_history = is_public
        self.mark_updated(actor)

    # Factory methods
    @classmethod
    def create(
        cls,
        user_id: UUID,
        first_name: str,
        last_name: str,
        province: Province,
        preferred_language: str = DEFAULT_LANGUAGE,
        created_by: UUID | None = None,
    ) -> "UserProfile":
        """
        Create a new profile with default preferences.

        Notifications default to email only, voting history to private and the
        time zone to the one of the province.

        Raises:
            InvalidArgumentError: If user_id is empty, a name or the language is blank,
                or province is missing
        """
        if province is None:
            raise InvalidArgumentError("Province is required", field="province")

        return cls(
            id=UserProfileId.generate(),
            user_id=user_id,
            first_name=_require_text(first_name, "first_name", "First name"),
            last_name=_require_text(last_name, "last_name", "Last name"),
            province=province,
            preferred_language=_require_text(
                preferred_language, "preferred_language", "Preferred language"
            ),
            time_zone=default_time_zone_for(province),
            created_by=created_by,
        )
