"""
Base classes for Domain Events.

Domain Events represent something significant that happened to an aggregate.
They are immutable records that other parts of the system can react to once
the unit of work that produced them has committed. Each event carries enough
metadata (aggregate id and type, actor, correlation id, timestamp) for a
consumer to act on it without reloading the aggregate.

Example:
    @dataclass(frozen=True, eq=False)
    class ProfileProvinceChanged(TypedDomainEvent[UserProfileId]):
        province_code: str

    event = ProfileProvinceChanged(
        "ON",
        typed_aggregate_id=profile.id,
        aggregate_type="UserProfile",
    )
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar, Generic
from uuid import UUID, uuid4

from .entity import NIL_UUID, IdType, is_transient_id, to_universal_id
from .exceptions import InvalidArgumentError


@dataclass(frozen=True, eq=False, kw_only=True)
class DomainEvent:
    """
    Base class for Domain Events.

    Domain Events are:
    - Immutable (frozen dataclass), apart from the actor and correlation id
      which may be filled in once the event has been raised
    - Named in past tense (ProfileCreated, not CreateProfile)
    - Compared by ``event_id`` only
    - Timestamped (when the event occurred)

    Subclasses should be decorated with @dataclass(frozen=True, eq=False),
    define their payload fields and bump ``event_version`` when the payload
    shape changes.
    """

    event_version: ClassVar[int] = 1

    aggregate_id: UUID
    aggregate_type: str
    user_id: UUID | None = None
    correlation_id: str | None = None
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if is_transient_id(self.aggregate_id):
            raise InvalidArgumentError("Aggregate ID cannot be empty", field="aggregate_id")
        aggregate_id = to_universal_id(self.aggregate_id)
        if aggregate_id == NIL_UUID:
            raise InvalidArgumentError("Aggregate ID cannot be empty", field="aggregate_id")
        object.__setattr__(self, "aggregate_id", aggregate_id)

        if not isinstance(self.aggregate_type, str) or not self.aggregate_type.strip():
            raise InvalidArgumentError(
                "Aggregate type cannot be null or empty",
                field="aggregate_type",
                value=self.aggregate_type,
            )

        if self.user_id is not None and is_transient_id(self.user_id):
            raise InvalidArgumentError("User ID cannot be empty", field="user_id")

        if self.correlation_id is None:
            object.__setattr__(self, "correlation_id", str(uuid4()))
        elif not self.correlation_id.strip():
            raise InvalidArgumentError(
                "Correlation ID cannot be null or empty", field="correlation_id"
            )

    @property
    def event_name(self) -> str:
        """Return the event type name for serialization."""
        return self.__class__.__name__

    def set_user_id(self, user_id: UUID) -> None:
        """
        Attach the acting user.

        Raises:
            InvalidArgumentError: If user_id is empty
        """
        if is_transient_id(user_id):
            raise InvalidArgumentError("User ID cannot be empty", field="user_id")
        object.__setattr__(self, "user_id", user_id)

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Group this event with others from the same operation.

        Raises:
            InvalidArgumentError: If correlation_id is blank
        """
        if not correlation_id or not correlation_id.strip():
            raise InvalidArgumentError(
                "Correlation ID cannot be null or empty", field="correlation_id"
            )
        object.__setattr__(self, "correlation_id", correlation_id)

    def to_dict(self) -> dict[str, object]:
        """Convert event to dictionary for serialization."""
        result: dict[str, object] = {}
        for key, value in self.__dict__.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, UUID):
                result[key] = str(value)
            elif hasattr(value, "to_primitive"):
                result[key] = value.to_primitive()
            else:
                result[key] = value
        result["event_name"] = self.event_name
        result["event_version"] = self.event_version
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainEvent):
            return False
        return self.event_id == other.event_id

    def __hash__(self) -> int:
        return hash(self.event_id)

    def __str__(self) -> str:
        occurred = self.occurred_on.strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"{self.event_name} [EventId: {self.event_id}, "
            f"AggregateId: {self.aggregate_id}, OccurredOn: {occurred} UTC]"
        )


@dataclass(frozen=True, eq=False, kw_only=True)
class TypedDomainEvent(DomainEvent, Generic[IdType]):
    """
    Domain event raised by an aggregate with a strongly-typed identifier.

    The typed id is kept as ``typed_aggregate_id``; ``aggregate_id`` is
    derived from it through ``to_universal_id`` so every event can be stored
    and transported the same way. It cannot be passed in directly.
    """

    aggregate_id: UUID = field(init=False, default=NIL_UUID)
    typed_aggregate_id: IdType

    def __post_init__(self) -> None:
        if is_transient_id(self.typed_aggregate_id):
            raise InvalidArgumentError(
                "Aggregate ID cannot be null or default", field="typed_aggregate_id"
            )
        object.__setattr__(self, "aggregate_id", to_universal_id(self.typed_aggregate_id))
        super().__post_init__()
