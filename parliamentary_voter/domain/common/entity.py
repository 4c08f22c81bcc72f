"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Every entity carries audit metadata (who created/updated/deleted it and when),
an optimistic-concurrency ``version`` and a soft-delete flag. Those fields are
changed only through ``mark_updated``, ``mark_deleted`` and ``restore``.

Example:
    @dataclass(eq=False)
    class Ballot(Entity[BallotId]):
        riding: str

        def move_to(self, riding: str, actor: UUID | None = None) -> None:
            self.riding = riding
            self.mark_updated(actor)
"""

from abc import ABC
from collections.abc import Hashable
from dataclasses import FrozenInstanceError, dataclass, field
from datetime import UTC, datetime
from typing import Generic, Protocol, Self, TypeVar, runtime_checkable
from uuid import UUID, uuid4

from .exceptions import InvalidArgumentError, InvariantViolationError
from .value_object import ValueObject

NIL_UUID = UUID(int=0)


@runtime_checkable
class SupportsUniversalId(Protocol):
    """Identifier that can project itself onto the universal UUID form."""

    def to_uuid(self) -> UUID: ...


@dataclass(frozen=True, eq=False)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs are value objects that wrap a UUID.
    They provide type safety to prevent mixing up IDs of different entities.
    The nil UUID is the empty id of a not-yet-persisted entity.

    Example:
        @dataclass(frozen=True, eq=False)
        class UserProfileId(EntityId):
            pass

        profile_id = UserProfileId.generate()
        # UserProfileId(x) != BallotId(x): different types never compare equal
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise InvalidArgumentError(
                f"{self.__class__.__name__} must wrap a UUID", field="value", value=self.value
            )

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Return a fresh random identifier."""
        return cls(uuid4())

    @classmethod
    def empty(cls) -> Self:
        """Return the empty (transient) identifier."""
        return cls(NIL_UUID)

    @property
    def is_empty(self) -> bool:
        return self.value == NIL_UUID

    def to_uuid(self) -> UUID:
        return self.value

    def to_primitive(self) -> str:
        """Convert to primitive for serialization."""
        return str(self.value)


def is_transient_id(value: object) -> bool:
    """
    Tell whether an identifier is empty, i.e. the entity is not yet persisted.

    ``None``, the nil UUID, an ``EntityId`` wrapping it, a blank string
    and ``0`` all count as empty.
    """
    if value is None:
        return True
    if isinstance(value, EntityId):
        return value.is_empty
    if isinstance(value, UUID):
        return value == NIL_UUID
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, int):
        return value == 0
    return False


def to_universal_id(value: object) -> UUID:
    """
    Project an identifier onto the universal UUID form.

    UUIDs pass through, ``SupportsUniversalId`` implementations convert
    themselves and strings are parsed. Anything else fails fast: identifier
    types that are not naturally UUIDs (composite keys, counters) must
    implement ``to_uuid()``.

    Raises:
        InvalidArgumentError: If the identifier cannot be converted
    """
    if isinstance(value, UUID):
        return value
    if isinstance(value, SupportsUniversalId):
        return value.to_uuid()
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError as err:
            raise InvalidArgumentError(
                "Identifier is not a valid UUID", field="id", value=value
            ) from err
    raise InvalidArgumentError(
        f"{type(value).__name__} cannot be converted to a UUID, implement to_uuid()",
        field="id",
        value=value,
    )


IdType = TypeVar("IdType", bound=Hashable)

# Assigned by __init__, then only through the lifecycle operations
_LIFECYCLE_FIELDS = frozenset(
    {
        "id",
        "created_at",
        "created_by",
        "updated_at",
        "updated_by",
        "version",
        "is_deleted",
        "deleted_at",
        "deleted_by",
    }
)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Versioned (every update bumps ``version`` by exactly one)
    - Soft deletable (deleted entities keep their audit history and can be restored)

    The identifier and the lifecycle fields are assigned once at construction;
    afterwards only ``mark_updated``, ``mark_deleted`` and ``restore`` change
    them, and a direct assignment raises ``FrozenInstanceError``.

    Base fields are keyword-only so subclasses can declare their own
    positional fields. Subclasses must be decorated with @dataclass(eq=False)
    to keep identity equality, and must call ``super().__post_init__()`` if
    they define their own ``__post_init__``.
    """

    id: IdType
    created_at: datetime = field(default_factory=_utc_now)
    created_by: UUID | None = None
    updated_at: datetime | None = None
    updated_by: UUID | None = None
    version: int = 1
    is_deleted: bool = False
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    def __post_init__(self) -> None:
        """Validate lifecycle invariants (relevant when rehydrating from storage)."""
        if self.version < 1:
            raise InvariantViolationError(self.__class__.__name__, "version must be at least 1")
        if not self.is_deleted and (self.deleted_at is not None or self.deleted_by is not None):
            raise InvariantViolationError(
                self.__class__.__name__, "deletion audit fields are set but entity is not deleted"
            )

    def __setattr__(self, name: str, value: object) -> None:
        if name in _LIFECYCLE_FIELDS and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    def _apply_lifecycle(self, **changes: object) -> None:
        for name, value in changes.items():
            object.__setattr__(self, name, value)

    @property
    def is_transient(self) -> bool:
        """Whether this entity has no real identifier yet."""
        return is_transient_id(self.id)

    def mark_updated(self, actor: UUID | None = None) -> None:
        """Stamp the update audit fields and bump the version."""
        self._apply_lifecycle(updated_at=_utc_now(), updated_by=actor, version=self.version + 1)

    def mark_deleted(self, actor: UUID | None = None) -> None:
        """
        Soft delete the entity.

        Deleting an already deleted entity does nothing, so the version
        is bumped once per actual deletion.
        """
        if self.is_deleted:
            return

        self._apply_lifecycle(is_deleted=True, deleted_at=_utc_now(), deleted_by=actor)
        self.mark_updated(actor)

    def restore(self, actor: UUID | None = None) -> None:
        """Undo a soft delete. Restoring a live entity does nothing."""
        if not self.is_deleted:
            return

        self._apply_lifecycle(is_deleted=False, deleted_at=None, deleted_by=None)
        self.mark_updated(actor)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Entity) or type(other) is not type(self):
            return False
        # Transient entities are never equal to another instance
        if self.is_transient or other.is_transient:
            return False
        return bool(self.id == other.id)

    def __hash__(self) -> int:
        return hash(self.id)
