"""
Base classes for Aggregate Roots.

Aggregate Roots are the entry point to an aggregate - a cluster of domain
objects that are treated as a single unit. All external references should
go through the aggregate root, and all invariants are enforced here.

Example:
    @dataclass(eq=False)
    class Ballot(AggregateRoot):
        riding: str

        def cast(self, voter_id: UUID) -> None:
            self.mark_updated(voter_id)
            self.raise_event(BallotCast(aggregate_id=self.id, aggregate_type="Ballot"))
"""

from dataclasses import dataclass, field
from typing import Generic
from uuid import UUID, uuid4

from .domain_event import DomainEvent
from .entity import Entity, IdType, is_transient_id, to_universal_id
from .exceptions import InvalidArgumentError


@dataclass(eq=False, kw_only=True)
class TypedAggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots with a domain-specific identifier.

    Aggregate Roots are:
    - Entry point to an aggregate (cluster of related entities)
    - Responsible for maintaining invariants
    - The only entity referenced from outside the aggregate
    - The only objects that stage domain events

    Business methods validate and apply their state change first, then call
    ``raise_event``. Staged events are drained by the unit of work after the
    aggregate is persisted; the aggregate never clears them on its own.

    Subclasses supply their identifier type (an ``EntityId`` subclass, or
    anything implementing ``to_uuid()``) and may give ``id`` a
    ``default_factory`` to support zero-argument construction.
    """

    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if is_transient_id(self.id):
            raise InvalidArgumentError(
                "Aggregate root ID cannot be null or default", field="id", value=self.id
            )
        super().__post_init__()

    @property
    def universal_id(self) -> UUID:
        """Identifier as a UUID, for infrastructure that handles every aggregate alike."""
        return to_universal_id(self.id)

    def raise_event(self, event: DomainEvent) -> None:
        """
        Stage a domain event to be dispatched later.

        Raises:
            InvalidArgumentError: If event is None
        """
        if event is None:
            raise InvalidArgumentError("Domain event cannot be null", field="event")
        self._events.append(event)

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Return staged events in the order they were raised, without clearing them."""
        return tuple(self._events)

    @property
    def has_uncommitted_events(self) -> bool:
        return bool(self._events)

    @property
    def uncommitted_event_count(self) -> int:
        return len(self._events)

    def clear_domain_events(self) -> None:
        """Drop all staged events. Called by the dispatcher once they are handled."""
        self._events.clear()

    def collect_events(self) -> list[DomainEvent]:
        """
        Collect and clear all staged domain events.

        This is called by the application layer (Unit of Work)
        after persisting the aggregate.
        """
        events = self._events.copy()
        self._events.clear()
        return events


@dataclass(eq=False, kw_only=True)
class AggregateRoot(TypedAggregateRoot[UUID]):
    """
    Aggregate Root identified by a plain UUID.

    Constructed without an id it gets a fresh one (new aggregate); an id
    supplied when rehydrating from storage must not be the nil UUID.
    """

    id: UUID = field(default_factory=uuid4)
