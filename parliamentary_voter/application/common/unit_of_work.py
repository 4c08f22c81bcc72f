"""
Unit of Work interface.

The Unit of Work pattern maintains a list of aggregates affected by a business
transaction, coordinates writing out their changes and, once the write has
committed, drains the domain events they staged and hands them to the
registered handlers.

Example:
    class CastBallotHandler:
        def __init__(self, repo: BallotRepository, uow: UnitOfWork) -> None:
            self._repo = repo
            self._uow = uow

        def handle(self, command: CastBallot) -> None:
            with self._uow:
                ballot = self._repo.get(command.ballot_id)
                self._uow.track(ballot)
                ballot.cast(command.voter_id)
                self._repo.save(ballot)
                self._uow.commit()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

import structlog

from parliamentary_voter.domain.common import (
    DomainEvent,
    InvalidArgumentError,
    TypedAggregateRoot,
)

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    The Unit of Work:
    - Manages the storage transaction (``_commit`` / ``_rollback``)
    - Ensures atomicity of operations
    - Drains staged domain events exactly once, after a successful commit
    - Can be used as a context manager

    Storage-backed implementations are provided by consumers. They are also
    where optimistic concurrency is enforced: compare each aggregate's
    ``version`` with the stored one at write time and refuse the write on
    mismatch.
    """

    def __init__(self) -> None:
        self._tracked: list[TypedAggregateRoot[Any]] = []
        self._handlers: list[EventHandler] = []

    @abstractmethod
    def _commit(self) -> None:
        """Persist all changes made within the unit of work."""
        raise NotImplementedError

    @abstractmethod
    def _rollback(self) -> None:
        """Discard all changes made within the unit of work."""
        raise NotImplementedError

    def track(self, aggregate: TypedAggregateRoot[Any]) -> None:
        """
        Register an aggregate whose events must be dispatched on commit.

        Tracking the same instance twice has no effect.

        Raises:
            InvalidArgumentError: If aggregate is None
        """
        if aggregate is None:
            raise InvalidArgumentError("Aggregate cannot be null", field="aggregate")
        if not any(tracked is aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def register_event_handler(self, handler: EventHandler) -> None:
        """Register a handler to be called for every event dispatched after commit."""
        self._handlers.append(handler)

    def commit(self) -> None:
        """
        Commit the current transaction, then dispatch staged events.

        Events are drained from the aggregates before any handler runs, so a
        failing handler does not cause them to be dispatched twice. Handler
        errors propagate to the caller.
        """
        self._commit()

        events = self.collect_events()
        for event in events:
            for handler in self._handlers:
                handler(event)

        logger.info(
            "domain_events_dispatched",
            event_count=len(events),
            handler_count=len(self._handlers),
        )

    def rollback(self) -> None:
        """Rollback the current transaction and drop the events staged during it."""
        self._rollback()

        discarded = self.collect_events()
        if discarded:
            logger.warning("domain_events_discarded", event_count=len(discarded))

    def collect_events(self) -> list[DomainEvent]:
        """
        Drain domain events from tracked aggregates and stop tracking them.

        Events come out aggregate by aggregate in tracking order, each
        aggregate's events in the order they were raised.
        """
        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()
        return events

    def __enter__(self) -> Self:
        """Enter the unit of work context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """
        Exit the unit of work context.

        If an exception occurred, rollback. Otherwise, do nothing
        (commit must be called explicitly).
        """
        if exc_type is not None:
            self.rollback()
