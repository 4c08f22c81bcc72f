"""Tests for the UnitOfWork event dispatch."""

import pytest
from structlog.testing import capture_logs

from parliamentary_voter.application.common import UnitOfWork
from parliamentary_voter.domain.common import DomainEvent, InvalidArgumentError
from tests.conftest import Ballot, BallotCast, BallotId, Poll, PollClosed, PollOpened


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work that only records transaction calls."""

    def __init__(self, fail_on_commit: bool = False) -> None:
        super().__init__()
        self.fail_on_commit = fail_on_commit
        self.committed = 0
        self.rolled_back = 0

    def _commit(self) -> None:
        if self.fail_on_commit:
            raise RuntimeError("storage unavailable")
        self.committed += 1

    def _rollback(self) -> None:
        self.rolled_back += 1


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest.fixture
def received(uow: InMemoryUnitOfWork) -> list[DomainEvent]:
    events: list[DomainEvent] = []
    uow.register_event_handler(events.append)
    return events


class TestCommit:
    def test_dispatches_events_in_order(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        ballot = Ballot("Ottawa Centre", id=BallotId.generate())
        uow.track(poll)
        uow.track(ballot)
        poll.open()
        ballot.cast("yea")
        poll.close()

        uow.commit()

        assert uow.committed == 1
        assert [type(e) for e in received] == [PollOpened, PollClosed, BallotCast]
        assert not poll.has_uncommitted_events
        assert not ballot.has_uncommitted_events

    def test_events_are_dispatched_once(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()

        uow.commit()
        uow.commit()

        assert len(received) == 1
        assert uow.committed == 2

    def test_tracking_twice_has_no_effect(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        uow.track(poll)
        uow.track(poll)
        poll.open()

        uow.commit()

        assert len(received) == 1

    def test_every_handler_sees_every_event(self, uow: InMemoryUnitOfWork) -> None:
        first: list[DomainEvent] = []
        second: list[DomainEvent] = []
        uow.register_event_handler(first.append)
        uow.register_event_handler(second.append)
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()

        uow.commit()

        assert len(first) == 1
        assert first == second

    def test_failed_commit_keeps_events(self) -> None:
        received: list[DomainEvent] = []
        uow = InMemoryUnitOfWork(fail_on_commit=True)
        uow.register_event_handler(received.append)
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()

        with pytest.raises(RuntimeError, match="storage unavailable"):
            uow.commit()

        assert received == []
        assert poll.uncommitted_event_count == 1

    def test_handler_error_propagates_after_drain(self, uow: InMemoryUnitOfWork) -> None:
        def failing(event: DomainEvent) -> None:
            raise ValueError("handler failed")

        uow.register_event_handler(failing)
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()

        with pytest.raises(ValueError, match="handler failed"):
            uow.commit()

        assert not poll.has_uncommitted_events

    def test_track_none_fails(self, uow: InMemoryUnitOfWork) -> None:
        with pytest.raises(InvalidArgumentError, match="Aggregate cannot be null"):
            uow.track(None)  # type: ignore[arg-type]

    def test_commit_logs_dispatch(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()
        poll.close()

        with capture_logs() as logs:
            uow.commit()

        assert logs == [
            {
                "event": "domain_events_dispatched",
                "log_level": "info",
                "event_count": 2,
                "handler_count": 1,
            }
        ]


class TestRollback:
    def test_rollback_discards_events(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()

        with capture_logs() as logs:
            uow.rollback()

        assert uow.rolled_back == 1
        assert received == []
        assert not poll.has_uncommitted_events
        assert logs == [
            {"event": "domain_events_discarded", "log_level": "warning", "event_count": 1}
        ]

    def test_rollback_without_events_is_quiet(self, uow: InMemoryUnitOfWork) -> None:
        with capture_logs() as logs:
            uow.rollback()

        assert uow.rolled_back == 1
        assert logs == []

    def test_commit_after_rollback_dispatches_nothing(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")
        uow.track(poll)
        poll.open()
        uow.rollback()

        uow.commit()

        assert received == []


class TestContextManager:
    def test_exception_rolls_back(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")

        with pytest.raises(RuntimeError), uow:
            uow.track(poll)
            poll.open()
            raise RuntimeError("boom")

        assert uow.rolled_back == 1
        assert uow.committed == 0
        assert received == []
        assert not poll.has_uncommitted_events

    def test_clean_exit_does_not_commit(self, uow: InMemoryUnitOfWork) -> None:
        with uow as entered:
            assert entered is uow

        assert uow.committed == 0
        assert uow.rolled_back == 0

    def test_explicit_commit_inside_block(
        self, uow: InMemoryUnitOfWork, received: list[DomainEvent]
    ) -> None:
        poll = Poll("Budget 2025")

        with uow:
            uow.track(poll)
            poll.open()
            uow.commit()

        assert len(received) == 1
        assert uow.rolled_back == 0
