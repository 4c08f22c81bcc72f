"""Pytest configuration, fixtures and domain doubles shared by the test suite."""

from collections.abc import Generator
from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest
import structlog

from parliamentary_voter.domain.common import (
    AggregateRoot,
    DomainEvent,
    Entity,
    EntityId,
    TypedAggregateRoot,
    TypedDomainEvent,
)
from parliamentary_voter.domain.identity import Province, UserProfile


@dataclass(frozen=True, eq=False)
class BallotId(EntityId):
    """Typed identifier of the test aggregate."""


@dataclass(frozen=True, eq=False)
class BallotCast(TypedDomainEvent[BallotId]):
    choice: str


@dataclass(eq=False)
class Ballot(TypedAggregateRoot[BallotId]):
    """Aggregate with a typed id."""

    riding: str
    choice: str | None = None

    def cast(self, choice: str, voter_id: UUID | None = None) -> None:
        self.choice = choice
        self.mark_updated(voter_id)
        self.raise_event(
            BallotCast(
                choice,
                typed_aggregate_id=self.id,
                aggregate_type="Ballot",
                user_id=voter_id,
            )
        )


@dataclass(frozen=True, eq=False)
class PollOpened(DomainEvent):
    title: str


@dataclass(frozen=True, eq=False)
class PollClosed(DomainEvent):
    event_version = 2


@dataclass(eq=False)
class Poll(AggregateRoot):
    """Aggregate identified by a plain UUID."""

    title: str
    is_open: bool = False

    def open(self, actor: UUID | None = None) -> None:
        self.is_open = True
        self.mark_updated(actor)
        self.raise_event(PollOpened(self.title, aggregate_id=self.id, aggregate_type="Poll"))

    def close(self, actor: UUID | None = None) -> None:
        self.is_open = False
        self.mark_updated(actor)
        self.raise_event(PollClosed(aggregate_id=self.id, aggregate_type="Poll"))


@dataclass(eq=False)
class Riding(Entity[UUID]):
    name: str


@dataclass(eq=False)
class PollingStation(Entity[UUID]):
    name: str


def create_test_profile(province_code: str = "ON", **overrides: object) -> UserProfile:
    """Create a valid profile for tests; keyword overrides replace create() arguments."""
    arguments: dict[str, object] = {
        "user_id": uuid4(),
        "first_name": "Jane",
        "last_name": "Doe",
        "province": Province.create(province_code),
    }
    arguments.update(overrides)
    return UserProfile.create(**arguments)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
