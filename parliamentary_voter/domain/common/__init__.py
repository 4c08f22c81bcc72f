"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity, audit metadata, versioning and soft delete
- AggregateRoot: Consistency boundaries that stage domain events
- DomainEvent: Notifications of significant domain occurrences
"""

from .aggregate_root import AggregateRoot, TypedAggregateRoot
from .domain_event import DomainEvent, TypedDomainEvent
from .entity import (
    NIL_UUID,
    Entity,
    EntityId,
    SupportsUniversalId,
    is_transient_id,
    to_universal_id,
)
from .exceptions import (
    DomainError,
    InvalidArgumentError,
    InvariantViolationError,
    ValidationError,
)
from .value_object import ValueObject

__all__ = [
    "NIL_UUID",
    "AggregateRoot",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "InvalidArgumentError",
    "InvariantViolationError",
    "SupportsUniversalId",
    "TypedAggregateRoot",
    "TypedDomainEvent",
    "ValidationError",
    "ValueObject",
    "is_transient_id",
    "to_universal_id",
]
