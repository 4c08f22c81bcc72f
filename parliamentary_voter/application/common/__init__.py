"""
Application common module.

Contains base classes for the application layer:
- UnitOfWork: Transaction boundary that dispatches domain events after commit
"""

from .unit_of_work import EventHandler, UnitOfWork

__all__ = [
    "EventHandler",
    "UnitOfWork",
]
