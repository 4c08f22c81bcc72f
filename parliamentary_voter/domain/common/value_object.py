"""
Base class for Value Objects.

Value Objects are immutable objects that are defined by their attributes
rather than by identity. Two value objects are equal if they have the same
type and the same ordered equality components.

Example:
    @dataclass(frozen=True, eq=False)
    class PostalCode(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if not self.value.strip():
                raise InvalidArgumentError("Postal code cannot be empty", field="value")
"""

from dataclasses import fields, is_dataclass


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Value Objects are:
    - Immutable (use frozen=True in dataclass)
    - Compared by value (the ordered equality components must match)
    - Self-validating (validation in __post_init__)

    Subclasses should be decorated with @dataclass(frozen=True, eq=False) so
    the comparison defined here is kept, and may override
    ``_equality_components`` to compare on a subset of their fields.
    """

    def _equality_components(self) -> tuple[object, ...]:
        """Return the values that define this object, in a stable order."""
        if is_dataclass(self):
            return tuple(getattr(self, f.name) for f in fields(self))
        return tuple(self.__dict__.values())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        components = other._equality_components()  # type: ignore[attr-defined]
        return bool(self._equality_components() == components)

    def __hash__(self) -> int:
        return hash((type(self).__name__, *self._equality_components()))

    def to_primitive(self) -> object:
        """
        Convert to primitive Python type for serialization.

        Override in subclasses if needed. Default returns
        the first attribute value for single-value VOs.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
