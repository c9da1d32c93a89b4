"""
Base Domain Classes

- ValueObject: immutable objects compared by value
- DomainError: root of the errors raised by domain services
- InvalidStatusTransition: a lifecycle change that is not allowed
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class DomainError(Exception):
    """Base class for business rule violations raised by services."""

    default_message = "Operation is not allowed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidStatusTransition(DomainError):
    """Raised when an entity cannot move from its current status to the requested one."""

    def __init__(self, current: str, target: str, entity: str = "Record"):
        self.current = current
        self.target = target
        super().__init__(f"{entity} cannot change status from '{current}' to '{target}'.")
