"""
Specification Pattern Implementation

Search predicates are expressed as specifications so the query builder can
combine them with AND, OR and NOT without knowing what each one checks.

Every specification renders itself against an aliased entity, so the same
predicate works whatever alias the query uses for the root table.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, or_, not_


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single query criterion.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check an in-memory object against this specification.

        Args:
            candidate: Object to check

        Returns:
            True if candidate satisfies specification
        """
        pass

    @abstractmethod
    def to_sql_filter(self, target: Any):
        """
        Convert specification to a SQLAlchemy filter expression.

        Args:
            target: Mapped class or aliased entity the columns are read from

        Returns:
            SQLAlchemy filter expression
        """
        pass

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Specification that combines two specifications with AND."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self, target: Any):
        return and_(self.left.to_sql_filter(target), self.right.to_sql_filter(target))


class OrSpecification(Specification[T]):
    """Specification that combines two specifications with OR."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self, target: Any):
        return or_(self.left.to_sql_filter(target), self.right.to_sql_filter(target))


class NotSpecification(Specification[T]):
    """Specification that negates another specification."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self, target: Any):
        return not_(self.spec.to_sql_filter(target))
