"""
Record search specifications

Concrete specifications used by filtered listings.
"""

from typing import Any

from sqlalchemy import String, cast, inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, RelationshipProperty

from constants import ColumnType
from exceptions import QueryBuildError
from .specifications import Specification


def entity_name_of(target: Any) -> str:
    """Class name behind a mapped class or an aliased entity."""
    return sa_inspect(target).mapper.class_.__name__


def resolve_attribute(target: Any, name: str, kind: type = ColumnProperty):
    """
    Look up a mapped attribute on a class or aliased entity.

    Args:
        target: Mapped class or aliased entity
        name: Attribute name
        kind: Required property type (ColumnProperty or RelationshipProperty)

    Returns:
        The instrumented attribute, usable in query expressions

    Raises:
        QueryBuildError: If no attribute of that kind exists
    """
    mapper = sa_inspect(target).mapper
    prop = mapper.attrs.get(name) if name else None
    if prop is None:
        raise QueryBuildError(entity_name_of(target), str(name))
    if not isinstance(prop, kind):
        expected = "relation" if kind is RelationshipProperty else "column"
        raise QueryBuildError(
            entity_name_of(target),
            name,
            f'"{name}" on entity "{entity_name_of(target)}" is not a {expected}'
        )
    return getattr(target, name)


class ColumnContainsSpec(Specification[Any]):
    """
    Case-sensitive substring match of a search term against one column.

    Numeric columns are cast to text first so "4" matches 42.
    """

    def __init__(self, column_name: str, term: str, column_type: str = ColumnType.STRING.value):
        """
        Initialize specification.

        Args:
            column_name: Entity attribute to match
            term: Substring to look for
            column_type: Declared column type ('string' or 'number')
        """
        self.column_name = column_name
        self.term = term or ""
        self.column_type = column_type

    @property
    def is_numeric(self) -> bool:
        return self.column_type == ColumnType.NUMBER

    @property
    def pattern(self) -> str:
        return f"%{self.term}%"

    def is_satisfied_by(self, candidate: Any) -> bool:
        value = getattr(candidate, self.column_name, None)
        if value is None:
            return False
        return self.term in str(value)

    def to_sql_filter(self, target: Any):
        column = resolve_attribute(target, self.column_name)
        if self.is_numeric:
            return cast(column, String).like(self.pattern)
        return column.like(self.pattern)
