"""
Fluent query builder for filtered, paginated listings.

Wraps a SQLAlchemy query against an aliased entity. Calls only record what
was asked for; nothing touches the database until get_count() or
get_many(), and get_count() always ignores ordering, paging and eager
joins so the count reflects every row the filter matches.

Example:
    builder = repo.create_query_builder()
    builder.or_where(ColumnContainsSpec("name", "foo")) \
        .or_where(ColumnContainsSpec("age", "foo", "number")) \
        .order_by("name", "DESC")
    total = builder.get_count()
    rows = builder.offset(10).limit(10).left_join_and_select("department").get_many()
"""

import logging
from functools import reduce
from operator import or_
from typing import Any, List, Optional

from sqlalchemy.orm import Query, RelationshipProperty, Session, aliased, joinedload

from constants import QUERY_ALIAS, SortDirection
from exceptions import QueryBuildError
from .record_specifications import entity_name_of, resolve_attribute
from .specifications import Specification

logger = logging.getLogger(__name__)


class RecordQueryBuilder:
    """Builder over one entity, aliased for use in generated predicates."""

    def __init__(self, db: Session, model: type, alias: str = QUERY_ALIAS):
        """
        Initialize the builder.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
            alias: Name the root entity is given in the SQL
        """
        self.db = db
        self.model = model
        self.alias_name = alias
        self.alias = aliased(model, name=alias)
        self._conditions: List[Specification] = []
        self._order: List[Any] = []
        self._joins: List[Any] = []
        self._offset: Optional[int] = None
        self._limit: Optional[int] = None

    def or_where(self, spec: Specification) -> "RecordQueryBuilder":
        """OR a predicate into the filter."""
        # Render now so unknown columns fail at build time, not at execution
        spec.to_sql_filter(self.alias)
        self._conditions.append(spec)
        return self

    def order_by(self, field: str, direction: str = SortDirection.ASC.value) -> "RecordQueryBuilder":
        """
        Order by an entity column.

        Raises:
            QueryBuildError: Unknown column or direction other than ASC/DESC
        """
        normalized = (direction or SortDirection.ASC.value).upper()
        if normalized not in (SortDirection.ASC.value, SortDirection.DESC.value):
            raise QueryBuildError(
                entity_name_of(self.alias),
                field,
                f"Invalid order direction '{direction}', expected ASC or DESC"
            )
        column = resolve_attribute(self.alias, field)
        self._order = [column.desc() if normalized == SortDirection.DESC.value else column.asc()]
        if field != 'id':
            # Tie-break on id so pages don't overlap when the field has duplicates
            self._order.append(self.alias.id.asc())
        return self

    def left_join_and_select(self, path: str) -> "RecordQueryBuilder":
        """Eagerly load a relation with a LEFT OUTER JOIN."""
        relation = resolve_attribute(self.alias, path, RelationshipProperty)
        self._joins.append(relation)
        return self

    def offset(self, offset: int) -> "RecordQueryBuilder":
        self._offset = offset
        return self

    def limit(self, limit: int) -> "RecordQueryBuilder":
        self._limit = limit
        return self

    def condition(self) -> Optional[Specification]:
        """The recorded predicates OR-ed into one specification."""
        if not self._conditions:
            return None
        return reduce(or_, self._conditions)

    def filtered_query(self) -> Query:
        """Base query with the OR-ed predicates, nothing else."""
        query = self.db.query(self.alias)
        if self._conditions:
            query = query.filter(self.condition().to_sql_filter(self.alias))
        return query

    def build_query(self) -> Query:
        """Full query: filter, ordering, paging and eager joins."""
        query = self.filtered_query()
        if self._order:
            query = query.order_by(*self._order)
        for relation in self._joins:
            query = query.options(joinedload(relation))
        if self._offset:
            query = query.offset(self._offset)
        if self._limit is not None:
            query = query.limit(self._limit)
        return query

    def get_count(self) -> int:
        """Number of rows matching the filter, ignoring paging."""
        return self.filtered_query().count()

    def get_many(self) -> List[Any]:
        """Execute the full query."""
        query = self.build_query()
        logger.debug(f"Executing filtered query on {self.model.__name__}: {query.statement}")
        return query.all()
