"""
Generic record repository used by the record services.

Adds the storage contract the services depend on (fail-fast lookups,
create/save/remove with ORM semantics, reference loading and the fluent
query builder) on top of BaseRepository.
"""

from typing import Any, List, Mapping, Type, TypeVar, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from constants import QUERY_ALIAS
from exceptions import RecordNotFoundError
from .base_repository import BaseRepository
from .query_builder import RecordQueryBuilder

T = TypeVar('T')


class RecordRepository(BaseRepository[T]):
    """Repository for any EntityBase model."""

    def __init__(self, db: Session, model: Type[T]):
        super().__init__(db, model)

    def find_all(self) -> List[T]:
        """
        Retrieve every row, ordered by id.

        Returns:
            List of model instances
        """
        return self.get_all()

    def find_by_id(self, id: Any) -> T:
        """
        Retrieve a row by primary key.

        Args:
            id: Primary key value

        Returns:
            Model instance

        Raises:
            RecordNotFoundError: If no row matches
        """
        obj = self.get_by_id(id)
        if obj is None:
            raise RecordNotFoundError(self.entity_name, id)
        return obj

    def create(self, data: Union[T, Mapping[str, Any]]) -> T:
        """
        Build a new, not yet persisted, row.

        Args:
            data: Model instance or a mapping of column values

        Returns:
            Transient model instance; pass it to save() to insert it
        """
        if isinstance(data, self.model):
            return data
        return self.model(**dict(data))

    def save(self, obj: T) -> T:
        """
        Insert or update a row.

        Transient rows without a primary key are inserted. Rows carrying a
        primary key are merged onto the stored row, so a freshly built
        instance can be used to update an existing record.

        Args:
            obj: Model instance

        Returns:
            The persistent instance held by the session
        """
        state = sa_inspect(obj)
        if state.transient and getattr(obj, 'id', None) is None:
            return self.add(obj)
        persistent = self.db.merge(obj)
        self.db.flush()
        return persistent

    def remove(self, obj: T) -> T:
        """
        Delete a row.

        Relations are loaded before the delete so the returned instance can
        still be projected.

        Args:
            obj: Persistent model instance

        Returns:
            The removed instance
        """
        for relationship in sa_inspect(obj).mapper.relationships:
            getattr(obj, relationship.key)
        self.delete(obj)
        return obj

    def get_reference(self, model: Type[Any], id: Any) -> Any:
        """
        Resolve a reference ``{"id": id}`` to the stored row.

        Used as the object mapper's reference loader.

        Raises:
            RecordNotFoundError: If the referenced row doesn't exist
        """
        obj = self.db.get(model, id)
        if obj is None:
            raise RecordNotFoundError(model.__name__, id)
        return obj

    def create_query_builder(self, alias: str = QUERY_ALIAS) -> RecordQueryBuilder:
        """Start a fluent filtered query over this repository's model."""
        return RecordQueryBuilder(self.db, self.model, alias)

