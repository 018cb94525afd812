"""
Object Mapping

Converts between plain data (dicts, lists) and typed instances, in both
directions:

- plain -> entity: schema-driven from the SQLAlchemy mapper. Relationship
  values arrive as references ({"id": 5} or a list of them) and are resolved
  into persistent rows through a reference loader.
- entity -> transfer object: a flat projection. Columns are copied as-is and
  relationships collapse to their ids, unless the caller asked for a
  relation to be included, in which case the related row is nested.

Codecs are looked up in an explicit table keyed by target class, so a
specific entity or DTO can override the default behaviour with register().
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

from exceptions import MappingError

logger = logging.getLogger(__name__)

Codec = Callable[[Any], Any]
ReferenceLoader = Callable[[type, Any], Any]


def is_entity_class(target: Any) -> bool:
    """True for SQLAlchemy mapped classes."""
    return isinstance(target, type) and sa_inspect(target, raiseerr=False) is not None


def wrap_references(data: Mapping, relational_fields: Iterable[str]) -> Dict[str, Any]:
    """
    Replace relational identifiers with reference shapes.

    ``{"department": 5}`` becomes ``{"department": {"id": 5}}`` and
    ``{"skills": [1, 2]}`` becomes ``{"skills": [{"id": 1}, {"id": 2}]}``.
    Nested rows, as returned by a listing with included relations, are
    reduced to their id. Fields that are absent or None are left alone, and
    other falsy identifiers (0, "") become None. Returns a new dict; the
    input is not modified.

    Args:
        data: Plain payload (typically a dumped transfer object)
        relational_fields: Field names that hold identifiers

    Returns:
        Copy of data with references in place of identifiers
    """
    mapped = dict(data)
    for key in relational_fields:
        value = mapped.get(key)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            mapped[key] = [_reference_to(item) for item in value]
        elif not value:
            mapped[key] = None
        else:
            mapped[key] = _reference_to(value)
    return mapped


def _reference_to(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return {"id": value.get("id")}
    return {"id": value}


class EntityCodec:
    """Builds entity instances from plain mappings using the model's mapper."""

    def __init__(self, model: type, reference_loader: Optional[ReferenceLoader] = None):
        mapper = sa_inspect(model)
        self.model = model
        self.columns = {attr.key for attr in mapper.column_attrs}
        self.relationships = {rel.key: rel for rel in mapper.relationships}
        self.reference_loader = reference_loader

    def __call__(self, data: Any) -> Any:
        if isinstance(data, self.model):
            return data
        if not isinstance(data, Mapping):
            raise MappingError(
                self.model.__name__,
                f"Cannot build {self.model.__name__} from {type(data).__name__}"
            )

        instance = self.model()
        for key, value in data.items():
            if key in self.columns:
                setattr(instance, key, value)
            elif key in self.relationships:
                setattr(instance, key, self._resolve(self.relationships[key], value))
            else:
                logger.debug(f"Ignoring unknown field '{key}' for {self.model.__name__}")
        return instance

    def _resolve(self, relationship, value: Any) -> Any:
        target = relationship.mapper.class_
        if relationship.uselist:
            if value is None:
                return []
            if not isinstance(value, (list, tuple)):
                value = [value]
            return [self._reference(target, item) for item in value]

        if isinstance(value, (list, tuple)):
            raise MappingError(
                self.model.__name__,
                f"'{relationship.key}' holds a single {target.__name__}, got a list"
            )
        if value is None:
            return None
        return self._reference(target, value)

    def _reference(self, target: type, value: Any) -> Any:
        if isinstance(value, target):
            return value
        ref_id = value.get("id") if isinstance(value, Mapping) else value
        if ref_id is None:
            raise MappingError(self.model.__name__, f"Reference to {target.__name__} has no id")
        if self.reference_loader is None:
            raise MappingError(
                self.model.__name__,
                f"No reference loader configured to resolve {target.__name__} id: {ref_id}"
            )
        return self.reference_loader(target, ref_id)


class TransferCodec:
    """Validates plain mappings (or attribute-bearing objects) into a pydantic model."""

    def __init__(self, dto_class: type):
        self.dto_class = dto_class

    def __call__(self, data: Any) -> Any:
        if isinstance(data, self.dto_class):
            return data
        if isinstance(data, Mapping):
            return self.dto_class.model_validate(data)
        return self.dto_class.model_validate(data, from_attributes=True)


class ObjectMapper:
    """
    Codec table keyed by target class.

    Usage:
        mapper = ObjectMapper(reference_loader=repo.get_reference)
        employee = mapper.to_instance(Employee, {"name": "Ada", "department": {"id": 1}})
        dto = mapper.to_dto(EmployeeDTO, employee)
    """

    def __init__(self, reference_loader: Optional[ReferenceLoader] = None):
        self.reference_loader = reference_loader
        self._codecs: Dict[type, Codec] = {}

    def register(self, target: type, codec: Codec) -> None:
        """Use ``codec`` for every conversion into ``target``."""
        self._codecs[target] = codec

    def codec_for(self, target: type) -> Codec:
        codec = self._codecs.get(target)
        if codec is not None:
            return codec

        if is_entity_class(target):
            codec = EntityCodec(target, self.reference_loader)
        elif isinstance(target, type) and issubclass(target, BaseModel):
            codec = TransferCodec(target)
        else:
            raise MappingError(getattr(target, "__name__", str(target)), "No codec registered for target")

        self._codecs[target] = codec
        return codec

    def to_instance(self, target: type, data: Any) -> Any:
        """
        Coerce plain data into ``target`` instances.

        Args:
            target: Entity or transfer class
            data: A mapping, or a list of mappings

        Returns:
            One instance, or a list of instances when given a list
        """
        if data is None:
            return None
        codec = self.codec_for(target)
        if isinstance(data, (list, tuple)):
            return [codec(item) for item in data]
        return codec(data)

    def to_plain(self, entity: Any) -> Dict[str, Any]:
        """
        Shallow plain view of an entity.

        Columns are copied; relationships become references so the result
        can be fed straight back into to_instance().
        """
        mapper = sa_inspect(entity).mapper
        plain = {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}
        for rel in mapper.relationships:
            value = getattr(entity, rel.key)
            if rel.uselist:
                plain[rel.key] = [{"id": item.id} for item in (value or [])]
            else:
                plain[rel.key] = {"id": value.id} if value is not None else None
        return plain

    def project(self, entity: Any, include: Sequence[str] = ()) -> Dict[str, Any]:
        """
        Flat projection of an entity for transfer objects.

        Relationships collapse to ids; names in ``include`` are nested as
        plain rows (their columns only).
        """
        mapper = sa_inspect(entity).mapper
        plain = {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}
        for rel in mapper.relationships:
            value = getattr(entity, rel.key)
            nested = rel.key in include
            if rel.uselist:
                plain[rel.key] = [_columns(item) if nested else item.id for item in (value or [])]
            elif value is None:
                plain[rel.key] = None
            else:
                plain[rel.key] = _columns(value) if nested else value.id
        return plain

    def to_dto(self, target: type, data: Any, include: Sequence[str] = ()) -> Any:
        """
        Map entities onto a transfer class.

        Args:
            target: Transfer (pydantic) class
            data: Entity, list of entities, or None
            include: Relations to nest instead of collapsing to ids

        Returns:
            Transfer instance(s), or None
        """
        if data is None:
            return None
        if isinstance(data, (list, tuple)):
            return [self.to_dto(target, item, include) for item in data]
        if is_entity_class(type(data)):
            data = self.project(data, include)
        return self.to_instance(target, data)


def _columns(entity: Any) -> Dict[str, Any]:
    mapper = sa_inspect(entity).mapper
    return {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}
