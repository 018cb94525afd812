"""
Mapping layer between plain data, entities and transfer objects.
"""

from .object_mapper import ObjectMapper, EntityCodec, TransferCodec, wrap_references, is_entity_class

__all__ = [
    "ObjectMapper",
    "EntityCodec",
    "TransferCodec",
    "wrap_references",
    "is_entity_class",
]
