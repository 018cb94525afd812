"""
Internal Record Definition DTO

Bundles everything a generic record service needs to know about one
entity kind.
"""

from dataclasses import dataclass
from typing import Tuple, Type


@dataclass(frozen=True)
class RecordDefinition:
    """
    Internal DTO describing one managed entity kind.

    Used by the dependency factories to build repository/service pairs.
    """

    entity_class: Type
    dto_class: Type
    entity_name: str
    relational_fields: Tuple[str, ...] = ()
