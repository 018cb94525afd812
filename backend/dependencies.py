"""
Dependency injection providers for FastAPI.

This module describes every managed entity kind once (RECORD_DEFINITIONS)
and provides factory functions that build a repository/service pair for a
request's database session.
"""

from typing import Callable, Dict

from sqlalchemy.orm import Session
from fastapi import Depends

from database import get_db
from dtos.internal import RecordDefinition
from dtos.transfer import DepartmentDTO, EmployeeDTO, SkillDTO
from exceptions import ConfigurationError
from models import Department, Employee, Skill
from repositories.record_repository import RecordRepository
from services.record_service import GenericRecordService


RECORD_DEFINITIONS: Dict[str, RecordDefinition] = {
    "departments": RecordDefinition(
        entity_class=Department,
        dto_class=DepartmentDTO,
        entity_name="Department",
    ),
    "skills": RecordDefinition(
        entity_class=Skill,
        dto_class=SkillDTO,
        entity_name="Skill",
    ),
    "employees": RecordDefinition(
        entity_class=Employee,
        dto_class=EmployeeDTO,
        entity_name="Employee",
        relational_fields=("department", "skills"),
    ),
}


def get_record_repository(db: Session, definition: RecordDefinition) -> RecordRepository:
    """
    Factory function for creating RecordRepository instances.

    Args:
        db: Database session
        definition: Entity kind to manage

    Returns:
        RecordRepository instance
    """
    return RecordRepository(db, definition.entity_class)


def build_record_service(db: Session, definition: RecordDefinition) -> GenericRecordService:
    """
    Build a record service for one entity kind on the given session.

    Args:
        db: Database session
        definition: Entity kind to manage

    Returns:
        GenericRecordService instance
    """
    return GenericRecordService(
        repository=get_record_repository(db, definition),
        relational_fields=definition.relational_fields,
        entity_class=definition.entity_class,
        dto_class=definition.dto_class,
        entity_name=definition.entity_name,
    )


def record_service_provider(resource: str) -> Callable[..., GenericRecordService]:
    """
    FastAPI dependency factory for the service managing ``resource``.

    Args:
        resource: Key in RECORD_DEFINITIONS (e.g. "employees")

    Returns:
        Dependency callable yielding a GenericRecordService

    Raises:
        ConfigurationError: If the resource isn't defined
    """
    definition = RECORD_DEFINITIONS.get(resource)
    if definition is None:
        raise ConfigurationError(f"No record definition for '{resource}'", key=resource)

    def get_service(db: Session = Depends(get_db)) -> GenericRecordService:
        return build_record_service(db, definition)

    return get_service
