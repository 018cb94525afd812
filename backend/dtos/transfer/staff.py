"""
Staff Directory Transfer DTOs
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

# A relation is carried as its id, or as the nested row when eagerly included
RelationRef = Union[int, Dict[str, Any]]


class DepartmentDTO(BaseModel):
    id: Optional[int] = Field(None, description="Department ID")
    name: Optional[str] = Field(None, description="Department name")
    code: Optional[str] = Field(None, description="Short unique code")

    class Config:
        from_attributes = True


class SkillDTO(BaseModel):
    id: Optional[int] = Field(None, description="Skill ID")
    name: Optional[str] = Field(None, description="Skill name")
    level: Optional[int] = Field(None, description="Proficiency level 1-5")

    class Config:
        from_attributes = True


class EmployeeDTO(BaseModel):
    """
    Transfer object for employees.

    ``department`` and ``skills`` are relational fields: clients send ids
    (or rows carrying an id) and receive ids back.
    """

    id: Optional[int] = Field(None, description="Employee ID")
    name: Optional[str] = Field(None, description="Full name")
    email: Optional[str] = Field(None, description="Unique email address")
    age: Optional[int] = Field(None, description="Age in years")
    department: Optional[RelationRef] = Field(None, description="Department id")
    skills: Optional[List[RelationRef]] = Field(None, description="Skill ids")

    class Config:
        from_attributes = True
