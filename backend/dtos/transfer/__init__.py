"""
Transfer DTOs

Per-entity transfer objects. The same class is used for payloads coming in
and rows going out; relational fields hold identifiers (or nested rows when
a listing explicitly asked for them).
"""

from .staff import DepartmentDTO, SkillDTO, EmployeeDTO

__all__ = ["DepartmentDTO", "SkillDTO", "EmployeeDTO"]
