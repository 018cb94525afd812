"""
Internal DTOs

DTOs for service-to-service communication within the backend.
These are not exposed to external APIs.
"""

from .record_definition import RecordDefinition

__all__ = ["RecordDefinition"]
