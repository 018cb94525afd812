"""
Custom exception classes for the application.

Record services never let these escape: they are caught at the service
boundary and turned into failure envelopes. They exist so the repository,
mapper and query builder can report failures with clear messages.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, key: str | None = None):
        details = {"key": key} if key else {}
        super().__init__(message, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)


class RecordNotFoundError(DatabaseError):
    """Raised when a lookup by identifier matches no row"""

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(
            "find_by_id",
            f'Could not find any entity of type "{entity}" matching id: {record_id}'
        )


class QueryBuildError(ApplicationError):
    """Raised when a filter references a column or relation the entity doesn't have"""

    def __init__(self, entity: str, attribute: str, message: str | None = None):
        details = {"entity": entity, "attribute": attribute}
        msg = message or f'Entity "{entity}" has no attribute "{attribute}"'
        super().__init__(msg, details)


class MappingError(ApplicationError):
    """Raised when plain data cannot be coerced into the requested shape"""

    def __init__(self, target: str, message: str):
        details = {"target": target}
        super().__init__(message, details)
