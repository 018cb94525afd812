"""
Request DTOs

DTOs for incoming requests: the envelope that carries a transfer object
into create/update, and the filter request used for paginated search.
"""

from .record_request import RequestModel, QueryCondition, PageRequest, QueryFilter, QueryRequest

__all__ = [
    "RequestModel",
    "QueryCondition",
    "PageRequest",
    "QueryFilter",
    "QueryRequest",
]
