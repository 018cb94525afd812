"""
Response DTOs

The uniform envelope every record operation returns, and the page wrapper
used by filtered queries.
"""

from .record_response import ResponseModel, QueryResult

__all__ = ["ResponseModel", "QueryResult"]
