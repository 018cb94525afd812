"""
Application-wide constants.

This module centralizes the status codes, tags and message prefixes used by
the record services so envelopes look the same for every entity kind.
"""
from enum import Enum


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400

    # Server Errors
    INTERNAL_SERVER_ERROR = 500


class ResponseStatus(str, Enum):
    """Short status tag carried by every response envelope."""

    SUCCESS = 'SUCCESS'
    FAILED = 'FAILED'


class RequestMethod(str, Enum):
    """Operation verb reported back in the response envelope."""

    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'


class ResponseMessage:
    """Fixed message prefixes; details are appended to these."""

    SUCCESS = 'Successfully processed the request. '
    FAILED = 'Error occured while interacting with database. '


class ColumnType(str, Enum):
    """
    Declared type of a searchable column.

    NUMBER columns are cast to text before substring matching so partial
    numbers can be searched ("4" matches 42).
    """

    STRING = 'string'
    NUMBER = 'number'


class SortDirection(str, Enum):
    """Ordering direction for filtered queries"""

    ASC = 'ASC'
    DESC = 'DESC'


# Alias the root entity gets inside generated queries
QUERY_ALIAS = 'object'
