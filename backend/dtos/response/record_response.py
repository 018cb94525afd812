"""
Record Response DTOs

The response envelope is returned verbatim as the HTTP body, and its
status_code becomes the HTTP status.
"""

from pydantic import BaseModel, Field, validator
from typing import Generic, List, Optional, TypeVar

from constants import RequestMethod, ResponseStatus

T = TypeVar('T')


class ResponseModel(BaseModel, Generic[T]):
    """
    Uniform result wrapper.

    ``data`` is always None when ``status`` is FAILED.
    """

    status_code: int = Field(description="HTTP status code")
    status: ResponseStatus = Field(description="SUCCESS or FAILED")
    method: RequestMethod = Field(description="Operation verb")
    message: str = Field(description="Human readable outcome")
    data: Optional[T] = Field(None, description="Payload, null on failure")

    @validator("data", always=True)
    def validate_failed_has_no_data(cls, v, values):
        """A failed envelope never carries a payload."""
        if values.get("status") == ResponseStatus.FAILED and v is not None:
            raise ValueError("Failed responses cannot carry data")
        return v

    @classmethod
    def success(cls, status_code: int, method: RequestMethod, message: str, data=None) -> "ResponseModel":
        return cls(
            status_code=status_code,
            status=ResponseStatus.SUCCESS,
            method=method,
            message=message,
            data=data
        )

    @classmethod
    def failure(cls, status_code: int, method: RequestMethod, message: str) -> "ResponseModel":
        return cls(
            status_code=status_code,
            status=ResponseStatus.FAILED,
            method=method,
            message=message,
            data=None
        )

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS


class QueryResult(BaseModel, Generic[T]):
    """One page of a filtered listing plus the total match count."""

    count: int = Field(description="Total rows matching the filter, ignoring paging")
    list: List[T] = Field(default_factory=list, description="Rows on the requested page")
