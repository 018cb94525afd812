"""
Record Request DTOs

Envelopes for create/update payloads and the paginated search request.
"""

from pydantic import BaseModel, Field, validator
from typing import Generic, List, Optional, TypeVar

from config.app_config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from constants import ColumnType, SortDirection

T = TypeVar('T')


class RequestModel(BaseModel, Generic[T]):
    """
    Request envelope wrapping a transfer object.

    Used as the body of create and update calls.
    """

    data: T = Field(description="Transfer object payload")


class QueryCondition(BaseModel):
    """A column the search term is matched against."""

    column_name: str = Field(description="Entity attribute to search")
    column_type: str = Field(
        ColumnType.STRING.value,
        description="Declared column type; 'number' columns are cast to text before matching"
    )


class PageRequest(BaseModel):
    """Page selector, 1-based."""

    page_number: int = Field(1, description="1-based page number")
    page_size: int = Field(DEFAULT_PAGE_SIZE, description="Rows per page")

    @validator("page_number")
    def validate_page_number(cls, v):
        """Pages start at 1."""
        if v < 1:
            raise ValueError("Page number must be at least 1")
        return v

    @validator("page_size")
    def validate_page_size(cls, v):
        """Ensure page size is within reasonable bounds."""
        if v < 1 or v > MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        return v


class QueryFilter(BaseModel):
    """Search, ordering and paging for a filtered listing."""

    page: PageRequest = Field(default_factory=PageRequest)
    search_term: str = Field("", description="Substring matched against every condition column")
    order_by_field: str = Field("id", description="Entity attribute to order by")
    order_by: str = Field(SortDirection.ASC.value, description="ASC or DESC")
    conditions: List[QueryCondition] = Field(default_factory=list)


class QueryRequest(BaseModel):
    """
    Request DTO for the filtered, paginated listing.

    ``children`` names relations to eagerly include in each returned row.
    """

    filter: QueryFilter = Field(default_factory=QueryFilter)
    children: Optional[List[str]] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "filter": {
                    "page": {"page_number": 2, "page_size": 10},
                    "search_term": "foo",
                    "order_by_field": "name",
                    "order_by": "ASC",
                    "conditions": [
                        {"column_name": "name", "column_type": "string"},
                        {"column_name": "age", "column_type": "number"}
                    ]
                },
                "children": ["department"]
            }
        }
