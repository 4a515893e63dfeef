from __future__ import annotations

from datetime import datetime
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")

# Range of the integer id and strength columns.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]

MAX_PAGE_SIZE = 1000
# page * size must fit a 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


class SortOrder(BaseModel):
    """One ORDER BY term, expressed with the model attribute name."""
    property: str = Field(..., description="Attribute to sort by")
    descending: bool = Field(False, description="Sort descending when true")


class PageRequest(BaseModel):
    """Pagination parameters: zero-based page number, page size and sort order."""
    page: int = Field(0, ge=0, le=MAX_PAGE, description="Zero-based page number")
    size: int = Field(20, ge=1, le=MAX_PAGE_SIZE, description="Number of records per page")
    sort: List[SortOrder] = Field(default_factory=list, description="Sort order, applied in sequence")

    @property
    def offset(self) -> int:
        return self.page * self.size


class PageMetadata(BaseModel):
    """Page metadata returned alongside page content."""
    size: int = Field(..., description="Requested page size")
    number: int = Field(..., description="Zero-based page number")
    total_elements: int = Field(..., description="Total records matching the query")
    total_pages: int = Field(..., description="Total number of pages")


# PUBLIC_INTERFACE
class PageResponse(BaseModel, Generic[T]):
    """Paged collection envelope."""
    content: List[T] = Field(default_factory=list, description="Records on this page")
    page: PageMetadata = Field(..., description="Page metadata")


class MessageResponse(BaseModel):
    """Standard message response."""
    message: str = Field(..., description="Human readable message")


class FieldErrorItem(BaseModel):
    """One violated constraint."""
    field: str = Field(..., description="Request field (wire name)")
    message: str = Field(..., description="Constraint violation message")


# PUBLIC_INTERFACE
class ProblemDetail(BaseModel):
    """Standardized API error envelope returned by exception handlers."""
    status: int = Field(..., description="HTTP status code")
    title: str = Field(..., description="Short summary of the problem")
    detail: Optional[str] = Field(default=None, description="Explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="Request path")
    errors: Optional[List[FieldErrorItem]] = Field(
        default=None, description="Field errors, present on validation failures only"
    )
    timestamp: datetime = Field(..., description="Error timestamp (UTC)")
