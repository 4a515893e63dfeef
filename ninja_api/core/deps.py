from __future__ import annotations

from typing import Iterable, List, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ninja_api.core.errors import FieldError, ValidationError
from ninja_api.db.session import get_async_session
from ninja_api.schemas.common import MAX_PAGE, MAX_PAGE_SIZE, PageRequest, SortOrder
from ninja_api.services.mapper import SORTABLE_FIELDS
from ninja_api.services.ninja import NinjaService


# PUBLIC_INTERFACE
async def get_ninja_service(session: AsyncSession = Depends(get_async_session)) -> NinjaService:
    """Build a NinjaService bound to the request-scoped session."""
    return NinjaService(session)


# PUBLIC_INTERFACE
def get_page_request(
    page: int = Query(0, ge=0, le=MAX_PAGE, description="Zero-based page number"),
    size: int = Query(20, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    sort: Optional[List[str]] = Query(
        None,
        description="Sort criteria as property[,property...][,asc|desc]; repeat for multiple criteria.",
    ),
) -> PageRequest:
    """
    Bind the standard page/size/sort query parameters.

    Raises:
        ValidationError: a sort property is not a sortable field.
    """
    return PageRequest(page=page, size=size, sort=parse_sort(sort or []))


def parse_sort(params: Iterable[str]) -> List[SortOrder]:
    """
    Parse sort parameters such as "name", "name,desc" or "village,name,asc".

    A trailing asc/desc token applies to every property of the same parameter.
    """
    orders: List[SortOrder] = []
    errors: List[FieldError] = []
    for param in params:
        tokens = [t.strip() for t in param.split(",") if t.strip()]
        descending = False
        if tokens and tokens[-1].lower() in ("asc", "desc"):
            descending = tokens.pop().lower() == "desc"
        for token in tokens:
            attribute = SORTABLE_FIELDS.get(token)
            if attribute is None:
                errors.append(FieldError(field="sort", message=f"Unknown sort property '{token}'"))
                continue
            orders.append(SortOrder(property=attribute, descending=descending))
    if errors:
        raise ValidationError(errors)
    return orders
