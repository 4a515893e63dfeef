from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from ninja_api.core.deps import get_ninja_service, get_page_request
from ninja_api.core.logging import stopwatch
from ninja_api.schemas.common import INT32_MAX, INT32_MIN, PageRequest, PageResponse, ProblemDetail
from ninja_api.schemas.ninja import NinjaCreate, NinjaQuery, NinjaRead, NinjaUpdate
from ninja_api.services import mapper
from ninja_api.services.ninja import NinjaService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ninjas", tags=["Ninjas"])

BAD_REQUEST_RESPONSE = {400: {"model": ProblemDetail, "description": "Invalid request data"}}
NOT_FOUND_RESPONSE = {404: {"model": ProblemDetail, "description": "Ninja not found"}}


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=NinjaRead,
    response_model_exclude_none=True,
    status_code=201,
    summary="Create ninja",
    description="Register a new ninja. All create-time validation rules apply.",
    responses={**BAD_REQUEST_RESPONSE},
)
async def create_ninja(
    payload: NinjaCreate,
    service: NinjaService = Depends(get_ninja_service),
) -> NinjaRead:
    with stopwatch(logger, "create ninja"):
        created = await service.create(payload)
        return mapper.record_to_response(created)


# PUBLIC_INTERFACE
@router.get(
    "/{ninja_id}",
    response_model=NinjaRead,
    response_model_exclude_none=True,
    summary="Get ninja",
    description="Get a ninja by id.",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE},
)
async def get_ninja(
    ninja_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX, description="Ninja id"),
    service: NinjaService = Depends(get_ninja_service),
) -> NinjaRead:
    with stopwatch(logger, f"get ninja {ninja_id}"):
        ninja = await service.find_by_id(ninja_id)
        return mapper.record_to_response(ninja)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=PageResponse[NinjaRead],
    response_model_exclude_none=True,
    summary="Search ninjas",
    description=(
        "List ninjas page by page. Every filter given is matched by equality and "
        "filters are combined with AND."
    ),
    responses={**BAD_REQUEST_RESPONSE},
)
async def search_ninjas(
    name: Optional[str] = Query(None, description="Filter by name"),
    village: Optional[str] = Query(None, description="Filter by village"),
    clan: Optional[str] = Query(None, description="Filter by clan"),
    rank: Optional[str] = Query(None, description="Filter by rank"),
    chakra_type: Optional[str] = Query(None, description="Filter by chakra type"),
    specialty: Optional[str] = Query(None, description="Filter by specialty"),
    kekkei_genkai: Optional[str] = Query(None, description="Filter by bloodline trait"),
    status: Optional[str] = Query(None, description="Filter by status"),
    strength_level: Optional[int] = Query(
        None, ge=INT32_MIN, le=INT32_MAX, description="Filter by strength level"
    ),
    page_request: PageRequest = Depends(get_page_request),
    service: NinjaService = Depends(get_ninja_service),
) -> PageResponse[NinjaRead]:
    query = NinjaQuery(
        name=name,
        village=village,
        clan=clan,
        rank=rank,
        chakra_type=chakra_type,
        specialty=specialty,
        kekkei_genkai=kekkei_genkai,
        status=status,
        strength_level=strength_level,
    )
    with stopwatch(logger, "search ninjas"):
        page = await service.search(query, page_request)
        return mapper.page_to_response(page)


# PUBLIC_INTERFACE
@router.put(
    "/{ninja_id}",
    response_model=NinjaRead,
    response_model_exclude_none=True,
    summary="Update ninja",
    description="Overwrite the fields present in the body; omitted or null fields keep their value.",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE},
)
async def update_ninja(
    payload: NinjaUpdate,
    ninja_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX, description="Ninja id"),
    service: NinjaService = Depends(get_ninja_service),
) -> NinjaRead:
    with stopwatch(logger, f"update ninja {ninja_id}"):
        ninja = await service.update(ninja_id, payload)
        return mapper.record_to_response(ninja)


# PUBLIC_INTERFACE
@router.delete(
    "/{ninja_id}",
    status_code=204,
    response_class=Response,
    summary="Delete ninja",
    description="Delete a ninja by id.",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE},
)
async def delete_ninja(
    ninja_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX, description="Ninja id"),
    service: NinjaService = Depends(get_ninja_service),
) -> Response:
    with stopwatch(logger, f"delete ninja {ninja_id}"):
        await service.delete(ninja_id)
    return Response(status_code=204)
