"""
Stateless conversions between the wire schemas and the Ninja ORM record.

The wire name `kekkei_genkai` maps to the `bloodline_trait` attribute; every
other field keeps its name.
"""

from __future__ import annotations

from typing import Any, Dict, Union

from ninja_api.db.models.ninja import Ninja
from ninja_api.repositories.base import Page
from ninja_api.schemas.common import PageMetadata, PageResponse
from ninja_api.schemas.ninja import NinjaCreate, NinjaQuery, NinjaRead, NinjaUpdate


# wire name -> record attribute
WIRE_TO_ATTRIBUTE: Dict[str, str] = {
    "name": "name",
    "village": "village",
    "clan": "clan",
    "rank": "rank",
    "chakra_type": "chakra_type",
    "specialty": "specialty",
    "kekkei_genkai": "bloodline_trait",
    "status": "status",
    "strength_level": "strength_level",
    "registration_date": "registration_date",
}

# Properties accepted by the `sort` query parameter.
SORTABLE_FIELDS: Dict[str, str] = {"id": "id", **WIRE_TO_ATTRIBUTE}


def _non_null_attributes(payload: Union[NinjaCreate, NinjaUpdate, NinjaQuery]) -> Dict[str, Any]:
    return {
        WIRE_TO_ATTRIBUTE[name]: value
        for name, value in payload.model_dump().items()
        if value is not None
    }


# PUBLIC_INTERFACE
def query_to_criteria(query: NinjaQuery) -> Dict[str, Any]:
    """Build the equality criteria for query-by-example from the non-null filter fields."""
    return _non_null_attributes(query)


# PUBLIC_INTERFACE
def create_to_record(request: NinjaCreate) -> Ninja:
    """Build a new, unsaved record. Null fields stay unset so storage defaults apply."""
    return Ninja(**_non_null_attributes(request))


# PUBLIC_INTERFACE
def merge_into_record(request: Union[NinjaCreate, NinjaUpdate], ninja: Ninja) -> Ninja:
    """
    Copy the non-null request fields onto an existing record.

    Null fields leave the stored value untouched and the id is never written.
    """
    for attribute, value in _non_null_attributes(request).items():
        setattr(ninja, attribute, value)
    return ninja


# PUBLIC_INTERFACE
def record_to_response(ninja: Ninja) -> NinjaRead:
    """Project every record attribute onto the read model."""
    return NinjaRead(
        id=ninja.id,
        name=ninja.name,
        village=ninja.village,
        clan=ninja.clan,
        rank=ninja.rank,
        chakra_type=ninja.chakra_type,
        specialty=ninja.specialty,
        kekkei_genkai=ninja.bloodline_trait,
        status=ninja.status,
        strength_level=ninja.strength_level,
        registration_date=ninja.registration_date,
    )


# PUBLIC_INTERFACE
def page_to_response(page: Page[Ninja]) -> PageResponse[NinjaRead]:
    """Map page content while keeping the page metadata and total count."""
    return PageResponse[NinjaRead](
        content=[record_to_response(n) for n in page.content],
        page=PageMetadata(
            size=page.size,
            number=page.number,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        ),
    )
