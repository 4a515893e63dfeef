from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from .common import Int32


Rank = Literal["Genin", "Chunin", "Jounin", "Kage"]
NinjaStatus = Literal["Active", "Missing", "Rogue"]



class NinjaCreate(BaseModel):
    """
    Create ninja payload.

    All create-time rules apply: required non-blank name, village, rank and
    chakra_type, maximum lengths, the rank and status enumerations, the
    strength range and a registration date that is not in the future.
    """
    name: str = Field(..., min_length=1, max_length=100, description="Ninja name")
    village: str = Field(..., min_length=1, max_length=50, description="Home village")
    clan: Optional[str] = Field(None, max_length=50, description="Clan")
    rank: Rank = Field(..., description="Rank: Genin, Chunin, Jounin or Kage")
    chakra_type: str = Field(..., min_length=1, max_length=30, description="Chakra nature")
    specialty: Optional[str] = Field(None, max_length=50, description="Combat specialty")
    kekkei_genkai: Optional[str] = Field(None, max_length=50, description="Bloodline trait")
    status: Optional[NinjaStatus] = Field(None, description="Active, Missing or Rogue (default Active)")
    strength_level: Optional[int] = Field(None, ge=1, le=100, description="Strength level 1-100")
    registration_date: Optional[date] = Field(None, description="Registration date (default today)")

    @field_validator("name", "village", "chakra_type")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("string_blank", "Value must not be blank")
        return v

    @field_validator("registration_date")
    @classmethod
    def _not_in_future(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > date.today():
            raise PydanticCustomError("date_in_future", "Date must be today or in the past")
        return v


class NinjaUpdate(BaseModel):
    """
    Update ninja payload.

    Only JSON types are checked: update requests carry no field constraints and
    any subset of fields, including none, is accepted. Non-null fields overwrite
    the stored values.
    """
    name: Optional[str] = None
    village: Optional[str] = None
    clan: Optional[str] = None
    rank: Optional[str] = None
    chakra_type: Optional[str] = None
    specialty: Optional[str] = None
    kekkei_genkai: Optional[str] = None
    status: Optional[str] = None
    strength_level: Optional[Int32] = None
    registration_date: Optional[date] = None


class NinjaQuery(BaseModel):
    """Search filters. Every non-null field is matched by equality."""
    name: Optional[str] = None
    village: Optional[str] = None
    clan: Optional[str] = None
    rank: Optional[str] = None
    chakra_type: Optional[str] = None
    specialty: Optional[str] = None
    kekkei_genkai: Optional[str] = None
    status: Optional[str] = None
    strength_level: Optional[Int32] = None


class NinjaRead(BaseModel):
    """Ninja read model."""
    id: int = Field(..., description="Ninja ID")
    name: str = Field(..., description="Ninja name")
    village: str = Field(..., description="Home village")
    clan: Optional[str] = Field(None)
    rank: str = Field(..., description="Rank")
    chakra_type: str = Field(..., description="Chakra nature")
    specialty: Optional[str] = Field(None)
    kekkei_genkai: Optional[str] = Field(None)
    status: Optional[str] = Field(None)
    strength_level: Optional[int] = Field(None)
    registration_date: Optional[date] = Field(None)
