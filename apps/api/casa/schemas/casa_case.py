"""Pydantic schemas for CASA cases."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CasaCaseCreate(BaseModel):
    """Request schema for creating a case.

    case_number presence and uniqueness are checked by the service so both
    failures surface as one structured validation error.
    """

    case_number: str = Field("", max_length=255)
    birth_month_year_youth: date | None = None
    transition_aged_youth: bool = False

    @field_validator("case_number")
    @classmethod
    def strip_case_number(cls, v: str) -> str:
        return v.strip()


class CasaCaseUpdate(BaseModel):
    """Request schema for updating a case (partial)."""

    case_number: str | None = Field(None, max_length=255)
    birth_month_year_youth: date | None = None
    transition_aged_youth: bool | None = None

    @field_validator("case_number")
    @classmethod
    def strip_case_number(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class CasaCaseContactTypeAttributes(BaseModel):
    """One requested contact type link."""

    contact_type_id: UUID


class CasaCaseContactTypesUpdate(BaseModel):
    """Full replacement set of a case's contact types."""

    casa_case_contact_types_attributes: list[CasaCaseContactTypeAttributes] = Field(
        default_factory=list
    )

    @property
    def contact_type_ids(self) -> list[UUID]:
        """Requested ids in request order, duplicates dropped."""
        return list(dict.fromkeys(a.contact_type_id for a in self.casa_case_contact_types_attributes))


class CasaCaseRead(BaseModel):
    """Response schema for a case."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    casa_org_id: UUID
    case_number: str
    birth_month_year_youth: date | None
    transition_aged_youth: bool
    created_at: datetime
    updated_at: datetime
    emancipation_option_ids: list[UUID] = Field(default_factory=list)
    contact_type_ids: list[UUID] = Field(default_factory=list)
