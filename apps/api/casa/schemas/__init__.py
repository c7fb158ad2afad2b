"""Pydantic schemas for request/response models."""

from casa.schemas.casa_case import (
    CasaCaseContactTypeAttributes,
    CasaCaseContactTypesUpdate,
    CasaCaseCreate,
    CasaCaseRead,
    CasaCaseUpdate,
)

__all__ = [
    "CasaCaseContactTypeAttributes",
    "CasaCaseContactTypesUpdate",
    "CasaCaseCreate",
    "CasaCaseRead",
    "CasaCaseUpdate",
]
