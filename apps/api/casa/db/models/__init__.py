"""SQLAlchemy ORM models."""

from casa.db.base import Base
from casa.db.models.auth import Organization, User
from casa.db.models.casa_cases import CasaCase, CaseAssignment
from casa.db.models.contact_types import CasaCaseContactType, ContactType, ContactTypeGroup
from casa.db.models.emancipation import (
    CasaCaseEmancipationOption,
    EmancipationCategory,
    EmancipationOption,
)

__all__ = [
    "Base",
    "CasaCase",
    "CasaCaseContactType",
    "CasaCaseEmancipationOption",
    "CaseAssignment",
    "ContactType",
    "ContactTypeGroup",
    "EmancipationCategory",
    "EmancipationOption",
    "Organization",
    "User",
]
