"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    Uuid,
    false,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from casa.db.base import Base, utcnow

if TYPE_CHECKING:
    from casa.db.models import (
        CasaCaseContactType,
        CasaCaseEmancipationOption,
        ContactType,
        EmancipationOption,
        Organization,
        User,
    )


class CasaCase(Base):
    """
    A youth's case, owned by one CASA organization.

    case_number is unique per organization, compared case-insensitively
    (see uq_casa_cases_org_case_number below).

    Related sets are explicit join entities:
    - case_assignments: volunteer links with an is_active flag
    - casa_case_emancipation_options: selected emancipation options
    - casa_case_contact_types: applicable contact types
    """

    __tablename__ = "casa_cases"
    __table_args__ = (
        Index("idx_casa_cases_org_updated", "casa_org_id", "updated_at"),
        Index("idx_casa_cases_transition", "transition_aged_youth", "birth_month_year_youth"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False
    )
    case_number: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_month_year_youth: Mapped[date | None] = mapped_column(Date, nullable=True)
    transition_aged_youth: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(back_populates="casa_cases")
    case_assignments: Mapped[list["CaseAssignment"]] = relationship(
        back_populates="casa_case", cascade="all, delete-orphan"
    )
    volunteers: Mapped[list["User"]] = relationship(
        secondary="case_assignments",
        viewonly=True,
    )
    casa_case_emancipation_options: Mapped[list["CasaCaseEmancipationOption"]] = relationship(
        back_populates="casa_case", cascade="all, delete-orphan"
    )
    emancipation_options: Mapped[list["EmancipationOption"]] = relationship(
        secondary="casa_case_emancipation_options",
        viewonly=True,
    )
    casa_case_contact_types: Mapped[list["CasaCaseContactType"]] = relationship(
        back_populates="casa_case", cascade="all, delete-orphan"
    )
    contact_types: Mapped[list["ContactType"]] = relationship(
        secondary="casa_case_contact_types",
        viewonly=True,
    )

    def contains_emancipation_option(self, option_id: uuid.UUID) -> bool:
        """Return True if the option is currently linked to this case."""
        return any(
            link.emancipation_option_id == option_id
            for link in self.casa_case_emancipation_options
        )

    @property
    def emancipation_option_ids(self) -> set[uuid.UUID]:
        return {link.emancipation_option_id for link in self.casa_case_emancipation_options}

    @property
    def contact_type_ids(self) -> set[uuid.UUID]:
        return {link.contact_type_id for link in self.casa_case_contact_types}

    def touch(self) -> None:
        """Bump updated_at for changes that only affect related rows."""
        self.updated_at = utcnow()


Index(
    "uq_casa_cases_org_case_number",
    CasaCase.casa_org_id,
    func.lower(CasaCase.case_number),
    unique=True,
)


class CaseAssignment(Base):
    """
    Link between a case and a volunteer.

    Deactivated assignments are kept (is_active=False) rather than deleted,
    so a volunteer keeps at most one row per case.
    """

    __tablename__ = "case_assignments"
    __table_args__ = (
        UniqueConstraint("casa_case_id", "volunteer_id", name="uq_case_assignment"),
        Index("idx_case_assignments_volunteer_active", "volunteer_id", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_case_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False
    )
    volunteer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    casa_case: Mapped["CasaCase"] = relationship(back_populates="case_assignments")
    volunteer: Mapped["User"] = relationship(back_populates="case_assignments")
