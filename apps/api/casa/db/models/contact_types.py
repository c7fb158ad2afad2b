"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, Uuid, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from casa.db.base import Base, utcnow

if TYPE_CHECKING:
    from casa.db.models import CasaCase, Organization


class ContactTypeGroup(Base):
    """Org-defined grouping of contact types (e.g. "Family", "Education")."""

    __tablename__ = "contact_type_groups"
    __table_args__ = (
        UniqueConstraint("casa_org_id", "name", name="uq_contact_type_group_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    organization: Mapped["Organization"] = relationship()
    contact_types: Mapped[list["ContactType"]] = relationship(
        back_populates="contact_type_group", cascade="all, delete-orphan"
    )


class ContactType(Base):
    """Kind of contact a volunteer can log against a case."""

    __tablename__ = "contact_types"
    __table_args__ = (
        UniqueConstraint("contact_type_group_id", "name", name="uq_contact_type_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_type_group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact_type_groups.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    contact_type_group: Mapped["ContactTypeGroup"] = relationship(back_populates="contact_types")


class CasaCaseContactType(Base):
    """
    Join row linking a case to an applicable contact type.

    Rows are replaced as a set by contact_type_service.update_cleaning_contact_types;
    rows for contact types kept across an update are not regenerated.
    """

    __tablename__ = "casa_case_contact_types"
    __table_args__ = (
        UniqueConstraint("casa_case_id", "contact_type_id", name="uq_casa_case_contact_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_case_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False
    )
    contact_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact_types.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    casa_case: Mapped["CasaCase"] = relationship(back_populates="casa_case_contact_types")
    contact_type: Mapped["ContactType"] = relationship()
