"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Uuid, text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from casa.db.base import Base, utcnow
from casa.db.enums import DEFAULT_ROLE

if TYPE_CHECKING:
    from casa.db.models import CaseAssignment, CasaCase


class Organization(Base):
    """
    A CASA program (tenant).

    Cases, users and contact type groups belong to exactly one organization
    and must be scoped by casa_org_id in all queries.
    """

    __tablename__ = "casa_orgs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        back_populates="organization", cascade="all, delete-orphan"
    )
    casa_cases: Mapped[list["CasaCase"]] = relationship(
        back_populates="organization", cascade="all, delete-orphan"
    )


class User(Base):
    """
    Application user.

    Volunteers are users with role=volunteer; authentication is handled
    outside this package.
    """

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_org_role", "casa_org_id", "role"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(50), default=DEFAULT_ROLE, server_default=text(f"'{DEFAULT_ROLE}'"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(back_populates="users")
    case_assignments: Mapped[list["CaseAssignment"]] = relationship(
        back_populates="volunteer", cascade="all, delete-orphan"
    )
