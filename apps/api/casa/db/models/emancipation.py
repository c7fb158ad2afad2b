"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from casa.db.base import Base, utcnow

if TYPE_CHECKING:
    from casa.db.models import CasaCase


class EmancipationCategory(Base):
    """
    Grouping of emancipation options (e.g. "Housing", "Youth has a job").

    When mutually_exclusive is set a case may hold at most one option
    from this category.
    """

    __tablename__ = "emancipation_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    mutually_exclusive: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    emancipation_options: Mapped[list["EmancipationOption"]] = relationship(
        back_populates="emancipation_category", cascade="all, delete-orphan"
    )


class EmancipationOption(Base):
    """A selectable option inside an emancipation category."""

    __tablename__ = "emancipation_options"
    __table_args__ = (
        UniqueConstraint("emancipation_category_id", "name", name="uq_emancipation_option_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    emancipation_category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("emancipation_categories.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    emancipation_category: Mapped["EmancipationCategory"] = relationship(
        back_populates="emancipation_options"
    )


class CasaCaseEmancipationOption(Base):
    """Join row linking a case to one selected emancipation option."""

    __tablename__ = "casa_case_emancipation_options"
    __table_args__ = (
        UniqueConstraint(
            "casa_case_id", "emancipation_option_id", name="uq_casa_case_emancipation_option"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_case_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False
    )
    emancipation_option_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("emancipation_options.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    casa_case: Mapped["CasaCase"] = relationship(back_populates="casa_case_emancipation_options")
    emancipation_option: Mapped["EmancipationOption"] = relationship()
