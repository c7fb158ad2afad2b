"""CASA case service - intake validation, lookups and case query scopes."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import Select, and_, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from casa.core.config import settings
from casa.core.structured_logging import build_log_context
from casa.db.models import CasaCase, CaseAssignment, User
from casa.schemas.casa_case import CasaCaseCreate, CasaCaseUpdate
from casa.utils.dates import years_before

logger = logging.getLogger(__name__)

CASE_NUMBER_BLANK = "can't be blank"
CASE_NUMBER_TAKEN = "has already been taken"


class CasaCaseServiceError(Exception):
    """Base exception for case service errors."""

    pass


class CasaCaseValidationError(CasaCaseServiceError):
    """Case attributes failed validation; errors maps field -> messages."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field} {message}" for field, messages in errors.items() for message in messages
        )
        super().__init__(f"Validation failed: {details}")


class CasaCaseNotFoundError(CasaCaseServiceError):
    """Case not found."""

    pass


# =============================================================================
# Intake & lookup
# =============================================================================


def _case_number_conflict_query(
    org_id: UUID, case_number: str, exclude_id: UUID | None = None
) -> Select:
    query = select(CasaCase.id).where(
        and_(
            CasaCase.casa_org_id == org_id,
            func.lower(CasaCase.case_number) == case_number.lower(),
        )
    )
    if exclude_id is not None:
        query = query.where(CasaCase.id != exclude_id)
    return query


def _is_case_number_conflict(error: IntegrityError) -> bool:
    constraint_name = getattr(getattr(error.orig, "diag", None), "constraint_name", None)
    if constraint_name == "uq_casa_cases_org_case_number":
        return True
    message = str(error.orig) if error.orig else str(error)
    return "uq_casa_cases_org_case_number" in message


def validate_case_number(
    db: Session,
    org_id: UUID,
    case_number: str | None,
    exclude_id: UUID | None = None,
) -> dict[str, list[str]]:
    """Return validation errors for a case number (empty dict when valid)."""
    if not case_number or not case_number.strip():
        return {"case_number": [CASE_NUMBER_BLANK]}
    taken = db.execute(
        _case_number_conflict_query(org_id, case_number.strip(), exclude_id)
    ).first()
    if taken:
        return {"case_number": [CASE_NUMBER_TAKEN]}
    return {}


def create_casa_case(db: Session, org_id: UUID, data: CasaCaseCreate) -> CasaCase:
    """
    Create a case after validating case_number.

    Raises CasaCaseValidationError (nothing persisted) when the number is
    blank or already used in the organization, ignoring case.
    """
    errors = validate_case_number(db, org_id, data.case_number)
    if errors:
        raise CasaCaseValidationError(errors)

    casa_case = CasaCase(
        casa_org_id=org_id,
        case_number=data.case_number,
        birth_month_year_youth=data.birth_month_year_youth,
        transition_aged_youth=data.transition_aged_youth,
    )
    db.add(casa_case)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_case_number_conflict(exc):
            raise CasaCaseValidationError({"case_number": [CASE_NUMBER_TAKEN]}) from exc
        raise
    db.refresh(casa_case)

    logger.info(
        "casa_case_created",
        extra=build_log_context(org_id=org_id, case_id=casa_case.id),
    )
    return casa_case


def update_casa_case(db: Session, casa_case: CasaCase, data: CasaCaseUpdate) -> CasaCase:
    """Apply a partial update; a changed case_number is re-validated."""
    changes = data.model_dump(exclude_unset=True)
    if "case_number" in changes:
        errors = validate_case_number(
            db, casa_case.casa_org_id, changes["case_number"], exclude_id=casa_case.id
        )
        if errors:
            raise CasaCaseValidationError(errors)

    for field, value in changes.items():
        setattr(casa_case, field, value)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_case_number_conflict(exc):
            raise CasaCaseValidationError({"case_number": [CASE_NUMBER_TAKEN]}) from exc
        raise
    db.refresh(casa_case)
    return casa_case


def get_casa_case(db: Session, org_id: UUID, case_id: UUID) -> CasaCase | None:
    """Get a single case by ID, scoped to the organization."""
    return db.execute(
        select(CasaCase).where(and_(CasaCase.id == case_id, CasaCase.casa_org_id == org_id))
    ).scalar_one_or_none()


def get_casa_case_by_number(db: Session, org_id: UUID, case_number: str) -> CasaCase | None:
    """Find a case by number, ignoring case."""
    return db.execute(
        select(CasaCase).where(
            and_(
                CasaCase.casa_org_id == org_id,
                func.lower(CasaCase.case_number) == case_number.strip().lower(),
            )
        )
    ).scalar_one_or_none()


def require_casa_case(db: Session, org_id: UUID, case_id: UUID) -> CasaCase:
    casa_case = get_casa_case(db, org_id, case_id)
    if not casa_case:
        raise CasaCaseNotFoundError(f"Case {case_id} not found")
    return casa_case


# =============================================================================
# Query scopes
# =============================================================================


def ordered(query: Select) -> Select:
    """Most recently updated first; ties fall back to case_number, then id."""
    return query.order_by(
        CasaCase.updated_at.desc(),
        CasaCase.case_number.asc(),
        CasaCase.id.asc(),
    )


def list_ordered(db: Session, org_id: UUID | None = None) -> list[CasaCase]:
    """List cases by recency, optionally scoped to one organization."""
    query = select(CasaCase)
    if org_id is not None:
        query = query.where(CasaCase.casa_org_id == org_id)
    return list(db.execute(ordered(query)).scalars().all())


def list_should_transition(
    db: Session,
    org_id: UUID | None = None,
    today: date | None = None,
) -> list[CasaCase]:
    """
    Cases whose youth reached transition age but are not marked transitioned.

    A youth exactly TRANSITION_AGE_YEARS old today is included. Cases without
    a birth date never match.
    """
    cutoff = years_before(today or date.today(), settings.TRANSITION_AGE_YEARS)
    query = select(CasaCase).where(
        and_(
            CasaCase.transition_aged_youth.is_(False),
            CasaCase.birth_month_year_youth <= cutoff,
        )
    )
    if org_id is not None:
        query = query.where(CasaCase.casa_org_id == org_id)
    return list(db.execute(ordered(query)).scalars().all())


def list_actively_assigned_to(db: Session, volunteer: User) -> list[CasaCase]:
    """Distinct cases with an active assignment to the volunteer."""
    query = (
        select(CasaCase)
        .join(CaseAssignment, CaseAssignment.casa_case_id == CasaCase.id)
        .where(
            and_(
                CaseAssignment.volunteer_id == volunteer.id,
                CaseAssignment.is_active.is_(True),
            )
        )
        .distinct()
    )
    return list(db.execute(ordered(query)).scalars().all())


def list_available_for_volunteer(db: Session, volunteer: User) -> list[CasaCase]:
    """
    Cases in the volunteer's organization the volunteer is not assigned to.

    Any assignment row excludes the case, active or not.
    """
    assigned = exists().where(
        and_(
            CaseAssignment.casa_case_id == CasaCase.id,
            CaseAssignment.volunteer_id == volunteer.id,
        )
    )
    query = select(CasaCase).where(
        and_(
            CasaCase.casa_org_id == volunteer.casa_org_id,
            ~assigned,
        )
    )
    return list(db.execute(ordered(query)).scalars().all())
