"""Contact type service - replace the contact types applicable to a case."""

import logging
from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from casa.core.structured_logging import build_log_context
from casa.db.models import CasaCase, CasaCaseContactType, ContactType
from casa.schemas.casa_case import CasaCaseContactTypesUpdate

logger = logging.getLogger(__name__)


class ContactTypeServiceError(Exception):
    """Base exception for contact type service errors."""

    pass


class ContactTypeNotFoundError(ContactTypeServiceError):
    """One or more requested contact types do not exist."""

    def __init__(self, missing_ids: list[UUID]):
        self.missing_ids = missing_ids
        super().__init__(
            "Contact type(s) not found: " + ", ".join(str(i) for i in missing_ids)
        )


def _existing_contact_type_ids(db: Session, contact_type_ids: list[UUID]) -> set[UUID]:
    if not contact_type_ids:
        return set()
    return set(
        db.execute(select(ContactType.id).where(ContactType.id.in_(contact_type_ids)))
        .scalars()
        .all()
    )


def update_cleaning_contact_types(
    db: Session,
    casa_case: CasaCase,
    data: CasaCaseContactTypesUpdate | Mapping[str, Any],
) -> CasaCase:
    """
    Replace the case's contact types with exactly the requested set.

    Links absent from the request are deleted, new ones are created and links
    present on both sides keep their row. Unknown ids are rejected before any
    change; a failed commit rolls back and leaves the previous set in place.
    """
    if not isinstance(data, CasaCaseContactTypesUpdate):
        data = CasaCaseContactTypesUpdate.model_validate(data)

    requested_ids = data.contact_type_ids
    found = _existing_contact_type_ids(db, requested_ids)
    missing = [type_id for type_id in requested_ids if type_id not in found]
    if missing:
        raise ContactTypeNotFoundError(missing)

    requested = set(requested_ids)
    current = {link.contact_type_id: link for link in casa_case.casa_case_contact_types}

    removed = [link for type_id, link in current.items() if type_id not in requested]
    added = [type_id for type_id in requested_ids if type_id not in current]
    if not removed and not added:
        return casa_case

    try:
        for link in removed:
            casa_case.casa_case_contact_types.remove(link)
        for type_id in added:
            casa_case.casa_case_contact_types.append(
                CasaCaseContactType(contact_type_id=type_id)
            )
        casa_case.touch()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "contact_types_replaced",
        extra=build_log_context(
            org_id=casa_case.casa_org_id,
            case_id=casa_case.id,
            added=len(added),
            removed=len(removed),
        ),
    )
    return casa_case
