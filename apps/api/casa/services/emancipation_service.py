"""Emancipation option service - link/unlink options on a case."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from casa.core.structured_logging import build_log_context
from casa.db.models import CasaCase, CasaCaseEmancipationOption, EmancipationOption

logger = logging.getLogger(__name__)

MUTUALLY_EXCLUSIVE_ERROR = (
    "Attempted adding multiple options belonging to a mutually exclusive category."
)


class EmancipationServiceError(Exception):
    """Base exception for emancipation service errors."""

    pass


class EmancipationOptionNotFoundError(EmancipationServiceError):
    """Emancipation option not found."""

    pass


class MutuallyExclusiveCategoryError(EmancipationServiceError):
    """Case already holds an option from a mutually exclusive category."""

    def __init__(self, message: str = MUTUALLY_EXCLUSIVE_ERROR):
        super().__init__(message)


def get_emancipation_option(db: Session, option_id: UUID) -> EmancipationOption | None:
    """Get an option with its category loaded."""
    return db.execute(
        select(EmancipationOption)
        .options(selectinload(EmancipationOption.emancipation_category))
        .where(EmancipationOption.id == option_id)
    ).scalar_one_or_none()


def _require_option(db: Session, option_id: UUID) -> EmancipationOption:
    option = get_emancipation_option(db, option_id)
    if not option:
        raise EmancipationOptionNotFoundError(f"Emancipation option {option_id} not found")
    return option


def contains_emancipation_option(casa_case: CasaCase, option_id: UUID) -> bool:
    """True if the case currently holds the option."""
    return casa_case.contains_emancipation_option(option_id)


def _lock_case(db: Session, casa_case: CasaCase) -> None:
    """Lock the case row and reload its option links under the lock."""
    db.execute(select(CasaCase.id).where(CasaCase.id == casa_case.id).with_for_update())
    db.expire(casa_case, ["casa_case_emancipation_options", "emancipation_options"])


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def add_emancipation_option(db: Session, casa_case: CasaCase, option_id: UUID) -> CasaCase:
    """
    Link an option to the case.

    - Unknown option id: EmancipationOptionNotFoundError
    - Option already linked: no-op
    - Another option of the same mutually exclusive category already linked:
      MutuallyExclusiveCategoryError, nothing changes
    """
    option = _require_option(db, option_id)
    _lock_case(db, casa_case)

    if casa_case.contains_emancipation_option(option.id):
        return casa_case

    category = option.emancipation_category
    if category.mutually_exclusive:
        conflict = any(
            link.emancipation_option.emancipation_category_id == category.id
            for link in casa_case.casa_case_emancipation_options
        )
        if conflict:
            logger.warning(
                "emancipation_option_rejected",
                extra=build_log_context(
                    org_id=casa_case.casa_org_id,
                    case_id=casa_case.id,
                    option_id=option.id,
                    category_id=category.id,
                ),
            )
            raise MutuallyExclusiveCategoryError()

    casa_case.casa_case_emancipation_options.append(
        CasaCaseEmancipationOption(emancipation_option=option)
    )
    casa_case.touch()
    _commit(db)

    logger.info(
        "emancipation_option_added",
        extra=build_log_context(
            org_id=casa_case.casa_org_id, case_id=casa_case.id, option_id=option.id
        ),
    )
    return casa_case


def remove_emancipation_option(db: Session, casa_case: CasaCase, option_id: UUID) -> CasaCase:
    """
    Unlink an option from the case.

    Unknown option ids raise EmancipationOptionNotFoundError; a known option
    that is not linked is a no-op.
    """
    option = _require_option(db, option_id)
    _lock_case(db, casa_case)

    links = [
        link
        for link in casa_case.casa_case_emancipation_options
        if link.emancipation_option_id == option.id
    ]
    if not links:
        return casa_case

    for link in links:
        casa_case.casa_case_emancipation_options.remove(link)
    casa_case.touch()
    _commit(db)

    logger.info(
        "emancipation_option_removed",
        extra=build_log_context(
            org_id=casa_case.casa_org_id, case_id=casa_case.id, option_id=option.id
        ),
    )
    return casa_case
