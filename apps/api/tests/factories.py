"""Factory helpers for tests. Every helper commits so service rollbacks never drop fixtures."""

import uuid
from datetime import date, datetime

from sqlalchemy.orm import Session

from casa.db.enums import Role
from casa.db.models import (
    CasaCase,
    CaseAssignment,
    ContactType,
    ContactTypeGroup,
    EmancipationCategory,
    EmancipationOption,
    Organization,
    User,
)


def make_org(db: Session, name: str | None = None) -> Organization:
    org = Organization(name=name or f"CASA {uuid.uuid4().hex[:6]}")
    db.add(org)
    db.commit()
    return org


def make_user(db: Session, org: Organization, role: Role = Role.VOLUNTEER) -> User:
    user = User(
        casa_org_id=org.id,
        email=f"volunteer-{uuid.uuid4().hex[:8]}@test.com",
        display_name="Test Volunteer",
        role=role.value,
    )
    db.add(user)
    db.commit()
    return user


def make_case(
    db: Session,
    org: Organization,
    case_number: str | None = None,
    updated_at: datetime | None = None,
    birth_month_year_youth: date | None = None,
    transition_aged_youth: bool = False,
) -> CasaCase:
    casa_case = CasaCase(
        casa_org_id=org.id,
        case_number=case_number or f"CINA-{uuid.uuid4().hex[:8]}",
        birth_month_year_youth=birth_month_year_youth,
        transition_aged_youth=transition_aged_youth,
    )
    if updated_at is not None:
        casa_case.updated_at = updated_at
    db.add(casa_case)
    db.commit()
    return casa_case


def assign(
    db: Session, casa_case: CasaCase, volunteer: User, is_active: bool = True
) -> CaseAssignment:
    assignment = CaseAssignment(
        casa_case_id=casa_case.id,
        volunteer_id=volunteer.id,
        is_active=is_active,
    )
    db.add(assignment)
    db.commit()
    return assignment


def make_category(db: Session, mutually_exclusive: bool = False) -> EmancipationCategory:
    category = EmancipationCategory(
        name=f"Category {uuid.uuid4().hex[:8]}",
        mutually_exclusive=mutually_exclusive,
    )
    db.add(category)
    db.commit()
    return category


def make_option(
    db: Session, category: EmancipationCategory, name: str | None = None
) -> EmancipationOption:
    option = EmancipationOption(
        emancipation_category_id=category.id,
        name=name or f"Option {uuid.uuid4().hex[:8]}",
    )
    db.add(option)
    db.commit()
    return option


def make_contact_type(
    db: Session, group: ContactTypeGroup, name: str | None = None
) -> ContactType:
    contact_type = ContactType(
        contact_type_group_id=group.id,
        name=name or f"Type {uuid.uuid4().hex[:8]}",
    )
    db.add(contact_type)
    db.commit()
    return contact_type
