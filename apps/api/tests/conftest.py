"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema rebuilt for every test
- Organization, volunteer and contact type group fixtures
"""
import os
from typing import Generator

import pytest
from sqlalchemy.orm import Session

# Point the app at a throwaway database before anything imports settings
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from casa.db.base import Base
from casa.db.models import ContactTypeGroup, Organization, User
from casa.db.session import SessionLocal, engine
from tests.factories import make_org, make_user


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; dropped afterwards."""
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def test_org(db: Session) -> Organization:
    """Create a test organization."""
    return make_org(db, "Test CASA")


@pytest.fixture(scope="function")
def volunteer(db: Session, test_org: Organization) -> User:
    """Create a volunteer in test_org."""
    return make_user(db, test_org)


@pytest.fixture(scope="function")
def contact_type_group(db: Session, test_org: Organization) -> ContactTypeGroup:
    group = ContactTypeGroup(casa_org_id=test_org.id, name="Family")
    db.add(group)
    db.commit()
    return group
