"""Tests for emancipation option linking."""

import uuid

import pytest

from casa.db.models import CasaCaseEmancipationOption
from casa.db.session import SessionLocal
from casa.services import emancipation_service
from casa.services.emancipation_service import (
    EmancipationOptionNotFoundError,
    MutuallyExclusiveCategoryError,
)
from tests.factories import make_case, make_category, make_option


def test_contains_emancipation_option(db, test_org):
    casa_case = make_case(db, test_org)
    option = make_option(db, make_category(db))

    assert casa_case.contains_emancipation_option(option.id) is False

    emancipation_service.add_emancipation_option(db, casa_case, option.id)

    assert casa_case.contains_emancipation_option(option.id) is True
    assert emancipation_service.contains_emancipation_option(casa_case, option.id) is True


def test_add_emancipation_option_links_option(db, test_org):
    casa_case = make_case(db, test_org)
    option = make_option(db, make_category(db, mutually_exclusive=True))

    emancipation_service.add_emancipation_option(db, casa_case, option.id)

    assert [o.id for o in casa_case.emancipation_options] == [option.id]


def test_add_same_option_twice_is_noop(db, test_org):
    casa_case = make_case(db, test_org)
    option = make_option(db, make_category(db, mutually_exclusive=True))

    emancipation_service.add_emancipation_option(db, casa_case, option.id)
    emancipation_service.add_emancipation_option(db, casa_case, option.id)

    assert len(casa_case.casa_case_emancipation_options) == 1


def test_add_second_option_in_mutually_exclusive_category_raises(db, test_org):
    casa_case = make_case(db, test_org)
    category = make_category(db, mutually_exclusive=True)
    option_a = make_option(db, category, "Option A")
    option_b = make_option(db, category, "Option B")

    emancipation_service.add_emancipation_option(db, casa_case, option_a.id)
    with pytest.raises(
        MutuallyExclusiveCategoryError,
        match="Attempted adding multiple options belonging to a mutually exclusive category",
    ):
        emancipation_service.add_emancipation_option(db, casa_case, option_b.id)

    db.expire_all()
    assert casa_case.emancipation_option_ids == {option_a.id}


def test_non_exclusive_category_allows_multiple_options(db, test_org):
    casa_case = make_case(db, test_org)
    category = make_category(db, mutually_exclusive=False)
    option_a = make_option(db, category)
    option_b = make_option(db, category)

    emancipation_service.add_emancipation_option(db, casa_case, option_a.id)
    emancipation_service.add_emancipation_option(db, casa_case, option_b.id)

    assert casa_case.emancipation_option_ids == {option_a.id, option_b.id}


def test_exclusivity_is_per_category(db, test_org):
    casa_case = make_case(db, test_org)
    option_a = make_option(db, make_category(db, mutually_exclusive=True))
    option_b = make_option(db, make_category(db, mutually_exclusive=True))

    emancipation_service.add_emancipation_option(db, casa_case, option_a.id)
    emancipation_service.add_emancipation_option(db, casa_case, option_b.id)

    assert casa_case.emancipation_option_ids == {option_a.id, option_b.id}


def test_add_unknown_option_raises_not_found(db, test_org):
    casa_case = make_case(db, test_org)

    with pytest.raises(EmancipationOptionNotFoundError):
        emancipation_service.add_emancipation_option(db, casa_case, uuid.uuid4())

    assert casa_case.casa_case_emancipation_options == []


def test_add_option_touches_updated_at(db, test_org):
    casa_case = make_case(db, test_org)
    before = casa_case.updated_at
    option = make_option(db, make_category(db))

    emancipation_service.add_emancipation_option(db, casa_case, option.id)

    assert casa_case.updated_at > before


def test_remove_emancipation_option_unlinks_option(db, test_org):
    casa_case = make_case(db, test_org)
    option = make_option(db, make_category(db))
    emancipation_service.add_emancipation_option(db, casa_case, option.id)

    emancipation_service.remove_emancipation_option(db, casa_case, option.id)

    assert casa_case.casa_case_emancipation_options == []
    assert casa_case.emancipation_options == []


def test_remove_unlinked_option_is_noop(db, test_org):
    casa_case = make_case(db, test_org)
    category = make_category(db)
    kept = make_option(db, category)
    never_added = make_option(db, category)
    emancipation_service.add_emancipation_option(db, casa_case, kept.id)

    emancipation_service.remove_emancipation_option(db, casa_case, never_added.id)

    assert casa_case.emancipation_option_ids == {kept.id}


def test_remove_unknown_option_raises_not_found(db, test_org):
    casa_case = make_case(db, test_org)

    with pytest.raises(EmancipationOptionNotFoundError):
        emancipation_service.remove_emancipation_option(db, casa_case, uuid.uuid4())


def test_removed_option_frees_exclusive_category(db, test_org):
    casa_case = make_case(db, test_org)
    category = make_category(db, mutually_exclusive=True)
    option_a = make_option(db, category)
    option_b = make_option(db, category)

    emancipation_service.add_emancipation_option(db, casa_case, option_a.id)
    emancipation_service.remove_emancipation_option(db, casa_case, option_a.id)
    emancipation_service.add_emancipation_option(db, casa_case, option_b.id)

    assert casa_case.emancipation_option_ids == {option_b.id}


def test_add_rechecks_links_committed_by_another_session(db, test_org):
    casa_case = make_case(db, test_org)
    category = make_category(db, mutually_exclusive=True)
    option_a = make_option(db, category)
    option_b = make_option(db, category)
    assert casa_case.casa_case_emancipation_options == []

    other = SessionLocal()
    try:
        other.add(
            CasaCaseEmancipationOption(
                casa_case_id=casa_case.id, emancipation_option_id=option_a.id
            )
        )
        other.commit()
    finally:
        other.close()

    with pytest.raises(MutuallyExclusiveCategoryError):
        emancipation_service.add_emancipation_option(db, casa_case, option_b.id)

    assert casa_case.emancipation_option_ids == {option_a.id}
