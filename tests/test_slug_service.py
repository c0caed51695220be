import pytest

from app.core.exceptions import ConflictError, ValidationError
from app.services.slug_service import (
    MSG_AVAILABLE,
    MSG_FORMAT,
    MSG_TAKEN,
    MSG_TOO_LONG,
    MSG_TOO_SHORT,
    SLUG_IN_USE,
    check_slug_availability,
    ensure_slug_usable,
    generate_slug,
)


@pytest.mark.parametrize("slug", ["abc", "my-launch-2025", "a" * 50, "---"])
def test_well_formed_free_slug_is_available(db_session, slug):
    check = check_slug_availability(db_session, slug)
    assert check.available is True
    assert check.reason is None
    assert check.message == MSG_AVAILABLE


@pytest.mark.parametrize("slug", ["My-Launch", "with space", "under_score", "café", "ab!"])
def test_bad_characters_report_format(db_session, slug):
    check = check_slug_availability(db_session, slug)
    assert check.available is False
    assert check.reason == "format"
    assert check.message == MSG_FORMAT


def test_format_is_checked_before_length(db_session):
    # Too short and badly formed: format wins
    assert check_slug_availability(db_session, "A").reason == "format"


def test_length_bounds(db_session):
    short = check_slug_availability(db_session, "ab")
    assert (short.reason, short.message) == ("length", MSG_TOO_SHORT)

    long = check_slug_availability(db_session, "a" * 51)
    assert (long.reason, long.message) == ("length", MSG_TOO_LONG)


def test_taken_slug(db_session, make_waitlist):
    make_waitlist(slug="taken-slug")
    check = check_slug_availability(db_session, "taken-slug")
    assert check.available is False
    assert check.reason == "taken"
    assert check.message == MSG_TAKEN


def test_own_slug_is_available_when_excluded(db_session, make_waitlist):
    waitlist = make_waitlist(slug="mine")
    assert check_slug_availability(db_session, "mine", exclude_id=waitlist.id).available
    assert check_slug_availability(db_session, "mine", exclude_id=str(waitlist.id)).available


def test_excluding_another_waitlist_does_not_free_the_slug(db_session, make_waitlist):
    first = make_waitlist(slug="first")
    make_waitlist(slug="second")
    assert check_slug_availability(db_session, "second", exclude_id=first.id).reason == "taken"


def test_garbage_exclude_id_is_ignored(db_session, make_waitlist):
    make_waitlist(slug="mine")
    assert check_slug_availability(db_session, "mine", exclude_id="not-a-uuid").reason == "taken"


def test_ensure_slug_usable_raises_conflict_when_taken(db_session, make_waitlist):
    make_waitlist(slug="taken-slug")
    with pytest.raises(ConflictError) as exc:
        ensure_slug_usable(db_session, "taken-slug")
    assert exc.value.message == SLUG_IN_USE


def test_ensure_slug_usable_raises_validation_for_shape(db_session):
    with pytest.raises(ValidationError) as exc:
        ensure_slug_usable(db_session, "x")
    assert exc.value.error_code == "length"


@pytest.mark.parametrize("title,expected", [
    ("Café Déjà Vu!", "cafe-deja-vu"),
    ("  Hello   World  ", "hello-world"),
    ("Acme 2.0 -- Beta", "acme-2-0-beta"),
    ("Über Straße", "uber-stra-e"),
    ("!!!", ""),
])
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected
