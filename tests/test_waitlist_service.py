import pytest
from sqlalchemy import func

from app.core.exceptions import ConflictError
from app.models.waitlist import Waitlist
from app.schemas.waitlist import WaitlistCreate, WaitlistUpdate
from app.services import waitlist_service
from app.services.waitlist_service import WaitlistService


def _slug_count(db, slug):
    db.expire_all()
    return db.query(func.count(Waitlist.id)).filter(Waitlist.slug == slug).scalar()


@pytest.fixture()
def skip_slug_precheck(monkeypatch):
    # The competing write lands between the availability check and the commit
    monkeypatch.setattr(waitlist_service, "ensure_slug_usable", lambda *args, **kwargs: None)


def test_create_with_raced_slug_conflicts_without_writing(db_session, user, make_waitlist, skip_slug_precheck):
    make_waitlist(slug="contested")
    service = WaitlistService(db_session)

    with pytest.raises(ConflictError) as exc:
        service.create(user, WaitlistCreate(slug="contested", title="Second"))
    assert exc.value.message == "Ce slug est déjà utilisé"
    assert _slug_count(db_session, "contested") == 1
    assert db_session.query(func.count(Waitlist.id)).scalar() == 1


def test_update_to_raced_slug_keeps_stored_slug(db_session, user, make_waitlist, skip_slug_precheck):
    make_waitlist(slug="contested")
    mine = make_waitlist(slug="mine")
    mine_id = mine.id

    with pytest.raises(ConflictError) as exc:
        WaitlistService(db_session).update(user, str(mine_id), WaitlistUpdate(slug="contested"))
    assert exc.value.message == "Ce slug est déjà utilisé"
    assert _slug_count(db_session, "contested") == 1
    assert db_session.get(Waitlist, mine_id).slug == "mine"
