"""
Tests for the in-app notification inbox.

Covers creation helpers for each event type, listing newest first with the
unread filter, unread counts, marking read and deletion scoped to the owner.
"""

import uuid
from datetime import date, timedelta

import pytest

from test_fixtures import API, client, db_session, create_user, auth_headers
from app.exceptions import NotFoundError
from app.security import utcnow
from domain.enums import NotificationType
from domain.models import Notification
from services.notification_service import NotificationService


@pytest.fixture
def user():
    return create_user()


@pytest.fixture
def headers(user):
    return auth_headers(user)


def _seed(db_session, user, count=3):
    """Create ``count`` meal reminders with strictly increasing timestamps"""
    created = []
    base = utcnow() - timedelta(hours=count)
    for i in range(count):
        note = NotificationService.notify_meal_reminder(
            db_session, user.user_id, "dinner", f"Recipe {i}", date(2026, 5, 1)
        )
        note.created_at = base + timedelta(hours=i)
        created.append(note)
    db_session.commit()
    return created


# =============================================================================
# CREATION HELPERS
# =============================================================================


def test_recipe_shared_notification(db_session, user):
    recipe_id, share_id = uuid.uuid4(), uuid.uuid4()
    note = NotificationService.notify_recipe_shared(
        db_session, user.user_id, "Emma Johnson", recipe_id, "Momo", share_id
    )
    assert note.type == NotificationType.RECIPE_SHARED
    assert note.title == "New Recipe Shared!"
    assert note.message == 'Emma Johnson shared "Momo" with you.'
    assert note.data == {
        "recipe_id": str(recipe_id),
        "recipe_name": "Momo",
        "share_id": str(share_id),
        "shared_by": "Emma Johnson",
    }
    assert note.is_read is False


@pytest.mark.parametrize(
    "accepted, expected_type, verb",
    [
        (True, NotificationType.SHARE_ACCEPTED, "accepted"),
        (False, NotificationType.SHARE_REJECTED, "declined"),
    ],
)
def test_share_status_notification(db_session, user, accepted, expected_type, verb):
    note = NotificationService.notify_share_status(
        db_session, user.user_id, "Raj Patel", "Momo", uuid.uuid4(), accepted=accepted
    )
    assert note.type == expected_type
    assert note.message == f'Raj Patel {verb} your recipe "Momo".'


def test_meal_reminder_notification(db_session, user):
    note = NotificationService.notify_meal_reminder(
        db_session, user.user_id, "lunch", "Dal Bhat", date(2026, 5, 1)
    )
    assert note.title == "Time for lunch!"
    assert note.data["meal_date"] == "2026-05-01"


def test_notification_for_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        NotificationService.create_notification(
            db_session, uuid.uuid4(), NotificationType.MEAL_REMINDER, "t", "m"
        )


def test_notification_stored_read_when_in_app_disabled(db_session):
    quiet = create_user(preferences={"notifications": {"in_app": False}})
    note = NotificationService.notify_meal_reminder(
        db_session, quiet.user_id, "dinner", "Thukpa", date(2026, 5, 1)
    )
    assert note.is_read is True
    assert NotificationService.unread_count(db_session, quiet.user_id) == 0


# =============================================================================
# INBOX API
# =============================================================================


def test_list_newest_first_and_unread_filter(db_session, user, headers):
    """
    Verifies:
    - Notifications come newest first
    - unread_only hides read ones
    - limit caps the list
    """
    notes = _seed(db_session, user)
    NotificationService.mark_as_read(db_session, user.user_id, notes[2].notification_id)

    r = client.get(f"{API}/notifications", headers=headers)
    assert r.status_code == 200
    assert [n["title"] for n in r.json()] == ["Time for dinner!"] * 3
    assert [n["data"]["recipe_name"] for n in r.json()] == ["Recipe 2", "Recipe 1", "Recipe 0"]

    unread = client.get(f"{API}/notifications", params={"unread_only": True}, headers=headers)
    assert [n["data"]["recipe_name"] for n in unread.json()] == ["Recipe 1", "Recipe 0"]

    limited = client.get(f"{API}/notifications", params={"limit": 1}, headers=headers)
    assert len(limited.json()) == 1


@pytest.mark.parametrize("limit", [0, 201])
def test_list_limit_bounds(headers, limit):
    r = client.get(f"{API}/notifications", params={"limit": limit}, headers=headers)
    assert r.status_code == 422


def test_unread_count_and_mark_all(db_session, user, headers):
    _seed(db_session, user, count=4)
    other = create_user("casual")
    _seed(db_session, other, count=2)

    assert client.get(f"{API}/notifications/unread-count", headers=headers).json() == {"count": 4}

    r = client.patch(f"{API}/notifications/mark-all-read", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "modified_count": 4}

    assert client.get(f"{API}/notifications/unread-count", headers=headers).json() == {"count": 0}
    assert NotificationService.unread_count(db_session, other.user_id) == 2


def test_mark_single_read(db_session, user, headers):
    note = _seed(db_session, user, count=1)[0]
    r = client.patch(f"{API}/notifications/{note.notification_id}/read", headers=headers)
    assert r.status_code == 200
    assert r.json()["is_read"] is True
    assert r.json()["notification_id"] == str(note.notification_id)


def test_notifications_scoped_to_owner(db_session, headers):
    other = create_user("athlete")
    note = _seed(db_session, other, count=1)[0]

    assert (
        client.patch(f"{API}/notifications/{note.notification_id}/read", headers=headers).status_code
        == 404
    )
    assert client.delete(f"{API}/notifications/{note.notification_id}", headers=headers).status_code == 404
    assert client.patch(f"{API}/notifications/{uuid.uuid4()}/read", headers=headers).status_code == 404


def test_delete_notification(db_session, user, headers):
    note_id = _seed(db_session, user, count=1)[0].notification_id
    r = client.delete(f"{API}/notifications/{note_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["success"] is True

    db_session.expire_all()
    assert db_session.get(Notification, note_id) is None
