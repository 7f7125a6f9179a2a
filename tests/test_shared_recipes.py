"""
Tests for sharing user recipes between accounts.

This test suite covers:
- Sharing by recipient email and the checks guarding it
- Received / sent listings and access to a shared recipe
- Accepting, rejecting and removing shares, with owner notifications
- Searching accounts by email
"""

import uuid

import pytest

from test_fixtures import API, client, db_session, create_user, auth_headers, make_recipe
from domain.enums import NotificationType
from domain.models import Notification, UserRecipe


@pytest.fixture
def owner():
    return create_user()


@pytest.fixture
def friend():
    return create_user("casual")


@pytest.fixture
def recipe(owner):
    return make_recipe(owner, "Chicken Momo")


def share(owner, recipe, email, message=None):
    payload = {"recipe_id": str(recipe.recipe_id), "user_email": email}
    if message is not None:
        payload["message"] = message
    return client.post(f"{API}/shared-recipes/share", json=payload, headers=auth_headers(owner))


# =============================================================================
# SHARE
# =============================================================================


def test_share_recipe(owner, friend, recipe, db_session):
    """
    Verifies:
    - 201 with a pending share
    - Recipient email is matched case-insensitively
    - share_count goes up and the recipient gets a notification
    """
    r = share(owner, recipe, friend.email.upper(), message="Try these for Dashain")
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Recipe shared successfully"
    assert body["share"]["status"] == "pending"
    assert body["share"]["shared_with_user_id"] == str(friend.user_id)
    assert body["share"]["message"] == "Try these for Dashain"

    assert db_session.get(UserRecipe, recipe.recipe_id).share_count == 1

    note = db_session.query(Notification).filter_by(user_id=friend.user_id).one()
    assert note.type == NotificationType.RECIPE_SHARED
    assert note.message == 'Sarah Martinez shared "Chicken Momo" with you.'
    assert note.data["share_id"] == body["share"]["share_id"]


def test_share_rejections(owner, friend, recipe):
    assert share(owner, recipe, "nobody-here@example.com").status_code == 404
    assert share(owner, recipe, "nobody-here@example.com").json()["error"]["message"] == (
        "User not found with that email"
    )

    self_share = share(owner, recipe, owner.email)
    assert self_share.status_code == 400
    assert self_share.json()["error"]["message"] == "Cannot share recipe with yourself"

    not_mine = make_recipe(friend, "Sel Roti")
    assert share(owner, not_mine, friend.email).status_code == 404

    assert share(owner, recipe, friend.email).status_code == 201
    dup = share(owner, recipe, friend.email)
    assert dup.status_code == 409
    assert dup.json()["error"]["code"] == "ALREADY_SHARED"


def test_share_respects_recipient_preference(owner, recipe):
    private = create_user("health", preferences={"allow_sharing": False})
    r = share(owner, recipe, private.email)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "SHARING_DISABLED"


def test_share_validation(owner, recipe):
    assert share(owner, recipe, "not-an-email").status_code == 422
    assert share(owner, recipe, "friend@example.com", message="x" * 501).status_code == 422


# =============================================================================
# LISTINGS AND ACCESS
# =============================================================================


def test_received_and_sent(owner, friend, recipe):
    share(owner, recipe, friend.email)

    received = client.get(f"{API}/shared-recipes/received", headers=auth_headers(friend))
    assert received.status_code == 200
    [item] = received.json()
    assert item["recipe"]["name"] == "Chicken Momo"
    assert item["owner"]["name"] == "Sarah Martinez"

    pending = client.get(
        f"{API}/shared-recipes/received", params={"status": "pending"}, headers=auth_headers(friend)
    )
    assert len(pending.json()) == 1
    accepted = client.get(
        f"{API}/shared-recipes/received", params={"status": "accepted"}, headers=auth_headers(friend)
    )
    assert accepted.json() == []

    sent = client.get(f"{API}/shared-recipes/sent", headers=auth_headers(owner))
    [item] = sent.json()
    assert item["recipient"]["email"] == friend.email


def test_shared_recipe_visible_only_after_accept(owner, friend, recipe):
    url = f"{API}/shared-recipes/recipe/{recipe.recipe_id}"
    share_id = share(owner, recipe, friend.email).json()["share"]["share_id"]

    assert client.get(url, headers=auth_headers(owner)).status_code == 200
    assert client.get(url, headers=auth_headers(friend)).status_code == 404

    client.patch(
        f"{API}/shared-recipes/{share_id}/status",
        json={"status": "accepted"},
        headers=auth_headers(friend),
    )
    r = client.get(url, headers=auth_headers(friend))
    assert r.status_code == 200
    assert r.json()["name"] == "Chicken Momo"

    stranger = create_user("athlete")
    assert client.get(url, headers=auth_headers(stranger)).status_code == 404


# =============================================================================
# STATUS AND REMOVAL
# =============================================================================


@pytest.mark.parametrize(
    "new_status, expected_type",
    [
        ("accepted", NotificationType.SHARE_ACCEPTED),
        ("rejected", NotificationType.SHARE_REJECTED),
    ],
)
def test_status_update_notifies_owner(owner, friend, recipe, db_session, new_status, expected_type):
    share_id = share(owner, recipe, friend.email).json()["share"]["share_id"]

    r = client.patch(
        f"{API}/shared-recipes/{share_id}/status",
        json={"status": new_status},
        headers=auth_headers(friend),
    )
    assert r.status_code == 200
    assert r.json()["status"] == new_status

    note = db_session.query(Notification).filter_by(user_id=owner.user_id).one()
    assert note.type == expected_type


def test_only_recipient_updates_status(owner, friend, recipe):
    share_id = share(owner, recipe, friend.email).json()["share"]["share_id"]
    url = f"{API}/shared-recipes/{share_id}/status"

    assert client.patch(url, json={"status": "accepted"}, headers=auth_headers(owner)).status_code == 404
    assert client.patch(url, json={"status": "pending"}, headers=auth_headers(friend)).status_code == 422
    assert (
        client.patch(
            f"{API}/shared-recipes/{uuid.uuid4()}/status",
            json={"status": "accepted"},
            headers=auth_headers(friend),
        ).status_code
        == 404
    )


def test_owner_removes_share(owner, friend, recipe, db_session):
    share_id = share(owner, recipe, friend.email).json()["share"]["share_id"]

    stranger = create_user("athlete")
    assert client.delete(f"{API}/shared-recipes/{share_id}", headers=auth_headers(stranger)).status_code == 404

    r = client.delete(f"{API}/shared-recipes/{share_id}", headers=auth_headers(owner))
    assert r.status_code == 200
    assert r.json() == {"message": "Share removed successfully"}

    db_session.expire_all()
    assert db_session.get(UserRecipe, recipe.recipe_id).share_count == 0
    assert client.get(f"{API}/shared-recipes/received", headers=auth_headers(friend)).json() == []


def test_recipient_dismisses_share(owner, friend, recipe, db_session):
    share_id = share(owner, recipe, friend.email).json()["share"]["share_id"]

    r = client.delete(f"{API}/shared-recipes/{share_id}", headers=auth_headers(friend))
    assert r.status_code == 200

    db_session.expire_all()
    assert db_session.get(UserRecipe, recipe.recipe_id).share_count == 1


def test_deleting_recipe_removes_its_shares(owner, friend, recipe):
    share(owner, recipe, friend.email)
    client.delete(f"{API}/user-recipes/{recipe.recipe_id}", headers=auth_headers(owner))
    assert client.get(f"{API}/shared-recipes/received", headers=auth_headers(friend)).json() == []


# =============================================================================
# USER SEARCH
# =============================================================================


def test_search_users_by_email(owner):
    emma = create_user("casual", email="emma.johnson@kitchen.example.com")
    create_user("athlete", email="michael.chen@kitchen.example.com")

    r = client.get(
        f"{API}/shared-recipes/users/search", params={"email": "EMMA"}, headers=auth_headers(owner)
    )
    assert r.status_code == 200
    assert r.json() == [{"user_id": str(emma.user_id), "email": emma.email, "name": "Emma Johnson"}]

    everyone = client.get(
        f"{API}/shared-recipes/users/search",
        params={"email": "kitchen.example"},
        headers=auth_headers(emma),
    )
    assert [u["name"] for u in everyone.json()] == ["Michael Chen"]


def test_search_users_treats_wildcards_literally(owner):
    sam = create_user("casual", email="sam_rai@kitchen.example.com")
    create_user("athlete", email="samerai@kitchen.example.com")
    headers = auth_headers(owner)
    url = f"{API}/shared-recipes/users/search"

    assert client.get(url, params={"email": "___"}, headers=headers).json() == []
    assert client.get(url, params={"email": "%%%"}, headers=headers).json() == []
    matched = client.get(url, params={"email": "m_r"}, headers=headers).json()
    assert [u["user_id"] for u in matched] == [str(sam.user_id)]


def test_search_users_needs_three_characters(owner):
    r = client.get(
        f"{API}/shared-recipes/users/search", params={"email": "em"}, headers=auth_headers(owner)
    )
    assert r.status_code == 400
