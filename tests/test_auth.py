"""
Tests for accounts and authentication.

This test suite covers:
- Registration with emailed 6-digit verification codes
- Login gated on a verified email
- Password reset and password change
- Bearer token checks (missing, invalid, expired) and the admin role
- Account deletion with everything the account owns
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from test_fixtures import (
    API,
    DEFAULT_PASSWORD,
    client,
    db_session,
    create_user,
    auth_headers,
    make_grocery,
    make_recipe,
    unique_email,
    fake_image_host,
)
from app import security
from app.config import settings
from domain.enums import ShareStatus, UserRole
from domain.models import AppUser, GroceryItem, SharedRecipe, UserRecipe


@pytest.fixture
def fixed_code(monkeypatch):
    """Make every generated verification or reset code predictable"""
    monkeypatch.setattr(security, "generate_verification_code", lambda: "482913")
    return "482913"


def register(email=None, name="Sarah Martinez", password=DEFAULT_PASSWORD):
    return client.post(
        f"{API}/auth/register",
        json={"email": email or unique_email("sarah"), "name": name, "password": password},
    )


# =============================================================================
# SECURITY HELPERS
# =============================================================================


def test_password_hash_roundtrip():
    """
    Verifies:
    - bcrypt hash verifies the original password only
    - A malformed stored hash never verifies
    """
    hashed = security.hash_password("correct horse")
    assert hashed != "correct horse"
    assert security.verify_password("correct horse", hashed)
    assert not security.verify_password("wrong horse", hashed)
    assert not security.verify_password("correct horse", "not-a-bcrypt-hash")
    assert not security.verify_password("correct horse", None)


def test_verification_codes_are_six_digits():
    for _ in range(50):
        code = security.generate_verification_code()
        assert len(code) == 6 and code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_token_carries_subject_and_role():
    user_id = uuid.uuid4()
    claims = security.decode_access_token(security.create_access_token(user_id, "admin"))
    assert claims["sub"] == str(user_id)
    assert claims["role"] == "admin"


# =============================================================================
# REGISTRATION AND VERIFICATION
# =============================================================================


def test_register_creates_unverified_account(fixed_code, db_session):
    """
    Test registration stores a pending verification.

    Verifies:
    - 201 with requires_verification and an unverified user
    - Email is normalized to lowercase
    - The code and its expiry are stored on the account
    """
    r = register(email="  Sarah.Martinez@Example.com ")
    assert r.status_code == 201
    body = r.json()
    assert body["requires_verification"] is True
    assert body["user"]["email"] == "sarah.martinez@example.com"
    assert body["user"]["is_email_verified"] is False
    assert body["user"]["role"] == "user"

    user = db_session.get(AppUser, uuid.UUID(body["user"]["user_id"]))
    assert user.email_verification_code == fixed_code
    assert user.email_verification_expires > security.utcnow()
    assert user.password_hash != DEFAULT_PASSWORD


def test_register_duplicate_email_conflicts(fixed_code):
    email = unique_email("dup")
    assert register(email=email).status_code == 201

    r = register(email=email.upper())
    assert r.status_code == 409
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "EMAIL_TAKEN"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "name": "A", "password": DEFAULT_PASSWORD},
        {"email": "a@example.com", "name": "   ", "password": DEFAULT_PASSWORD},
        {"email": "a@example.com", "name": "A", "password": "short"},
        {"email": "a@example.com", "name": "A", "password": "\u00e9" * 72},
    ],
)
def test_register_rejects_invalid_payload(payload):
    r = client.post(f"{API}/auth/register", json=payload)
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_requires_verified_email(fixed_code):
    """
    Verifies:
    - Login before verification answers 403 EMAIL_NOT_VERIFIED
    - The error details carry the user id needed to verify
    """
    email = unique_email("unverified")
    user_id = register(email=email).json()["user"]["user_id"]

    r = client.post(f"{API}/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert r.status_code == 403
    error = r.json()["error"]
    assert error["code"] == "EMAIL_NOT_VERIFIED"
    assert error["details"] == {"requires_verification": True, "user_id": user_id}


def test_verify_email_then_login(fixed_code):
    """
    Full flow: register, verify with the emailed code, log in.

    Verifies:
    - Wrong code answers 400 INVALID_CODE
    - Right code returns a token that works on /auth/me
    - Verifying twice is rejected
    - Login succeeds afterwards
    """
    email = unique_email("flow")
    user_id = register(email=email).json()["user"]["user_id"]

    wrong = client.post(f"{API}/auth/verify-email", json={"user_id": user_id, "code": "000000"})
    assert wrong.status_code == 400
    assert wrong.json()["error"]["code"] == "INVALID_CODE"

    ok = client.post(f"{API}/auth/verify-email", json={"user_id": user_id, "code": fixed_code})
    assert ok.status_code == 200
    assert ok.json()["message"] == "Email verified successfully"
    token = ok.json()["token"]

    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["is_email_verified"] is True

    again = client.post(f"{API}/auth/verify-email", json={"user_id": user_id, "code": fixed_code})
    assert again.status_code == 400

    login = client.post(f"{API}/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert login.status_code == 200
    assert login.json()["user"]["user_id"] == user_id


def test_verify_email_expired_code(fixed_code, db_session):
    user_id = register().json()["user"]["user_id"]
    user = db_session.get(AppUser, uuid.UUID(user_id))
    user.email_verification_expires = security.utcnow() - timedelta(minutes=1)
    db_session.commit()

    r = client.post(f"{API}/auth/verify-email", json={"user_id": user_id, "code": fixed_code})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "CODE_EXPIRED"


def test_verify_email_rejects_non_ascii_digits(fixed_code):
    user_id = register().json()["user"]["user_id"]
    arabic_indic = "\u0661\u0662\u0663\u0664\u0665\u0666"
    r = client.post(f"{API}/auth/verify-email", json={"user_id": user_id, "code": arabic_indic})
    assert r.status_code == 422
    assert security.codes_equal("\u0664\u0668\u0662\u0669\u0661\u0663", fixed_code) is False


def test_verify_email_unknown_user():
    r = client.post(
        f"{API}/auth/verify-email", json={"user_id": str(uuid.uuid4()), "code": "123456"}
    )
    assert r.status_code == 404


def test_resend_verification_without_mail_server(fixed_code):
    """Email is not configured in tests, so a resend cannot be delivered"""
    user_id = register().json()["user"]["user_id"]
    r = client.post(f"{API}/auth/resend-verification", json={"user_id": user_id})
    assert r.status_code == 503


def test_resend_verification_sends_new_code(monkeypatch, fixed_code):
    sent = []
    from adapters import email_adapter

    monkeypatch.setattr(
        email_adapter, "send_verification_email", lambda to, name, code: sent.append(code) or True
    )
    user_id = register().json()["user"]["user_id"]
    r = client.post(f"{API}/auth/resend-verification", json={"user_id": user_id})
    assert r.status_code == 200
    assert sent == [fixed_code, fixed_code]


# =============================================================================
# LOGIN AND PASSWORDS
# =============================================================================


def test_login_wrong_password():
    user = create_user()
    r = client.post(f"{API}/auth/login", json={"email": user.email, "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "INVALID_CREDENTIALS"

    unknown = client.post(
        f"{API}/auth/login", json={"email": unique_email(), "password": DEFAULT_PASSWORD}
    )
    assert unknown.status_code == 401


def test_forgot_password_does_not_reveal_accounts(fixed_code):
    known = create_user()
    r1 = client.post(f"{API}/auth/forgot-password", json={"email": known.email})
    r2 = client.post(f"{API}/auth/forgot-password", json={"email": unique_email()})
    assert r1.status_code == r2.status_code == 200
    assert r1.json()["message"] == r2.json()["message"]


def test_reset_password_flow(fixed_code):
    """
    Verifies:
    - Reset without a requested code is rejected
    - Wrong code is rejected
    - The emailed code sets the new password
    """
    user = create_user()
    payload = {"email": user.email, "code": fixed_code, "new_password": "brand-new-pass"}

    assert client.post(f"{API}/auth/reset-password", json=payload).status_code == 400

    client.post(f"{API}/auth/forgot-password", json={"email": user.email})
    bad = client.post(f"{API}/auth/reset-password", json={**payload, "code": "111111"})
    assert bad.status_code == 400

    ok = client.post(f"{API}/auth/reset-password", json=payload)
    assert ok.status_code == 200

    login = client.post(
        f"{API}/auth/login", json={"email": user.email, "password": "brand-new-pass"}
    )
    assert login.status_code == 200


def test_change_password():
    user = create_user()
    headers = auth_headers(user)

    wrong = client.post(
        f"{API}/auth/change-password",
        json={"current_password": "not-it", "new_password": "another-pass-1"},
        headers=headers,
    )
    assert wrong.status_code == 401

    same = client.post(
        f"{API}/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": DEFAULT_PASSWORD},
        headers=headers,
    )
    assert same.status_code == 400

    ok = client.post(
        f"{API}/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": "another-pass-1"},
        headers=headers,
    )
    assert ok.status_code == 200
    assert ok.json()["message"] == "Password changed successfully"


def test_new_password_is_limited_to_72_bytes(fixed_code):
    """
    Verifies:
    - 72 two-byte characters are rejected before hashing on every password form
    - 36 two-byte characters still fit
    """
    user = create_user()
    too_long = "\u00e9" * 72

    change = client.post(
        f"{API}/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": too_long},
        headers=auth_headers(user),
    )
    assert change.status_code == 422

    client.post(f"{API}/auth/forgot-password", json={"email": user.email})
    reset = client.post(
        f"{API}/auth/reset-password",
        json={"email": user.email, "code": fixed_code, "new_password": too_long},
    )
    assert reset.status_code == 422

    assert register(password="\u00e9" * 36).status_code == 201


# =============================================================================
# TOKENS AND ROLES
# =============================================================================


def test_missing_and_invalid_tokens():
    missing = client.get(f"{API}/auth/me")
    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "MISSING_TOKEN"

    garbage = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert garbage.status_code == 401
    assert garbage.json()["error"]["code"] == "INVALID_TOKEN"


def test_expired_token():
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "role": "user", "iat": past - timedelta(days=7), "exp": past},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "TOKEN_EXPIRED"


def test_token_with_bad_subject():
    token = jwt.encode(
        {"sub": "not-a-uuid", "role": "user"}, settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    r = client.get(f"{API}/groceries", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_admin_ping_requires_admin_role():
    user = create_user()
    admin = create_user("athlete", role=UserRole.ADMIN)

    assert client.get(f"{API}/auth/admin/ping", headers=auth_headers(user)).status_code == 403
    r = client.get(f"{API}/auth/admin/ping", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json() == {"ok": True, "role": "admin"}


def test_me_for_deleted_account():
    r = client.get(f"{API}/auth/me", headers=auth_headers(uuid.uuid4(), role="user"))
    assert r.status_code == 404


# =============================================================================
# ACCOUNT DELETION
# =============================================================================


def test_delete_account_removes_owned_data(db_session):
    """
    Verifies:
    - Groceries and recipes of the account are deleted
    - Shares the account received are removed and the owner's share_count drops
    """
    user = create_user()
    friend = create_user("casual")
    make_grocery(user, "Milk")
    make_recipe(user, "Momo")
    friend_recipe = make_recipe(friend, "Sel Roti", share_count=1)
    db_session.add(
        SharedRecipe(
            recipe_id=friend_recipe.recipe_id,
            owner_id=friend.user_id,
            shared_with_user_id=user.user_id,
            status=ShareStatus.ACCEPTED,
        )
    )
    db_session.commit()

    r = client.delete(f"{API}/auth/delete-account", headers=auth_headers(user))
    assert r.status_code == 200
    assert r.json()["message"] == "Account deleted successfully"

    db_session.expire_all()
    assert db_session.get(AppUser, user.user_id) is None
    assert db_session.query(GroceryItem).filter_by(user_id=user.user_id).count() == 0
    assert db_session.query(UserRecipe).filter_by(user_id=user.user_id).count() == 0
    assert db_session.query(SharedRecipe).count() == 0
    assert db_session.get(UserRecipe, friend_recipe.recipe_id).share_count == 0


def test_delete_account_discards_recipe_images(fake_image_host):
    user = create_user()
    make_recipe(user, "Momo", image_public_id="kitchensathi/recipes/momo")
    make_recipe(user, "Dal Bhat")
    make_recipe(create_user("casual"), "Sel Roti", image_public_id="kitchensathi/recipes/roti")

    r = client.delete(f"{API}/auth/delete-account", headers=auth_headers(user))
    assert r.status_code == 200
    assert fake_image_host.destroyed == ["kitchensathi/recipes/momo"]
