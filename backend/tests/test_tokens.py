import uuid
from datetime import datetime, timedelta

import pytest
from jose import jwt

from chirpy.auth.tokens import TOKEN_ISSUER, create_access_token, verify_access_token
from chirpy.errors import TokenError, TokenErrorReason

SECRET = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
OTHER_SECRET = "fedcba9876543210fedcba9876543210fedcba9876543210fedcba9876543210"


def _claims(**overrides):
    now = datetime.utcnow()
    claims = {
        "iss": TOKEN_ISSUER,
        "iat": now,
        "exp": now + timedelta(hours=1),
        "sub": str(uuid.uuid4()),
    }
    claims.update(overrides)
    return {key: value for key, value in claims.items() if value is not None}


def test_verify_returns_subject_right_after_issue():
    user_id = str(uuid.uuid4())
    token = create_access_token(user_id, SECRET, timedelta(hours=1))

    assert verify_access_token(token, SECRET) == user_id


def test_token_expires_after_lifetime():
    issued_at = datetime.utcnow() - timedelta(hours=2)
    token = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1), now=issued_at)

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.EXPIRED


def test_expiry_is_an_exact_boundary():
    issued_at = datetime(2026, 1, 1, 12, 0, 0)
    user_id = str(uuid.uuid4())
    token = create_access_token(user_id, SECRET, timedelta(seconds=60), now=issued_at)

    assert verify_access_token(token, SECRET, now=issued_at + timedelta(seconds=59)) == user_id
    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET, now=issued_at + timedelta(seconds=60))
    assert exc_info.value.reason is TokenErrorReason.EXPIRED


def test_other_secret_is_rejected():
    token = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, OTHER_SECRET)
    assert exc_info.value.reason is TokenErrorReason.SIGNATURE_INVALID


def test_appended_garbage_is_rejected():
    token = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))

    with pytest.raises(TokenError):
        verify_access_token(token + "garbage", SECRET)


def test_swapped_payload_is_rejected():
    first = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))
    second = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))
    header, _, signature = first.split(".")
    forged = ".".join([header, second.split(".")[1], signature])

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(forged, SECRET)
    assert exc_info.value.reason is TokenErrorReason.SIGNATURE_INVALID


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "...."])
def test_unparseable_tokens_are_malformed(token):
    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.MALFORMED


def test_disallowed_algorithm_is_rejected():
    token = jwt.encode(_claims(), SECRET, algorithm="HS512")

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.SIGNATURE_INVALID


def test_foreign_issuer_is_rejected():
    token = jwt.encode(_claims(iss="someone-else"), SECRET, algorithm="HS256")

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.MALFORMED


def test_missing_expiry_is_rejected():
    claims = _claims()
    del claims["exp"]
    token = jwt.encode(claims, SECRET, algorithm="HS256")

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.MALFORMED


@pytest.mark.parametrize("subject", ["42", "not-a-uuid"])
def test_subject_must_be_a_user_id(subject):
    token = jwt.encode(_claims(sub=subject), SECRET, algorithm="HS256")

    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET)
    assert exc_info.value.reason is TokenErrorReason.SUBJECT_INVALID


def test_fractional_issue_time_does_not_shorten_lifetime():
    issued_at = datetime(2026, 1, 1, 12, 0, 0, 900000)
    user_id = str(uuid.uuid4())
    token = create_access_token(user_id, SECRET, timedelta(seconds=60), now=issued_at)

    just_before_expiry = issued_at + timedelta(seconds=59, microseconds=999999)
    assert verify_access_token(token, SECRET, now=just_before_expiry) == user_id
    with pytest.raises(TokenError) as exc_info:
        verify_access_token(token, SECRET, now=datetime(2026, 1, 1, 12, 1, 1))
    assert exc_info.value.reason is TokenErrorReason.EXPIRED


def test_claims_carry_issuer_and_lifetime():
    issued_at = datetime(2026, 1, 1, 12, 0, 0)
    token = create_access_token(uuid.uuid4(), SECRET, timedelta(minutes=15), now=issued_at)
    claims = jwt.get_unverified_claims(token)

    assert claims["iss"] == TOKEN_ISSUER
    assert claims["exp"] - claims["iat"] == 15 * 60
