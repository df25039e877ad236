import uuid

from conftest import POLKA_KEY, bearer, register_and_login


def _api_key(key: str) -> dict[str, str]:
    return {"Authorization": f"ApiKey {key}"}


def _upgrade_event(user_id: str) -> dict:
    return {"event": "user.upgraded", "data": {"user_id": user_id}}


def test_upgrade_marks_user_as_chirpy_red(client):
    login = register_and_login(client, "walt@breakingbad.com")

    response = client.post("/api/polka/webhooks", json=_upgrade_event(login["id"]), headers=_api_key(POLKA_KEY))

    assert response.status_code == 204
    relogin = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "TestPass123!"})
    assert relogin.json()["is_chirpy_red"] is True


def test_other_events_are_acknowledged(client):
    login = register_and_login(client, "walt@breakingbad.com")

    response = client.post(
        "/api/polka/webhooks",
        json={"event": "user.payment_failed", "data": {"user_id": login["id"]}},
        headers=_api_key(POLKA_KEY),
    )

    assert response.status_code == 204
    relogin = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "TestPass123!"})
    assert relogin.json()["is_chirpy_red"] is False


def test_wrong_or_missing_api_key_is_unauthorized(client):
    login = register_and_login(client, "walt@breakingbad.com")
    event = _upgrade_event(login["id"])

    assert client.post("/api/polka/webhooks", json=event).status_code == 401
    assert client.post("/api/polka/webhooks", json=event, headers=_api_key("nope")).status_code == 401
    assert client.post("/api/polka/webhooks", json=event, headers=bearer(POLKA_KEY)).status_code == 401


def test_unknown_user_is_not_found(client):
    response = client.post(
        "/api/polka/webhooks",
        json=_upgrade_event(str(uuid.uuid4())),
        headers=_api_key(POLKA_KEY),
    )

    assert response.status_code == 404


def test_invalid_user_id_is_bad_input(client):
    response = client.post("/api/polka/webhooks", json=_upgrade_event("42"), headers=_api_key(POLKA_KEY))

    assert response.status_code == 400


def test_api_key_is_checked_before_the_body(client):
    assert client.post("/api/polka/webhooks", json={}, headers=_api_key("nope")).status_code == 401
    assert client.post("/api/polka/webhooks", json={}).status_code == 401


def test_bad_body_with_valid_key_is_bad_input(client):
    response = client.post("/api/polka/webhooks", json={}, headers=_api_key(POLKA_KEY))

    assert response.status_code == 400
