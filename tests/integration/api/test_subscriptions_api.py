import sqlite3
from urllib.parse import parse_qs, urlparse

import pytest

from src.adapters.dev_email import DevEmailAdapter
from src.adapters.sqlite.repos import SQLiteSubscriberStore
from src.components.subscribers import SubscriberStatus


def _token_from_last_email(email_adapter: DevEmailAdapter) -> str:
    email = email_adapter.get_last_email()
    assert email is not None
    link = email.text_body.split("Visit ", 1)[1].split(" ", 1)[0]
    return parse_qs(urlparse(link).query)["subscription_token"][0]


# --- POST /subscriptions ---


def test_subscribe_returns_200_for_valid_form(client, store: SQLiteSubscriberStore):
    response = client.post(
        "/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"}
    )

    assert response.status_code == 200
    rows = store.list_by_email("ursula_le_guin@gmail.com")
    assert len(rows) == 1
    assert rows[0].name == "le guin"
    assert rows[0].status == SubscriberStatus.PENDING_CONFIRMATION


def test_subscribe_sends_confirmation_email_with_link(client, email_adapter: DevEmailAdapter):
    client.post("/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"})

    email = email_adapter.get_last_email()
    assert email is not None
    assert email.recipient == "ursula_le_guin@gmail.com"

    link = urlparse(email.text_body.split("Visit ", 1)[1].split(" ", 1)[0])
    assert link.hostname == "127.0.0.1"
    assert link.path == "/subscriptions/confirm"
    assert len(parse_qs(link.query)["subscription_token"][0]) == 25


@pytest.mark.parametrize(
    "data,description",
    [
        ({"name": "le guin"}, "missing the email"),
        ({"email": "ursula_le_guin@gmail.com"}, "missing the name"),
        ({}, "missing both name and email"),
        ({"name": "", "email": "ursula_le_guin@gmail.com"}, "empty name"),
        ({"name": "Ursula", "email": ""}, "empty email"),
        ({"name": "Ursula", "email": "definitely-not-an-email"}, "invalid email"),
        ({"name": "<script>", "email": "ursula_le_guin@gmail.com"}, "forbidden characters"),
    ],
)
def test_subscribe_returns_400_for_invalid_data(
    client, email_adapter: DevEmailAdapter, db_path, data, description
):
    response = client.post("/subscriptions", data=data)

    assert response.status_code == 400, f"The API did not fail with 400 when {description}"
    assert response.json()["detail"]["code"] == "validation_error"
    assert email_adapter.email_count == 0


def test_subscribe_twice_creates_two_pending_rows(client, store: SQLiteSubscriberStore):
    form = {"name": "le guin", "email": "ursula_le_guin@gmail.com"}

    assert client.post("/subscriptions", data=form).status_code == 200
    assert client.post("/subscriptions", data=form).status_code == 200

    assert len(store.list_by_email("ursula_le_guin@gmail.com")) == 2


def test_subscribe_returns_500_when_email_fails(
    client, email_adapter: DevEmailAdapter, store: SQLiteSubscriberStore
):
    email_adapter.failing_recipients.add("ursula_le_guin@gmail.com")

    response = client.post(
        "/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"}
    )

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "delivery_error"
    # The row is committed before the email is attempted
    assert len(store.list_by_email("ursula_le_guin@gmail.com")) == 1


def test_subscribe_returns_500_when_store_fails(client, db_path):
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE subscription_tokens")
    conn.commit()
    conn.close()

    response = client.post(
        "/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"}
    )

    assert response.status_code == 500
    assert response.json()["detail"] == {
        "code": "store_error",
        "message": "Internal storage error",
    }


# --- GET /subscriptions/confirm ---


def test_confirm_without_token_returns_400(client):
    response = client.get("/subscriptions/confirm")

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "subscription_token"


def test_confirm_with_unknown_token_returns_401(client):
    response = client.get(
        "/subscriptions/confirm", params={"subscription_token": "unknownunknownunknown1234"}
    )

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "token_not_found"


def test_confirm_with_empty_token_returns_401(client):
    response = client.get("/subscriptions/confirm", params={"subscription_token": ""})

    assert response.status_code == 401


def test_link_from_email_confirms_subscriber(
    client, email_adapter: DevEmailAdapter, store: SQLiteSubscriberStore
):
    client.post("/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"})
    token = _token_from_last_email(email_adapter)

    response = client.get("/subscriptions/confirm", params={"subscription_token": token})

    assert response.status_code == 200
    (row,) = store.list_by_email("ursula_le_guin@gmail.com")
    assert row.status == SubscriberStatus.CONFIRMED


def test_confirming_twice_returns_200(client, email_adapter: DevEmailAdapter):
    client.post("/subscriptions", data={"name": "le guin", "email": "ursula_le_guin@gmail.com"})
    token = _token_from_last_email(email_adapter)

    first = client.get("/subscriptions/confirm", params={"subscription_token": token})
    second = client.get("/subscriptions/confirm", params={"subscription_token": token})

    assert first.status_code == 200
    assert second.status_code == 200


# --- Cross-cutting ---


def test_health_check(client):
    response = client.get("/health_check")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "api"}


def test_request_id_is_echoed(client):
    response = client.get("/health_check", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_request_id_is_generated(client):
    response = client.get("/health_check")
    assert response.headers["X-Request-ID"]
