"""
Confirmation component unit tests.

Covers unknown tokens, the pending → confirmed transition, idempotency
and token reuse.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from src.components.confirmation import (
    ConfirmInput,
    ConfirmOutcome,
    run,
    run_confirm,
)
from src.core.errors import StoreError


class MockStore:
    """Minimal token/status store for testing."""

    def __init__(self) -> None:
        self.tokens: dict[str, UUID] = {}
        self.status: dict[UUID, str] = {}
        self.confirm_calls = 0
        self.fail_lookup = False

    def add_pending(self, token: str) -> UUID:
        subscriber_id = uuid4()
        self.tokens[token] = subscriber_id
        self.status[subscriber_id] = "pending_confirmation"
        return subscriber_id

    def get_subscriber_id_by_token(self, token: str) -> UUID | None:
        if self.fail_lookup:
            raise StoreError("get_subscriber_id_by_token", "database is locked")
        return self.tokens.get(token)

    def mark_confirmed(self, subscriber_id: UUID) -> None:
        self.confirm_calls += 1
        self.status[subscriber_id] = "confirmed"


@pytest.fixture
def store() -> MockStore:
    return MockStore()


class TestRunConfirm:
    def test_unknown_token_is_not_found(self, store: MockStore) -> None:
        store.add_pending("known")

        out = run_confirm(ConfirmInput(token="never-issued"), store)  # type: ignore[arg-type]

        assert out.outcome == ConfirmOutcome.TOKEN_NOT_FOUND
        assert out.subscriber_id is None
        assert not out.confirmed
        assert store.confirm_calls == 0
        assert set(store.status.values()) == {"pending_confirmation"}

    def test_empty_token_is_not_found(self, store: MockStore) -> None:
        out = run_confirm(ConfirmInput(token=""), store)  # type: ignore[arg-type]
        assert out.outcome == ConfirmOutcome.TOKEN_NOT_FOUND

    def test_known_token_confirms_subscriber(self, store: MockStore) -> None:
        subscriber_id = store.add_pending("tok")

        out = run_confirm(ConfirmInput(token="tok"), store)  # type: ignore[arg-type]

        assert out.confirmed
        assert out.subscriber_id == subscriber_id
        assert store.status[subscriber_id] == "confirmed"

    def test_confirming_twice_is_idempotent(self, store: MockStore) -> None:
        subscriber_id = store.add_pending("tok")

        first = run_confirm(ConfirmInput(token="tok"), store)  # type: ignore[arg-type]
        second = run_confirm(ConfirmInput(token="tok"), store)  # type: ignore[arg-type]

        assert first.confirmed and second.confirmed
        assert store.status[subscriber_id] == "confirmed"

    def test_only_the_bound_subscriber_changes(self, store: MockStore) -> None:
        target = store.add_pending("tok-a")
        other = store.add_pending("tok-b")

        run_confirm(ConfirmInput(token="tok-a"), store)  # type: ignore[arg-type]

        assert store.status[target] == "confirmed"
        assert store.status[other] == "pending_confirmation"

    def test_store_failure_propagates(self, store: MockStore) -> None:
        store.fail_lookup = True
        with pytest.raises(StoreError):
            run_confirm(ConfirmInput(token="tok"), store)  # type: ignore[arg-type]

    def test_run_rejects_unknown_input(self, store: MockStore) -> None:
        with pytest.raises(ValueError):
            run("tok", store)  # type: ignore[arg-type]
