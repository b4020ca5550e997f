import logging
import sqlite3
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from src.components.credentials.models import StoredCredentials
from src.components.identity import validate_email
from src.components.identity.models import NewSubscriber
from src.components.subscribers import (
    ConfirmedSubscriber,
    RegistrationReceipt,
    RowResult,
    Subscriber,
    SubscriberStatus,
    generate_subscription_token,
)
from src.core.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteRepoBase:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self, operation: str) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = dict_factory
            conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as e:
            logger.error("Failed to open database %s: %s", self.db_path, e)
            raise StoreError(operation, str(e)) from e
        return conn


class SQLiteSubscriberStore(SQLiteRepoBase):
    """Subscriber rows and confirmation tokens (SubscriberStorePort)."""

    def __init__(
        self,
        db_path: str,
        token_factory: Callable[[], str] = generate_subscription_token,
    ):
        super().__init__(db_path)
        self._token_factory = token_factory

    def register(self, new_subscriber: NewSubscriber) -> RegistrationReceipt:
        subscriber_id = uuid4()
        token = self._token_factory()
        conn = self._get_conn("register")
        try:
            # Both inserts run in one implicit transaction
            conn.execute(
                """
                INSERT INTO subscriptions (id, email, name, subscribed_at, status)
                VALUES (?, ?, ?, ?, ?)
            """,
                (
                    str(subscriber_id),
                    new_subscriber.email.value,
                    new_subscriber.name.value,
                    datetime.now(UTC).isoformat(),
                    SubscriberStatus.PENDING_CONFIRMATION.value,
                ),
            )
            conn.execute(
                """
                INSERT INTO subscription_tokens (subscription_token, subscriber_id)
                VALUES (?, ?)
            """,
                (token, str(subscriber_id)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to register subscriber: %s", e)
            raise StoreError("register", str(e)) from e
        finally:
            conn.close()

        return RegistrationReceipt(subscriber_id=subscriber_id, token=token)

    def get_subscriber_id_by_token(self, token: str) -> UUID | None:
        conn = self._get_conn("get_subscriber_id_by_token")
        try:
            row = conn.execute(
                "SELECT subscriber_id FROM subscription_tokens WHERE subscription_token = ?",
                (token,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Failed to look up subscription token: %s", e)
            raise StoreError("get_subscriber_id_by_token", str(e)) from e
        finally:
            conn.close()

        return UUID(row["subscriber_id"]) if row else None

    def mark_confirmed(self, subscriber_id: UUID) -> None:
        conn = self._get_conn("mark_confirmed")
        try:
            conn.execute(
                "UPDATE subscriptions SET status = ? WHERE id = ?",
                (SubscriberStatus.CONFIRMED.value, str(subscriber_id)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to confirm subscriber %s: %s", subscriber_id, e)
            raise StoreError("mark_confirmed", str(e), subscriber_id=subscriber_id) from e
        finally:
            conn.close()

    def list_confirmed(self) -> Iterator[RowResult[ConfirmedSubscriber]]:
        conn = self._get_conn("list_confirmed")
        try:
            # Fully read and closed before the first row is yielded
            rows = conn.execute(
                "SELECT id, email FROM subscriptions WHERE status = ?",
                (SubscriberStatus.CONFIRMED.value,),
            ).fetchall()
        except sqlite3.Error as e:
            logger.error("Failed to read confirmed subscribers: %s", e)
            raise StoreError("list_confirmed", str(e)) from e
        finally:
            conn.close()

        for row in rows:
            try:
                email = validate_email(row["email"])
            except ValidationError as e:
                yield RowResult.failure(f"subscriber {row['id']}: {e.message}")
                continue
            yield RowResult.success(ConfirmedSubscriber(email=email.value))

    def get_by_id(self, subscriber_id: UUID) -> Subscriber | None:
        conn = self._get_conn("get_by_id")
        try:
            row = conn.execute(
                "SELECT * FROM subscriptions WHERE id = ?", (str(subscriber_id),)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError("get_by_id", str(e), subscriber_id=subscriber_id) from e
        finally:
            conn.close()

        return self._map_row(row) if row else None

    def list_by_email(self, email: str) -> list[Subscriber]:
        conn = self._get_conn("list_by_email")
        try:
            rows = conn.execute(
                "SELECT * FROM subscriptions WHERE email = ? ORDER BY subscribed_at",
                (email,),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError("list_by_email", str(e)) from e
        finally:
            conn.close()

        return [self._map_row(r) for r in rows]

    def _map_row(self, row: dict[str, Any]) -> Subscriber:
        return Subscriber(
            id=UUID(row["id"]),
            email=row["email"],
            name=row["name"],
            status=SubscriberStatus(row["status"]),
            subscribed_at=datetime.fromisoformat(row["subscribed_at"]),
        )


class SQLiteUserRepo(SQLiteRepoBase):
    """Publisher credentials (CredentialStorePort)."""

    def save(self, username: str, password_hash: str) -> UUID:
        user_id = uuid4()
        conn = self._get_conn("save_user")
        try:
            conn.execute(
                "INSERT INTO users (user_id, username, password_hash) VALUES (?, ?, ?)",
                (str(user_id), username, password_hash),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError("save_user", str(e), username=username) from e
        finally:
            conn.close()
        return user_id

    def get_stored_credentials(self, username: str) -> StoredCredentials | None:
        conn = self._get_conn("get_stored_credentials")
        try:
            row = conn.execute(
                "SELECT user_id, password_hash FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Failed to look up credentials: %s", e)
            raise StoreError("get_stored_credentials", str(e)) from e
        finally:
            conn.close()

        if not row:
            return None
        return StoredCredentials(
            user_id=UUID(row["user_id"]),
            password_hash=row["password_hash"],
        )
