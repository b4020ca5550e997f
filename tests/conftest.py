import base64
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.adapters.auth.crypto import Argon2AuthAdapter
from src.adapters.dev_email import DevEmailAdapter
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteSubscriberStore, SQLiteUserRepo
from src.api.main import create_app
from src.app_shell.context import AppContext
from src.components.subscribers import SubscriptionConfig

PUBLISHER_USERNAME = "publisher"
PUBLISHER_PASSWORD = "correct horse battery staple"


@pytest.fixture
def db_path(tmp_path):
    """Migrated SQLite database in a temporary directory."""
    path = str(tmp_path / "newsletter.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def store(db_path) -> SQLiteSubscriberStore:
    return SQLiteSubscriberStore(db_path)


@pytest.fixture
def user_repo(db_path) -> SQLiteUserRepo:
    return SQLiteUserRepo(db_path)


@pytest.fixture
def hasher() -> Argon2AuthAdapter:
    return Argon2AuthAdapter()


@pytest.fixture
def email_adapter() -> DevEmailAdapter:
    return DevEmailAdapter()


@pytest.fixture
def publisher(user_repo, hasher) -> tuple[str, str]:
    """A publisher account; returns (username, password)."""
    user_repo.save(PUBLISHER_USERNAME, hasher.hash_password(PUBLISHER_PASSWORD))
    return PUBLISHER_USERNAME, PUBLISHER_PASSWORD


@pytest.fixture
def test_ctx(store, user_repo, hasher, email_adapter) -> AppContext:
    """Application context backed by the temporary DB and the dev email adapter."""
    return AppContext(
        subscription_config=SubscriptionConfig(base_url="http://127.0.0.1"),
        subscriber_store=store,
        user_repo=user_repo,
        password_hasher=hasher,
        email_gateway=email_adapter,
    )


@pytest.fixture
def client(test_ctx) -> Generator[TestClient, None, None]:
    with TestClient(create_app(context=test_ctx)) as c:
        yield c


def basic_auth_header(username: str, password: str) -> dict[str, str]:
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {encoded}"}


@pytest.fixture
def publisher_auth(publisher) -> dict[str, str]:
    """Authorization header for the publisher account."""
    return basic_auth_header(*publisher)
