from __future__ import annotations

from dataclasses import dataclass

import httpx

from src.adapters.auth.crypto import Argon2AuthAdapter
from src.adapters.dev_email import DevEmailAdapter
from src.adapters.postmark_email import PostmarkEmailGateway, create_http_client
from src.adapters.sqlite.repos import SQLiteSubscriberStore, SQLiteUserRepo
from src.app_shell.config import Settings
from src.components.credentials.ports import CredentialStorePort, PasswordHasherPort
from src.components.subscribers import SubscriberStorePort, SubscriptionConfig
from src.core.ports.email import EmailGatewayPort


@dataclass(frozen=True)
class AppContext:
    """Everything a request handler needs. Built once at startup, never mutated."""

    subscription_config: SubscriptionConfig
    subscriber_store: SubscriberStorePort
    user_repo: CredentialStorePort
    password_hasher: PasswordHasherPort
    email_gateway: EmailGatewayPort
    http_client: httpx.Client | None = None  # Owned here so shutdown can close it

    @classmethod
    def create(cls, settings: Settings) -> AppContext:
        db_path = settings.database.path
        email_settings = settings.email_client

        http_client: httpx.Client | None = None
        gateway: EmailGatewayPort
        if email_settings.provider == "postmark":
            http_client = create_http_client(email_settings.timeout_milliseconds)
            gateway = PostmarkEmailGateway(
                client=http_client,
                base_url=email_settings.base_url,
                sender=email_settings.sender_email,
                authorization_token=email_settings.authorization_token.get_secret_value(),
            )
        else:
            gateway = DevEmailAdapter()

        return cls(
            subscription_config=SubscriptionConfig(base_url=settings.application.base_url),
            subscriber_store=SQLiteSubscriberStore(db_path),
            user_repo=SQLiteUserRepo(db_path),
            password_hasher=Argon2AuthAdapter(),
            email_gateway=gateway,
            http_client=http_client,
        )

    def close(self) -> None:
        if self.http_client is not None:
            self.http_client.close()
