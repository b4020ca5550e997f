from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.app_shell.context import AppContext
from src.components.credentials import Credentials, validate_credentials
from src.components.credentials.ports import CredentialStorePort, PasswordHasherPort
from src.components.subscribers import SubscriberStorePort, SubscriptionConfig
from src.core.errors import AuthorizationError
from src.core.ports.email import EmailGatewayPort


# --- Context ---
def get_context(request: Request) -> AppContext:
    context: AppContext = request.app.state.context
    return context


# --- Ports ---
def get_subscriber_store(ctx: AppContext = Depends(get_context)) -> SubscriberStorePort:
    return ctx.subscriber_store


def get_email_gateway(ctx: AppContext = Depends(get_context)) -> EmailGatewayPort:
    return ctx.email_gateway


def get_subscription_config(ctx: AppContext = Depends(get_context)) -> SubscriptionConfig:
    return ctx.subscription_config


def get_user_repo(ctx: AppContext = Depends(get_context)) -> CredentialStorePort:
    return ctx.user_repo


def get_password_hasher(ctx: AppContext = Depends(get_context)) -> PasswordHasherPort:
    return ctx.password_hasher


# --- Auth ---
basic_auth = HTTPBasic(realm="publish", auto_error=False)


def require_publisher(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
    user_repo: CredentialStorePort = Depends(get_user_repo),
    hasher: PasswordHasherPort = Depends(get_password_hasher),
) -> UUID:
    """Authenticate the caller with HTTP Basic credentials. Returns the user id."""
    if credentials is None:
        raise AuthorizationError("Missing 'Basic' credentials")

    return validate_credentials(
        Credentials(username=credentials.username, password=credentials.password),
        user_repo,
        hasher,
    )
