"""HTTP adapter for EmailGatewayPort (Postmark-style JSON API)."""

from __future__ import annotations

import logging

import httpx

from src.core.ports.email import EmailResult

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Postmark-Server-Token"


class PostmarkEmailGateway:
    """
    Sends one email per call with POST {base_url}/email.

    Transport and provider errors become EmailResult.failed; nothing is
    retried here.
    """

    def __init__(
        self,
        client: httpx.Client,
        base_url: str,
        sender: str,
        authorization_token: str,
    ) -> None:
        self._client = client
        self._url = f"{base_url.rstrip('/')}/email"
        self._sender = sender
        self._token = authorization_token

    @property
    def sender(self) -> str:
        return self._sender

    def send(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        payload = {
            "From": self._sender,
            "To": recipient,
            "Subject": subject,
            "HtmlBody": html_body,
            "TextBody": text_body,
        }
        try:
            response = self._client.post(
                self._url,
                json=payload,
                headers={TOKEN_HEADER: self._token},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Email gateway request to %s failed: %s", recipient, e)
            return EmailResult.failed(recipient, str(e))

        message_id = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message_id = body.get("MessageID")
        return EmailResult.success(recipient, message_id)


def create_http_client(timeout_milliseconds: int) -> httpx.Client:
    """Shared client for the gateway; one per application."""
    return httpx.Client(timeout=httpx.Timeout(timeout_milliseconds / 1000))
