"""
Newsletter publishing endpoint.

Endpoints:
- POST /newsletters - Send an issue to every confirmed subscriber (Basic auth)
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from src.api.deps import get_email_gateway, get_subscriber_store, require_publisher
from src.components.newsletter import PublishInput, run_publish
from src.components.subscribers import SubscriberStorePort
from src.core.ports.email import EmailGatewayPort

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Request Models ---


class Content(BaseModel):
    """Both renderings of the issue."""

    text: str = Field(..., description="Plain text body")
    html: str = Field(..., description="HTML body")


class PublishRequest(BaseModel):
    """Request body for publishing a newsletter issue."""

    title: str = Field(..., description="Subject line")
    content: Content


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        401: {"description": "Missing or invalid credentials"},
        500: {"description": "Storage failure or a failed delivery (fan-out stops)"},
    },
    summary="Publish a newsletter issue",
)
def publish_newsletter(
    body: PublishRequest,
    user_id: UUID = Depends(require_publisher),
    store: SubscriberStorePort = Depends(get_subscriber_store),
    gateway: EmailGatewayPort = Depends(get_email_gateway),
) -> Response:
    """
    Fan the issue out to confirmed subscribers.

    A failed send aborts the remaining deliveries; publishing again re-sends
    to subscribers who already got the issue.
    """
    logger.info("User %s is publishing newsletter '%s'", user_id, body.title)
    run_publish(
        PublishInput(
            title=body.title,
            html_body=body.content.html,
            text_body=body.content.text,
        ),
        store,
        gateway,
    )
    return Response(status_code=status.HTTP_200_OK)
