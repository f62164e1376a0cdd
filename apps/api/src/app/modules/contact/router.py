"""
Contact Router

Public single-step forms on the landing page.

Endpoints:
- POST /contact - Send a message to the school office
- POST /contact/newsletter - Subscribe to the newsletter

Both are rate limited per client IP.
"""

from fastapi import APIRouter, Request

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.modules.contact import service
from app.modules.contact.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    NewsletterSubscribeRequest,
    NewsletterSubscribeResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=ContactMessageResponse,
    summary="Send Contact Message",
    responses={429: {"description": "Too many messages"}},
)
@rate_limit(
    limit=settings.contact_rate_limit,
    window_seconds=settings.contact_rate_limit_window_seconds,
)
async def send_contact_message(
    request: Request,
    data: ContactMessageCreate,
) -> ContactMessageResponse:
    return await service.send_contact_message(data)


@router.post(
    "/newsletter",
    response_model=NewsletterSubscribeResponse,
    summary="Subscribe to Newsletter",
    responses={429: {"description": "Too many requests"}},
)
@rate_limit(
    limit=settings.contact_rate_limit,
    window_seconds=settings.contact_rate_limit_window_seconds,
)
async def subscribe_newsletter(
    request: Request,
    data: NewsletterSubscribeRequest,
) -> NewsletterSubscribeResponse:
    return await service.subscribe_newsletter(data)
