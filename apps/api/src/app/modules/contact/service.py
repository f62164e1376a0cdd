"""
Contact Service

Handles the contact and newsletter forms. There is no mail or CRM
backend yet, so both simulate the round trip with a short delay and
log the event without personal details.
"""

import asyncio
import logging

from app.core.config import settings
from app.modules.contact.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    NewsletterSubscribeRequest,
    NewsletterSubscribeResponse,
)

logger = logging.getLogger(__name__)


async def send_contact_message(data: ContactMessageCreate) -> ContactMessageResponse:
    await asyncio.sleep(settings.contact_delay_seconds)
    logger.info(f"Contact message received: subject_length={len(data.subject)}")
    return ContactMessageResponse()


async def subscribe_newsletter(data: NewsletterSubscribeRequest) -> NewsletterSubscribeResponse:
    await asyncio.sleep(settings.contact_delay_seconds)
    logger.info("Newsletter subscription received")
    return NewsletterSubscribeResponse()
