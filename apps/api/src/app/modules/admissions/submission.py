"""
Admissions Submission Service

The boundary the form engine hands a completed application to. No real
backend exists yet, so ``StubSubmissionService`` simulates one: it waits
a fixed delay and returns a reference number.
"""

import asyncio
import base64
import logging
import secrets
from datetime import UTC, datetime
from typing import Protocol

from app.core.config import settings
from app.modules.admissions.models import Attachment, AttachmentKind
from app.modules.admissions.schemas import (
    ApplicationDraft,
    ApplicationPayload,
    AttachmentPayload,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "AIS"


class SubmissionFailedError(Exception):
    """Raised by a submission service when the application was not accepted."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SubmissionService(Protocol):
    """Accepts a finished application and returns a reference, or raises SubmissionFailedError."""

    async def submit(self, payload: ApplicationPayload) -> SubmissionResult: ...


def _encode_attachment(attachment: Attachment | None) -> AttachmentPayload | None:
    if attachment is None:
        return None
    return AttachmentPayload(
        filename=attachment.filename,
        content_type=attachment.content_type,
        data_base64=base64.b64encode(attachment.data).decode("ascii"),
    )


def build_payload(
    draft: ApplicationDraft,
    attachments: dict[AttachmentKind, Attachment],
) -> ApplicationPayload:
    """
    Assemble the submission payload from the draft and its attachments.

    Args:
        draft: The validated draft
        attachments: Currently attached files by kind

    Returns:
        JSON-serializable payload with attachments inlined as base64
    """
    return ApplicationPayload(
        **draft.model_dump(),
        photo=_encode_attachment(attachments.get(AttachmentKind.PHOTO)),
        proof_of_payment=_encode_attachment(attachments.get(AttachmentKind.PROOF_OF_PAYMENT)),
        submitted_at=datetime.now(UTC),
    )


def generate_reference_id(now: datetime | None = None) -> str:
    """Generate a reference like ``AIS-2026-4F09C2AB``."""
    now = now or datetime.now(UTC)
    return f"{REFERENCE_PREFIX}-{now.year}-{secrets.token_hex(4).upper()}"


class StubSubmissionService:
    """Submission service stand-in with an artificial delay."""

    def __init__(self, delay_seconds: float | None = None):
        self.delay_seconds = (
            settings.submission_delay_seconds if delay_seconds is None else delay_seconds
        )

    async def submit(self, payload: ApplicationPayload) -> SubmissionResult:
        await asyncio.sleep(self.delay_seconds)
        reference_id = generate_reference_id()
        logger.info(f"Application accepted: reference={reference_id}, grade={payload.grade}")
        return SubmissionResult(reference_id=reference_id)


_submission_service: SubmissionService = StubSubmissionService()


def get_submission_service() -> SubmissionService:
    """Get the submission service used by the form engine."""
    return _submission_service
