"""
Admissions Service Layer

Wires a visitor's session to their application form engine and turns
engine state into API snapshots.

Each session has at most one open form. Opening the form restores the
saved draft (or starts blank); closing it releases attachments and,
unless the application was confirmed, keeps the draft for later.
"""

import asyncio
import logging
from typing import Any

from app.core.config import settings
from app.core.session import get_session_store
from app.modules.admissions.attachments import Preview, preview_registry
from app.modules.admissions.drafts import DraftStore
from app.modules.admissions.engine import ApplicationFormEngine
from app.modules.admissions.errors import (
    FormClosedError,
    FormNotOpenError,
    PreviewNotFoundError,
    UnknownGradeError,
)
from app.modules.admissions.form_schema import FeeSchedule, FormSchema, get_form_schema
from app.modules.admissions.models import AttachmentKind
from app.modules.admissions.registry import engine_registry
from app.modules.admissions.schemas import (
    ApplicationSnapshot,
    AttachmentInfo,
    CloseResponse,
)
from app.modules.admissions.submission import get_submission_service

logger = logging.getLogger(__name__)

PREVIEW_PATH = "/api/v1/admissions/previews/{token}"


def create_engine(session_id: str) -> ApplicationFormEngine:
    """Build a form engine for a session, restoring any saved draft."""
    return ApplicationFormEngine(
        drafts=DraftStore(get_session_store(session_id)),
        submitter=get_submission_service(),
        schema=get_form_schema(),
        previews=preview_registry,
        block_on_step1_errors=settings.admissions_block_on_step1_errors,
        max_attachment_bytes=settings.max_attachment_bytes,
    )


def build_snapshot(engine: ApplicationFormEngine) -> ApplicationSnapshot:
    """Render the engine's state for the API."""
    attachments = {
        kind.value: AttachmentInfo(
            kind=kind,
            filename=attachment.filename,
            content_type=attachment.content_type,
            size=attachment.size,
            preview_url=PREVIEW_PATH.format(token=attachment.preview_token),
        )
        for kind, attachment in engine.attachments.items()
    }
    return ApplicationSnapshot(
        step=engine.step,
        draft=engine.draft,
        errors=dict(engine.errors),
        attachments=attachments,
        can_submit=engine.can_submit,
        is_submitting=engine.is_submitting,
        reference_id=engine.reference_id,
        submission_error=engine.submission_error,
    )


def _get_open_engine(session_id: str) -> ApplicationFormEngine:
    engine = engine_registry.get(session_id)
    if engine is None:
        raise FormNotOpenError()
    return engine


async def open_application(session_id: str) -> ApplicationSnapshot:
    """
    Open the application form for a session.

    Re-opening an already open form returns it unchanged. The saved
    draft is restored off the event loop.
    """
    engine = engine_registry.get(session_id)
    if engine is None:
        restored = await asyncio.to_thread(create_engine, session_id)
        # A concurrent open for the same session may have won the race
        engine = engine_registry.get(session_id)
        if engine is None:
            engine = restored
            engine_registry.put(session_id, engine)
            logger.info(f"Opened application form for session {session_id[:8]}")
    return build_snapshot(engine)


def get_application(session_id: str) -> ApplicationSnapshot:
    return build_snapshot(_get_open_engine(session_id))


def update_draft(session_id: str, fields: dict[str, Any]) -> ApplicationSnapshot:
    engine = _get_open_engine(session_id)
    engine.update_fields(fields)
    return build_snapshot(engine)


def attach_file(
    session_id: str,
    kind: AttachmentKind,
    filename: str,
    content_type: str,
    data: bytes,
) -> ApplicationSnapshot:
    engine = _get_open_engine(session_id)
    engine.attach(kind, filename, content_type, data)
    return build_snapshot(engine)


def remove_file(session_id: str, kind: AttachmentKind) -> ApplicationSnapshot:
    engine = _get_open_engine(session_id)
    engine.clear_attachment(kind)
    return build_snapshot(engine)


def continue_application(session_id: str) -> ApplicationSnapshot:
    engine = _get_open_engine(session_id)
    engine.continue_to_step2()
    return build_snapshot(engine)


def back_application(session_id: str) -> ApplicationSnapshot:
    engine = _get_open_engine(session_id)
    engine.back_to_step1()
    return build_snapshot(engine)


async def submit_application(session_id: str) -> ApplicationSnapshot:
    """
    Submit the session's application.

    Returns the snapshot once the submission resolves. A duplicate call
    made while one is in flight returns immediately with the
    ``submitting`` state.
    """
    engine = _get_open_engine(session_id)
    confirmed = await engine.submit()
    if engine.closed:
        raise FormClosedError()
    if confirmed:
        logger.info(
            f"Application confirmed for session {session_id[:8]}: {engine.reference_id}"
        )
    return build_snapshot(engine)


def close_application(session_id: str) -> CloseResponse:
    """Close the session's form. Closing a form that isn't open is a no-op."""
    engine = engine_registry.remove(session_id)
    if engine is None:
        return CloseResponse(draft_retained=False, message="No application form was open.")

    draft_retained = engine.close()
    logger.info(f"Closed application form for session {session_id[:8]}")
    message = (
        "Your progress has been saved. You can continue later."
        if draft_retained
        else "Application closed."
    )
    return CloseResponse(draft_retained=draft_retained, message=message)


def get_preview(token: str) -> Preview:
    preview = preview_registry.get(token)
    if preview is None:
        raise PreviewNotFoundError()
    return preview


def get_schema() -> FormSchema:
    return get_form_schema()


def list_fee_schedules() -> list[FeeSchedule]:
    return get_form_schema().fees


def get_fee_schedule(grade: str) -> FeeSchedule:
    schedule = get_form_schema().fee_schedule_for(grade)
    if schedule is None:
        raise UnknownGradeError(grade)
    return schedule
