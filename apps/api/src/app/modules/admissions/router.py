"""
Admissions Router

API endpoints for the student application form. These endpoints are
public (no authentication); each visitor's form is tied to their
session cookie.

Endpoints:
- GET    /admissions/schema - Grades, options and declarations
- GET    /admissions/fees - Fee schedule for every grade
- GET    /admissions/fees/{grade} - Fee schedule for one grade
- POST   /admissions/open - Open the form (restores a saved draft)
- GET    /admissions - Current form state
- PATCH  /admissions/draft - Edit draft fields
- PUT    /admissions/attachments/{kind} - Attach photo or proof of payment
- DELETE /admissions/attachments/{kind} - Remove an attachment
- GET    /admissions/previews/{token} - Attachment preview
- POST   /admissions/continue - Student Details -> Guardian & Payment
- POST   /admissions/back - Back to Student Details
- POST   /admissions/submit - Submit the application
- POST   /admissions/close - Close the form
"""

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.core.session import get_session_id
from app.modules.admissions import service
from app.modules.admissions.errors import AdmissionsError, AttachmentRejectedError
from app.modules.admissions.form_schema import FeeSchedule, FormSchema
from app.modules.admissions.models import AttachmentKind
from app.modules.admissions.schemas import (
    ApplicationSnapshot,
    CloseResponse,
    DraftUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SUBMIT_RATE_LIMIT = 10
SUBMIT_RATE_LIMIT_WINDOW_SECONDS = 600


def _raise_http(e: AdmissionsError) -> NoReturn:
    """Translate an admissions error into an HTTPException."""
    detail: dict[str, str] = {"error": e.error_code, "message": e.message}
    field = getattr(e, "field", None)
    if field:
        detail["field"] = field
    raise HTTPException(status_code=e.status_code, detail=detail) from e


@router.get(
    "/schema",
    response_model=FormSchema,
    summary="Application Form Schema",
    description="Grades, option lists, declarations and accepted attachment types.",
)
async def get_form_schema() -> FormSchema:
    return service.get_schema()


@router.get(
    "/fees",
    response_model=list[FeeSchedule],
    summary="Fee Schedule",
)
async def list_fees() -> list[FeeSchedule]:
    """Get the fee breakdown for every grade."""
    return service.list_fee_schedules()


@router.get(
    "/fees/{grade}",
    response_model=FeeSchedule,
    summary="Fee Schedule for a Grade",
    responses={404: {"description": "Grade not offered"}},
)
async def get_fees(grade: str) -> FeeSchedule:
    try:
        return service.get_fee_schedule(grade)
    except AdmissionsError as e:
        _raise_http(e)


@router.post(
    "/open",
    response_model=ApplicationSnapshot,
    summary="Open Application Form",
    description="""
Open the application form for this session.

If the visitor saved progress earlier in the session, the draft is
restored. Attachments are never restored and must be selected again.
Opening an already open form returns its current state.
""",
)
async def open_application(
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    return await service.open_application(session_id)


@router.get(
    "",
    response_model=ApplicationSnapshot,
    summary="Get Application Form State",
    responses={404: {"description": "No form open for this session"}},
)
async def get_application(
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return service.get_application(session_id)
    except AdmissionsError as e:
        _raise_http(e)


@router.patch(
    "/draft",
    response_model=ApplicationSnapshot,
    summary="Edit Application Fields",
    description="""
Apply field edits in order. Each edited field's error is cleared.

Phone numbers are stored as digits only. Changing `payment_status`
away from `paid` clears the payment reference, payment method and
proof of payment.
""",
    responses={
        404: {"description": "No form open for this session"},
        409: {"description": "Form is submitting, confirmed or closed"},
        422: {"description": "Unknown field or invalid value"},
    },
)
async def update_draft(
    data: DraftUpdateRequest,
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return service.update_draft(session_id, data.fields)
    except AdmissionsError as e:
        _raise_http(e)


@router.put(
    "/attachments/{kind}",
    response_model=ApplicationSnapshot,
    summary="Attach a File",
    description=f"""
Attach the student photo or the proof of payment, replacing any earlier file.

- Maximum size: {settings.max_attachment_bytes // (1024 * 1024)}MB
- Photo: JPG, PNG or WebP
- Proof of payment: JPG, PNG or PDF, only once payment status is `paid`
""",
    responses={422: {"description": "File rejected"}},
)
async def attach_file(
    kind: AttachmentKind,
    file: UploadFile = File(...),
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    # Read one byte past the limit so oversized files are detected without buffering them whole
    data = await file.read(settings.max_attachment_bytes + 1)
    try:
        return service.attach_file(
            session_id,
            kind,
            filename=file.filename or "",
            content_type=file.content_type or "application/octet-stream",
            data=data,
        )
    except AttachmentRejectedError as e:
        logger.info(f"Attachment rejected ({kind.value}): {e.message}")
        _raise_http(e)
    except AdmissionsError as e:
        _raise_http(e)
    finally:
        await file.close()


@router.delete(
    "/attachments/{kind}",
    response_model=ApplicationSnapshot,
    summary="Remove a File",
)
async def remove_file(
    kind: AttachmentKind,
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return service.remove_file(session_id, kind)
    except AdmissionsError as e:
        _raise_http(e)


@router.get(
    "/previews/{token}",
    summary="Attachment Preview",
    response_class=Response,
    responses={404: {"description": "Preview released or unknown"}},
)
async def get_preview(token: str) -> Response:
    try:
        preview = service.get_preview(token)
    except AdmissionsError as e:
        _raise_http(e)
    return Response(
        content=preview.data,
        media_type=preview.content_type,
        headers={"Cache-Control": "no-store"},
    )


@router.post(
    "/continue",
    response_model=ApplicationSnapshot,
    summary="Continue to Guardian & Payment",
    description="""
Validate Student Details and move to the second step.

When `ADMISSIONS_BLOCK_ON_STEP1_ERRORS` is on (the default) the form
stays on step 1 while errors exist. Otherwise it moves on and the
errors are returned for display as a notice.
""",
)
async def continue_application(
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return service.continue_application(session_id)
    except AdmissionsError as e:
        _raise_http(e)


@router.post(
    "/back",
    response_model=ApplicationSnapshot,
    summary="Back to Student Details",
)
async def back_application(
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return service.back_application(session_id)
    except AdmissionsError as e:
        _raise_http(e)


@router.post(
    "/submit",
    response_model=ApplicationSnapshot,
    summary="Submit Application",
    description="""
Submit the application.

Requires every declaration to be accepted and payment status other than
`not_yet_paid`. If step 2 has errors the form stays on step 2 and the
errors are returned. On success the response carries the reference
number and the saved draft is deleted. On failure the form returns to
step 2 with `submission_error` set, and the draft is kept for a retry.

Calling submit again while a submission is in flight has no effect.
""",
    responses={
        409: {"description": "Submit unavailable or wrong step"},
        429: {"description": "Too many submissions"},
    },
)
@rate_limit(limit=SUBMIT_RATE_LIMIT, window_seconds=SUBMIT_RATE_LIMIT_WINDOW_SECONDS)
async def submit_application(
    request: Request,
    session_id: str = Depends(get_session_id),
) -> ApplicationSnapshot:
    try:
        return await service.submit_application(session_id)
    except AdmissionsError as e:
        _raise_http(e)
    except Exception as e:
        logger.exception(f"Unexpected error submitting application: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred. Please try again later.",
            },
        ) from e


@router.post(
    "/close",
    response_model=CloseResponse,
    summary="Close Application Form",
    description="""
Close the form. Unless the application was confirmed, progress stays
saved for the rest of the session. After a confirmed submission the
form is reset for a new application.
""",
)
async def close_application(
    session_id: str = Depends(get_session_id),
) -> CloseResponse:
    return service.close_application(session_id)
