"""
Application Form Engine

Drives the two-step application wizard for one visitor:

    STEP1 (Student Details) --continue--> STEP2 (Guardian, Payment, Declarations)
    STEP2 --back--> STEP1
    STEP2 --submit--> SUBMITTING --success--> CONFIRMED
                                 --failure--> STEP2 (draft kept, retry allowed)
    CONFIRMED --close--> draft and attachments wiped

Every draft edit is written to the session store straight away, so a
form closed before submitting can be resumed. Attachments are never
persisted and must be selected again after a restore.

Only one submission can be in flight: while SUBMITTING, further submit
calls are ignored. Closing the form mid-submission detaches it; the
pending result is then discarded instead of being applied.
"""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from app.modules.admissions import validation
from app.modules.admissions.attachments import PreviewRegistry, check_attachment
from app.modules.admissions.drafts import DraftStore
from app.modules.admissions.errors import (
    AttachmentRejectedError,
    FormClosedError,
    InvalidFieldValueError,
    InvalidTransitionError,
    SubmitUnavailableError,
    UnknownFieldError,
)
from app.modules.admissions.form_schema import FormSchema
from app.modules.admissions.models import (
    Attachment,
    AttachmentKind,
    FormStep,
    PaymentStatus,
)
from app.modules.admissions.schemas import PAID_ONLY_FIELDS, PHONE_FIELDS, ApplicationDraft
from app.modules.admissions.submission import (
    SubmissionFailedError,
    SubmissionService,
    build_payload,
)

logger = logging.getLogger(__name__)

GENERIC_SUBMISSION_ERROR = (
    "We could not submit your application right now. Please try again in a moment."
)
PROOF_REQUIRES_PAID = "Select 'I have already paid' before uploading proof of payment."

EDITABLE_STEPS = (FormStep.STEP1, FormStep.STEP2)


class ApplicationFormEngine:
    """State machine, validation and draft persistence for one application attempt."""

    def __init__(
        self,
        drafts: DraftStore,
        submitter: SubmissionService,
        schema: FormSchema,
        previews: PreviewRegistry,
        *,
        block_on_step1_errors: bool = True,
        max_attachment_bytes: int = 5 * 1024 * 1024,
    ):
        self.drafts = drafts
        self.submitter = submitter
        self.schema = schema
        self.previews = previews
        self.block_on_step1_errors = block_on_step1_errors
        self.max_attachment_bytes = max_attachment_bytes

        self.draft: ApplicationDraft = drafts.load()
        self.step = FormStep.STEP1
        self.errors: dict[str, str] = {}
        self.attachments: dict[AttachmentKind, Attachment] = {}
        self.reference_id: str | None = None
        self.submission_error: str | None = None
        self.closed = False

    # ----------------------------------------
    # Guards
    # ----------------------------------------

    def _ensure_open(self) -> None:
        if self.closed:
            raise FormClosedError()

    def _ensure_editable(self, action: str) -> None:
        self._ensure_open()
        if self.step not in EDITABLE_STEPS:
            raise InvalidTransitionError(action, self.step.value)

    @property
    def is_submitting(self) -> bool:
        return self.step == FormStep.SUBMITTING

    @property
    def can_submit(self) -> bool:
        """Whether the submit action is offered right now."""
        return self.step == FormStep.STEP2 and validation.submit_available(
            self.draft, self.schema
        )

    # ----------------------------------------
    # Field edits
    # ----------------------------------------

    def update_field(self, field: str, value: Any) -> None:
        """
        Apply a single field edit.

        Phone fields are reduced to digits before storing. The field's
        error, if any, is cleared immediately. Moving payment status away
        from "paid" wipes the paid-only fields and the proof of payment.

        Raises:
            UnknownFieldError: If the draft has no such field
            InvalidFieldValueError: If the value has the wrong type
        """
        self.update_fields({field: value})

    def update_fields(self, fields: dict[str, Any]) -> None:
        """
        Apply several field edits in order, as one batch.

        Every value is checked before any is applied, so a rejected
        value leaves the draft, its errors and the store untouched.
        """
        self._ensure_editable("edit the application")

        checked = self.draft.model_copy()
        accepted: list[tuple[str, Any]] = []
        for field, value in fields.items():
            if field not in ApplicationDraft.model_fields:
                raise UnknownFieldError(field)
            if field in PHONE_FIELDS:
                value = validation.normalize_phone(value)
            try:
                setattr(checked, field, value)
            except ValidationError as e:
                raise InvalidFieldValueError(field) from e
            accepted.append((field, getattr(checked, field)))

        for field, value in accepted:
            setattr(self.draft, field, value)
            self.errors.pop(field, None)
            if field == "payment_status" and self.draft.payment_status != PaymentStatus.PAID:
                self._clear_paid_only_fields()

        self._persist()

    def _clear_paid_only_fields(self) -> None:
        for field in PAID_ONLY_FIELDS:
            setattr(self.draft, field, "")
            self.errors.pop(field, None)
        self._release_attachment(AttachmentKind.PROOF_OF_PAYMENT)

    def _persist(self) -> None:
        self.drafts.save(self.draft)

    # ----------------------------------------
    # Attachments
    # ----------------------------------------

    def attach(
        self,
        kind: AttachmentKind,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> Attachment:
        """
        Attach a file, replacing any previous one of the same kind.

        A rejected file is not stored; its reason is recorded as the
        field's error and raised.

        Raises:
            AttachmentRejectedError: If the file is too large, empty or of the wrong type
        """
        self._ensure_editable("attach a file")
        field = kind.value

        if kind == AttachmentKind.PROOF_OF_PAYMENT and (
            self.draft.payment_status != PaymentStatus.PAID
        ):
            self.errors[field] = PROOF_REQUIRES_PAID
            raise AttachmentRejectedError(field, PROOF_REQUIRES_PAID)

        problem = check_attachment(
            filename=filename,
            content_type=content_type,
            size=len(data),
            rule=self.schema.attachments.get(field),
            max_bytes=self.max_attachment_bytes,
        )
        if problem:
            self.errors[field] = problem
            raise AttachmentRejectedError(field, problem)

        self._release_attachment(kind)
        attachment = Attachment(
            kind=kind,
            filename=filename,
            content_type=content_type,
            data=data,
            preview_token=self.previews.create(content_type, data),
        )
        self.attachments[kind] = attachment
        self.errors.pop(field, None)
        return attachment

    def clear_attachment(self, kind: AttachmentKind) -> None:
        self._ensure_editable("remove a file")
        self._release_attachment(kind)
        self.errors.pop(kind.value, None)

    def _release_attachment(self, kind: AttachmentKind) -> None:
        attachment = self.attachments.pop(kind, None)
        if attachment is not None:
            self.previews.release(attachment.preview_token)

    def _release_all_attachments(self) -> None:
        for kind in list(self.attachments):
            self._release_attachment(kind)

    # ----------------------------------------
    # Step transitions
    # ----------------------------------------

    def validate_step1(self) -> dict[str, str]:
        """Re-run the Student Details validator and store its error set."""
        self.errors = validation.validate_step1(self.draft, self.schema)
        return dict(self.errors)

    def validate_step2(self) -> dict[str, str]:
        """Re-run the Guardian/Payment/Declarations validator and store its error set."""
        self.errors = validation.validate_step2(self.draft, self.schema)
        return dict(self.errors)

    def continue_to_step2(self) -> bool:
        """
        Leave Student Details for the second step.

        With ``block_on_step1_errors`` the form stays on STEP1 while errors
        exist. Otherwise it moves on and the errors travel along to be
        shown as a notice.

        Returns:
            True if the form is now on STEP2
        """
        self._ensure_open()
        if self.step != FormStep.STEP1:
            raise InvalidTransitionError("continue", self.step.value)

        errors = self.validate_step1()
        if errors and self.block_on_step1_errors:
            return False

        self.step = FormStep.STEP2
        return True

    def back_to_step1(self) -> None:
        self._ensure_open()
        if self.step != FormStep.STEP2:
            raise InvalidTransitionError("go back", self.step.value)
        self.step = FormStep.STEP1
        self.errors = {}

    async def submit(self) -> bool:
        """
        Submit the application.

        Ignored while a submission is already in flight. Otherwise the
        submit gate must be open and the second step must validate.

        Returns:
            True if the application was confirmed

        Raises:
            InvalidTransitionError: If not on STEP2
            SubmitUnavailableError: If a declaration is unchecked or payment is deferred
        """
        self._ensure_open()
        if self.step == FormStep.SUBMITTING:
            logger.info("Submission already in progress, ignoring duplicate submit")
            return False
        if self.step != FormStep.STEP2:
            raise InvalidTransitionError("submit", self.step.value)
        if not validation.submit_available(self.draft, self.schema):
            raise SubmitUnavailableError()

        if self.validate_step2():
            return False

        payload = build_payload(self.draft, self.attachments)
        self.step = FormStep.SUBMITTING
        self.submission_error = None

        try:
            result = await self.submitter.submit(payload)
        except SubmissionFailedError as e:
            logger.warning(f"Submission rejected: {e.message}")
            self._submission_failed(e.message)
            return False
        except asyncio.CancelledError:
            self._submission_failed(GENERIC_SUBMISSION_ERROR)
            raise
        except Exception:
            logger.exception("Submission service failed unexpectedly")
            self._submission_failed(GENERIC_SUBMISSION_ERROR)
            return False

        if self.closed:
            logger.info(
                f"Form closed during submission, discarding result {result.reference_id}"
            )
            return False

        self.step = FormStep.CONFIRMED
        self.reference_id = result.reference_id
        self.errors = {}
        self.drafts.clear()
        return True

    def _submission_failed(self, message: str) -> None:
        if self.closed:
            return
        self.step = FormStep.STEP2
        self.submission_error = message

    # ----------------------------------------
    # Teardown
    # ----------------------------------------

    def close(self) -> bool:
        """
        Close the form and release its attachments.

        After a confirmed submission everything is wiped. Otherwise the
        saved draft is kept so the visitor can resume later.

        Returns:
            True if a draft was kept for later
        """
        if self.closed:
            return self.step != FormStep.CONFIRMED

        draft_retained = self.step != FormStep.CONFIRMED
        if not draft_retained:
            self.drafts.clear()
            self.draft = ApplicationDraft()

        self._release_all_attachments()
        self.errors = {}
        self.closed = True
        return draft_retained
