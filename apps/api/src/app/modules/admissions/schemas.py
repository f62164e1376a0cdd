"""
Admissions Schemas

Pydantic schemas for the application draft, the submission payload and
the API request/response bodies.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.modules.admissions.models import AttachmentKind, FormStep, PaymentStatus


class ApplicationDraft(BaseModel):
    """
    The in-progress application record.

    Holds only the business fields, all of which survive a save/restore
    cycle. File attachments are kept by the engine, outside the draft.
    Every field has a default so a blank draft is ``ApplicationDraft()``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    # Student identity
    grade: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    gender: str = ""
    nationality: str = ""
    home_language: str = ""
    place_of_birth: str = ""
    religion: str = ""
    living_with: str = ""
    living_with_other: str = ""

    # Student health and history
    has_disability: bool = False
    disability_description: str = ""
    medical_conditions: str = ""
    allergies: str = ""
    previous_school_name: str = ""
    previous_school_grade: str = ""
    previous_school_reason: str = ""
    previous_school_from: str = ""
    previous_school_to: str = ""

    # Guardian
    guardian_first_name: str = ""
    guardian_last_name: str = ""
    guardian_relationship: str = ""
    guardian_email: str = ""
    guardian_phone: str = ""
    guardian_alt_phone: str = ""
    guardian_address: str = ""
    guardian_occupation: str = ""
    guardian_employer: str = ""

    # Emergency contact
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""

    # Payment
    payment_status: PaymentStatus = PaymentStatus.UNSET
    payment_reference: str = ""
    payment_method: str = ""

    # Declarations
    declare_information_accurate: bool = False
    declare_fee_commitment: bool = False
    declare_parental_involvement: bool = False
    declare_school_policies: bool = False

    # Signature
    signature_name: str = ""
    signature_date: str = ""


# Fields whose values are coerced to digits on every edit
PHONE_FIELDS = frozenset({"guardian_phone", "guardian_alt_phone", "emergency_contact_phone"})

# Fields that only apply while payment_status is "paid"
PAID_ONLY_FIELDS = ("payment_reference", "payment_method")


class AttachmentPayload(BaseModel):
    """A file attachment encoded for the submission service."""

    filename: str
    content_type: str
    data_base64: str


class ApplicationPayload(ApplicationDraft):
    """
    Complete application sent to the submission service.

    Encoded as JSON with attachments inlined as base64.
    """

    model_config = ConfigDict(validate_assignment=False, extra="forbid")

    photo: AttachmentPayload | None = None
    proof_of_payment: AttachmentPayload | None = None
    submitted_at: datetime


class SubmissionResult(BaseModel):
    """Successful response from the submission service."""

    reference_id: str = Field(..., min_length=1)


# ============================================
# API Schemas
# ============================================


class DraftUpdateRequest(BaseModel):
    """Field edits applied in order, e.g. ``{"fields": {"first_name": "Amara"}}``."""

    fields: dict[str, Any] = Field(..., min_length=1)


class AttachmentInfo(BaseModel):
    """Metadata for an attached file. The bytes are only reachable via preview_url."""

    kind: AttachmentKind
    filename: str
    content_type: str
    size: int
    preview_url: str


class ApplicationSnapshot(BaseModel):
    """Current state of a visitor's application form."""

    step: FormStep
    draft: ApplicationDraft
    errors: dict[str, str] = Field(default_factory=dict)
    attachments: dict[str, AttachmentInfo] = Field(default_factory=dict)
    can_submit: bool
    is_submitting: bool
    reference_id: str | None = None
    submission_error: str | None = None


class CloseResponse(BaseModel):
    """Response after closing the form."""

    draft_retained: bool
    message: str
