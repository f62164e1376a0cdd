"""
Admissions Validation Rules

Step validators return a fresh error set (field name -> message) on
every call; they never patch a previous result. An empty dict means
the step is valid.
"""

import re
from datetime import date

from app.modules.admissions.form_schema import FormSchema
from app.modules.admissions.models import PaymentStatus
from app.modules.admissions.schemas import ApplicationDraft

# Error messages
REQUIRED = "This field is required"
INVALID_OPTION = "Please select a valid option"
INVALID_DATE = "Please enter a valid date"
DATE_NOT_IN_PAST = "Date of birth must be in the past"
INVALID_EMAIL = "Invalid email format"
DIGITS_ONLY = "Phone number may contain digits only"
DECLARATION_REQUIRED = "You must accept this declaration"

# local@domain.tld, with no whitespace or extra @ in the domain part
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(value: object) -> str:
    """Strip every non-digit character from a phone number."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def parse_date(value: str) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` date, returning None if it isn't one."""
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None


def _blank(value: str) -> bool:
    return not value.strip()


def _require(errors: dict[str, str], draft: ApplicationDraft, *fields: str) -> None:
    for field in fields:
        if _blank(getattr(draft, field)):
            errors[field] = REQUIRED


def _require_option(
    errors: dict[str, str], field: str, value: str, allowed: list[str]
) -> None:
    if _blank(value):
        errors[field] = REQUIRED
    elif value not in allowed:
        errors[field] = INVALID_OPTION


def _optional_option(
    errors: dict[str, str], field: str, value: str, allowed: list[str]
) -> None:
    if value and value not in allowed:
        errors[field] = INVALID_OPTION


def _require_digits(errors: dict[str, str], field: str, value: str) -> None:
    if _blank(value):
        errors[field] = REQUIRED
    elif not value.isdigit():
        errors[field] = DIGITS_ONLY


def validate_step1(
    draft: ApplicationDraft,
    schema: FormSchema,
    today: date | None = None,
) -> dict[str, str]:
    """
    Validate the Student Details step.

    Args:
        draft: The application draft
        schema: Form schema supplying the allowed grades and genders
        today: Reference date for the date-of-birth check (defaults to today)

    Returns:
        Error set for the step, empty if valid
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    _require_option(errors, "grade", draft.grade, schema.grade_codes())
    _require(errors, draft, "first_name", "last_name")

    if _blank(draft.date_of_birth):
        errors["date_of_birth"] = REQUIRED
    else:
        born = parse_date(draft.date_of_birth)
        if born is None:
            errors["date_of_birth"] = INVALID_DATE
        elif born >= today:
            errors["date_of_birth"] = DATE_NOT_IN_PAST

    _require_option(errors, "gender", draft.gender, [g.code for g in schema.genders])
    _require(errors, draft, "nationality", "home_language")
    _optional_option(
        errors, "living_with", draft.living_with, [a.code for a in schema.living_arrangements]
    )

    if draft.has_disability and _blank(draft.disability_description):
        errors["disability_description"] = REQUIRED

    return errors


def validate_step2(draft: ApplicationDraft, schema: FormSchema) -> dict[str, str]:
    """
    Validate the Guardian / Payment / Declarations step.

    Args:
        draft: The application draft
        schema: Form schema supplying relationships and declarations

    Returns:
        Error set for the step, empty if valid
    """
    errors: dict[str, str] = {}

    _require(errors, draft, "guardian_first_name", "guardian_last_name")
    _require_option(
        errors,
        "guardian_relationship",
        draft.guardian_relationship,
        [r.code for r in schema.relationships],
    )

    if _blank(draft.guardian_email):
        errors["guardian_email"] = REQUIRED
    elif not is_valid_email(draft.guardian_email):
        errors["guardian_email"] = INVALID_EMAIL

    _require_digits(errors, "guardian_phone", draft.guardian_phone)
    if draft.guardian_alt_phone and not draft.guardian_alt_phone.isdigit():
        errors["guardian_alt_phone"] = DIGITS_ONLY
    _require(errors, draft, "guardian_address")

    _require(errors, draft, "emergency_contact_name")
    _require_digits(errors, "emergency_contact_phone", draft.emergency_contact_phone)

    if draft.payment_status == PaymentStatus.UNSET:
        errors["payment_status"] = REQUIRED
    elif draft.payment_status == PaymentStatus.PAID:
        if _blank(draft.payment_reference):
            errors["payment_reference"] = REQUIRED
        _optional_option(
            errors,
            "payment_method",
            draft.payment_method,
            [m.code for m in schema.payment_methods],
        )

    for field in schema.declaration_fields():
        if not getattr(draft, field):
            errors[field] = DECLARATION_REQUIRED

    _require(errors, draft, "signature_name")
    if _blank(draft.signature_date):
        errors["signature_date"] = REQUIRED
    elif parse_date(draft.signature_date) is None:
        errors["signature_date"] = INVALID_DATE

    return errors


def submit_available(draft: ApplicationDraft, schema: FormSchema) -> bool:
    """
    Whether the submit action is offered.

    Independent of step validation: every declaration must be accepted
    and the guardian must not have chosen to pay later.
    """
    if draft.payment_status == PaymentStatus.NOT_YET_PAID:
        return False
    return all(getattr(draft, field) for field in schema.declaration_fields())
