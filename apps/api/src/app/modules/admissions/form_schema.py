"""
Admissions Form Schema

The grade list, option lists, declarations, fee table and attachment
rules are configuration data, loaded once at startup. Validation and
the wizard read from here so the form can evolve without touching the
state machine.

Set ``ADMISSIONS_SCHEMA_PATH`` to a JSON file with the same shape as
``DEFAULT_FORM_SCHEMA`` to override the bundled defaults.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field, model_validator

from app.core.config import settings
from app.modules.admissions.schemas import ApplicationDraft

logger = logging.getLogger(__name__)


class Option(BaseModel):
    """A selectable value with its display label."""

    code: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=200)


class Declaration(Option):
    """A mandatory acknowledgment checkbox bound to a draft field."""

    field: str = Field(..., min_length=1)


class FeeLine(BaseModel):
    label: str
    amount: Decimal = Field(..., ge=0)


class FeeSchedule(BaseModel):
    """Fee breakdown for one grade."""

    grade: str
    currency: str = "LSL"
    lines: list[FeeLine]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))


class PaymentInstruction(BaseModel):
    method: str
    details: str


class AttachmentRule(BaseModel):
    """Accepted file types for one attachment input."""

    content_types: list[str]
    extensions: list[str]


class FormSchema(BaseModel):
    """Everything about the application form that is data rather than logic."""

    school_name: str
    grades: list[Option] = Field(..., min_length=1)
    genders: list[Option]
    relationships: list[Option]
    living_arrangements: list[Option]
    payment_methods: list[Option]
    declarations: list[Declaration] = Field(..., min_length=1)
    application_fee: Decimal = Field(..., ge=0)
    currency: str = "LSL"
    fees: list[FeeSchedule]
    payment_instructions: list[PaymentInstruction]
    attachments: dict[str, AttachmentRule]

    @model_validator(mode="after")
    def validate_declaration_fields(self) -> "FormSchema":
        """Each declaration must be bound to a boolean draft field."""
        for declaration in self.declarations:
            field = ApplicationDraft.model_fields.get(declaration.field)
            if field is None or field.annotation is not bool:
                raise ValueError(
                    f"declaration {declaration.code!r} is bound to unknown field {declaration.field!r}"
                )
        return self

    def grade_codes(self) -> list[str]:
        return [grade.code for grade in self.grades]

    def grade_label(self, code: str) -> str | None:
        for grade in self.grades:
            if grade.code == code:
                return grade.label
        return None

    def fee_schedule_for(self, grade: str) -> FeeSchedule | None:
        for schedule in self.fees:
            if schedule.grade == grade:
                return schedule
        return None

    def declaration_fields(self) -> list[str]:
        return [declaration.field for declaration in self.declarations]


APPLICATION_FEE = "100.00"


# Only the application fee is published; tuition comes from a schema override file
def _fee_schedule(grade: str) -> dict[str, Any]:
    return {
        "grade": grade,
        "currency": "LSL",
        "lines": [{"label": "Application fee", "amount": APPLICATION_FEE}],
    }


DEFAULT_FORM_SCHEMA: dict[str, Any] = {
    "school_name": "Ambassador International School",
    "grades": [
        {"code": "preschool", "label": "Pre-School (Ages 3-4)"},
        {"code": "kindergarten", "label": "Kindergarten (Age 5)"},
        {"code": "grade1", "label": "Grade 1"},
        {"code": "grade2", "label": "Grade 2"},
        {"code": "grade3", "label": "Grade 3"},
        {"code": "grade4", "label": "Grade 4"},
        {"code": "grade5", "label": "Grade 5"},
        {"code": "grade6", "label": "Grade 6"},
        {"code": "grade7", "label": "Grade 7"},
    ],
    "genders": [
        {"code": "male", "label": "Male"},
        {"code": "female", "label": "Female"},
    ],
    "relationships": [
        {"code": "mother", "label": "Mother"},
        {"code": "father", "label": "Father"},
        {"code": "grandparent", "label": "Grandparent"},
        {"code": "relative", "label": "Relative"},
        {"code": "legal_guardian", "label": "Legal Guardian"},
        {"code": "other", "label": "Other"},
    ],
    "living_arrangements": [
        {"code": "both_parents", "label": "Both Parents"},
        {"code": "grandparents", "label": "Grandparents"},
        {"code": "relatives", "label": "Relatives"},
        {"code": "single_parent", "label": "Single Parent"},
        {"code": "other", "label": "Others"},
    ],
    "payment_methods": [
        {"code": "ecocash", "label": "Ecocash"},
        {"code": "bank", "label": "Bank Transfer"},
    ],
    "declarations": [
        {
            "code": "information",
            "field": "declare_information_accurate",
            "label": "The information given in this form is true and complete and "
            "no relevant information has been withheld.",
        },
        {
            "code": "fees",
            "field": "declare_fee_commitment",
            "label": "I will pay school fees on the stipulated dates and pay for any "
            "property damage caused by my child.",
        },
        {
            "code": "involvement",
            "field": "declare_parental_involvement",
            "label": "I will ensure my child wears a proper, clean school uniform and "
            "will attend parents' meetings or send a representative.",
        },
        {
            "code": "policies",
            "field": "declare_school_policies",
            "label": "I will abide by and support the school's policies.",
        },
    ],
    "application_fee": APPLICATION_FEE,
    "currency": "LSL",
    "fees": [
        _fee_schedule("preschool"),
        _fee_schedule("kindergarten"),
        _fee_schedule("grade1"),
        _fee_schedule("grade2"),
        _fee_schedule("grade3"),
        _fee_schedule("grade4"),
        _fee_schedule("grade5"),
        _fee_schedule("grade6"),
        _fee_schedule("grade7"),
    ],
    "payment_instructions": [
        {"method": "ecocash", "details": "Ecocash Merchant 32241 - Ambassador International"},
        {"method": "bank", "details": "Lesotho Post Bank 1035142200010"},
    ],
    "attachments": {
        "photo": {
            "content_types": ["image/jpeg", "image/png", "image/webp"],
            "extensions": [".jpg", ".jpeg", ".png", ".webp"],
        },
        "proof_of_payment": {
            "content_types": ["image/jpeg", "image/png", "application/pdf"],
            "extensions": [".jpg", ".jpeg", ".png", ".pdf"],
        },
    },
}


def load_form_schema(path: Path | None = None) -> FormSchema:
    """
    Load the form schema from a JSON file, or the bundled defaults.

    Args:
        path: Optional JSON file overriding the defaults

    Returns:
        The validated FormSchema

    Raises:
        pydantic.ValidationError: If the file does not describe a valid schema
        OSError: If the file cannot be read
    """
    if path is None:
        return FormSchema.model_validate(DEFAULT_FORM_SCHEMA)

    logger.info(f"Loading admissions form schema from {path}")
    return FormSchema.model_validate_json(path.read_text(encoding="utf-8"))


@lru_cache
def get_form_schema() -> FormSchema:
    """Get the form schema configured for this process (loaded once)."""
    return load_form_schema(settings.admissions_schema_path)
