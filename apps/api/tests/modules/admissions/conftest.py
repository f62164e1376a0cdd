"""
Fixtures for admissions tests.
"""

from unittest.mock import AsyncMock

import pytest

from app.core.session import InMemorySessionStore
from app.modules.admissions.attachments import PreviewRegistry
from app.modules.admissions.drafts import DraftStore
from app.modules.admissions.engine import ApplicationFormEngine
from app.modules.admissions.form_schema import load_form_schema
from app.modules.admissions.models import PaymentStatus
from app.modules.admissions.schemas import ApplicationDraft, SubmissionResult


@pytest.fixture
def form_schema():
    """The bundled admissions form schema."""
    return load_form_schema()


@pytest.fixture
def session_store():
    """Empty in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def draft_store(session_store):
    return DraftStore(session_store)


@pytest.fixture
def previews():
    """Preview registry private to one test."""
    return PreviewRegistry()


@pytest.fixture
def mock_submitter():
    """Submission service that accepts everything."""
    submitter = AsyncMock()
    submitter.submit = AsyncMock(return_value=SubmissionResult(reference_id="AIS-2026-00C0FFEE"))
    return submitter


@pytest.fixture
def make_engine(draft_store, mock_submitter, form_schema, previews):
    """Factory for engines sharing this test's store, submitter and previews."""

    def _make(**kwargs) -> ApplicationFormEngine:
        kwargs.setdefault("drafts", draft_store)
        kwargs.setdefault("submitter", mock_submitter)
        return ApplicationFormEngine(
            schema=form_schema,
            previews=previews,
            **kwargs,
        )

    return _make


@pytest.fixture
def engine(make_engine):
    """A freshly opened engine with no saved draft."""
    return make_engine()


@pytest.fixture
def student_fields():
    """Valid Student Details."""
    return {
        "grade": "grade1",
        "first_name": "Amara",
        "last_name": "Mokoena",
        "date_of_birth": "2019-03-14",
        "gender": "female",
        "nationality": "Mosotho",
        "home_language": "Sesotho",
        "has_disability": False,
    }


@pytest.fixture
def guardian_fields():
    """Valid Guardian, Payment, Declarations and Signature fields."""
    return {
        "guardian_first_name": "Lerato",
        "guardian_last_name": "Mokoena",
        "guardian_relationship": "mother",
        "guardian_email": "lerato@example.com",
        "guardian_phone": "+266 5012 3456",
        "guardian_address": "12 Kingsway, Maseru",
        "emergency_contact_name": "Thabo Mokoena",
        "emergency_contact_phone": "5898 7654",
        "payment_status": PaymentStatus.PAID.value,
        "payment_reference": "ECO-778812",
        "payment_method": "ecocash",
        "declare_information_accurate": True,
        "declare_fee_commitment": True,
        "declare_parental_involvement": True,
        "declare_school_policies": True,
        "signature_name": "Lerato Mokoena",
        "signature_date": "2026-01-15",
    }


@pytest.fixture
def complete_draft(student_fields, guardian_fields):
    """A draft that passes both steps (phones already stored as digits)."""
    return ApplicationDraft(
        **{
            **student_fields,
            **guardian_fields,
            "guardian_phone": "26650123456",
            "emergency_contact_phone": "58987654",
        }
    )


@pytest.fixture
def engine_on_step2(engine, student_fields, guardian_fields):
    """An engine on STEP2 with every field filled in validly."""
    engine.update_fields(student_fields)
    assert engine.continue_to_step2()
    engine.update_fields(guardian_fields)
    return engine
