"""
API tests for the admissions endpoints.

These tests drive the whole wizard over HTTP: open, edit, attach,
continue, submit and close, with the session carried by cookie.
"""

import pytest

from app.core.config import settings
from app.modules.admissions import service
from app.modules.admissions.submission import StubSubmissionService

BASE = "/api/v1/admissions"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture(autouse=True)
def instant_submission(monkeypatch):
    """Resolve submissions without the simulated network delay."""
    monkeypatch.setattr(
        service, "get_submission_service", lambda: StubSubmissionService(delay_seconds=0)
    )


async def _fill_step1(client, student_fields):
    response = await client.patch(f"{BASE}/draft", json={"fields": student_fields})
    assert response.status_code == 200
    response = await client.post(f"{BASE}/continue")
    assert response.status_code == 200
    assert response.json()["step"] == "step2"


class TestFormSchemaEndpoints:
    """Tests for the read-only schema and fee endpoints."""

    @pytest.mark.asyncio
    async def test_get_schema(self, client):
        response = await client.get(f"{BASE}/schema")

        assert response.status_code == 200
        data = response.json()
        assert data["school_name"] == "Ambassador International School"
        assert len(data["declarations"]) == 4

    @pytest.mark.asyncio
    async def test_get_fees_for_grade(self, client):
        response = await client.get(f"{BASE}/fees/grade1")

        assert response.status_code == 200
        assert response.json()["total"] == "100.00"

    @pytest.mark.asyncio
    async def test_unknown_grade(self, client):
        response = await client.get(f"{BASE}/fees/grade12")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "UNKNOWN_GRADE"

    @pytest.mark.asyncio
    async def test_list_fees(self, client):
        response = await client.get(f"{BASE}/fees")

        assert response.status_code == 200
        assert len(response.json()) == 9


class TestOpenAndEdit:
    """Tests for opening the form and editing the draft."""

    @pytest.mark.asyncio
    async def test_open_sets_session_cookie(self, client):
        response = await client.post(f"{BASE}/open")

        assert response.status_code == 200
        assert settings.session_cookie_name in response.cookies
        data = response.json()
        assert data["step"] == "step1"
        assert data["can_submit"] is False
        assert data["draft"]["first_name"] == ""

    @pytest.mark.asyncio
    async def test_state_requires_open_form(self, client):
        response = await client.get(BASE)

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "FORM_NOT_OPEN"

    @pytest.mark.asyncio
    async def test_edit_normalizes_phone(self, client):
        await client.post(f"{BASE}/open")

        response = await client.patch(
            f"{BASE}/draft", json={"fields": {"guardian_phone": "+266 5012 3456"}}
        )

        assert response.status_code == 200
        assert response.json()["draft"]["guardian_phone"] == "26650123456"

    @pytest.mark.asyncio
    async def test_unknown_field(self, client):
        await client.post(f"{BASE}/open")

        response = await client.patch(f"{BASE}/draft", json={"fields": {"shoe_size": "4"}})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "UNKNOWN_FIELD"
        assert detail["field"] == "shoe_size"

    @pytest.mark.asyncio
    async def test_continue_blocked_returns_errors(self, client):
        await client.post(f"{BASE}/open")

        response = await client.post(f"{BASE}/continue")

        data = response.json()
        assert data["step"] == "step1"
        assert data["errors"]["first_name"] == "This field is required"

    @pytest.mark.asyncio
    async def test_close_and_reopen_restores_draft(self, client):
        await client.post(f"{BASE}/open")
        await client.patch(f"{BASE}/draft", json={"fields": {"first_name": "Amara", "grade": "grade1"}})

        closed = await client.post(f"{BASE}/close")
        reopened = await client.post(f"{BASE}/open")

        assert closed.json()["draft_retained"] is True
        draft = reopened.json()["draft"]
        assert draft["first_name"] == "Amara"
        assert draft["grade"] == "grade1"
        assert draft["last_name"] == ""

    @pytest.mark.asyncio
    async def test_close_without_open_form(self, client):
        response = await client.post(f"{BASE}/close")

        assert response.status_code == 200
        assert response.json()["draft_retained"] is False


class TestAttachments:
    """Tests for attachment upload, preview and removal."""

    @pytest.mark.asyncio
    async def test_upload_and_preview_photo(self, client):
        await client.post(f"{BASE}/open")

        response = await client.put(
            f"{BASE}/attachments/photo",
            files={"file": ("amara.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 200
        photo = response.json()["attachments"]["photo"]
        assert photo["filename"] == "amara.png"
        assert photo["size"] == len(PNG_BYTES)

        preview = await client.get(photo["preview_url"])
        assert preview.status_code == 200
        assert preview.content == PNG_BYTES
        assert preview.headers["content-type"] == "image/png"
        assert preview.headers["cache-control"] == "no-store"

    @pytest.mark.asyncio
    async def test_removed_photo_preview_is_gone(self, client):
        await client.post(f"{BASE}/open")
        uploaded = await client.put(
            f"{BASE}/attachments/photo",
            files={"file": ("amara.png", PNG_BYTES, "image/png")},
        )
        preview_url = uploaded.json()["attachments"]["photo"]["preview_url"]

        removed = await client.delete(f"{BASE}/attachments/photo")
        preview = await client.get(preview_url)

        assert removed.json()["attachments"] == {}
        assert preview.status_code == 404

    @pytest.mark.asyncio
    async def test_oversized_upload_is_rejected(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_attachment_bytes", 1024)
        await client.post(f"{BASE}/open")

        response = await client.put(
            f"{BASE}/attachments/photo",
            files={"file": ("big.png", b"\x00" * 4096, "image/png")},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "ATTACHMENT_REJECTED"
        assert detail["field"] == "photo"
        assert detail["message"].startswith("File too large")

    @pytest.mark.asyncio
    async def test_proof_requires_paid(self, client):
        await client.post(f"{BASE}/open")

        response = await client.put(
            f"{BASE}/attachments/proof_of_payment",
            files={"file": ("receipt.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "proof_of_payment"


class TestSubmit:
    """Tests for submitting the application."""

    @pytest.mark.asyncio
    async def test_full_application(self, client, student_fields, guardian_fields):
        await client.post(f"{BASE}/open")
        await _fill_step1(client, student_fields)
        await client.patch(f"{BASE}/draft", json={"fields": guardian_fields})

        response = await client.post(f"{BASE}/submit")

        assert response.status_code == 200
        data = response.json()
        assert data["step"] == "confirmed"
        assert data["reference_id"].startswith("AIS-")
        assert data["errors"] == {}

        closed = await client.post(f"{BASE}/close")
        reopened = await client.post(f"{BASE}/open")
        assert closed.json()["draft_retained"] is False
        assert reopened.json()["draft"]["first_name"] == ""

    @pytest.mark.asyncio
    async def test_step2_errors_keep_form_on_step2(self, client, student_fields, guardian_fields):
        await client.post(f"{BASE}/open")
        await _fill_step1(client, student_fields)
        await client.patch(
            f"{BASE}/draft",
            json={"fields": {**guardian_fields, "guardian_email": "not-an-email"}},
        )

        response = await client.post(f"{BASE}/submit")

        data = response.json()
        assert data["step"] == "step2"
        assert data["errors"] == {"guardian_email": "Invalid email format"}

    @pytest.mark.asyncio
    async def test_paying_later_cannot_submit(self, client, student_fields, guardian_fields):
        await client.post(f"{BASE}/open")
        await _fill_step1(client, student_fields)
        await client.patch(f"{BASE}/draft", json={"fields": guardian_fields})
        state = await client.patch(
            f"{BASE}/draft", json={"fields": {"payment_status": "not_yet_paid"}}
        )

        response = await client.post(f"{BASE}/submit")

        assert state.json()["can_submit"] is False
        assert state.json()["draft"]["payment_reference"] == ""
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "SUBMIT_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_submit_from_step1(self, client):
        await client.post(f"{BASE}/open")

        response = await client.post(f"{BASE}/submit")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "INVALID_TRANSITION"

    @pytest.mark.asyncio
    async def test_edits_rejected_after_confirmation(self, client, student_fields, guardian_fields):
        await client.post(f"{BASE}/open")
        await _fill_step1(client, student_fields)
        await client.patch(f"{BASE}/draft", json={"fields": guardian_fields})
        await client.post(f"{BASE}/submit")

        response = await client.patch(f"{BASE}/draft", json={"fields": {"first_name": "Zola"}})

        assert response.status_code == 409
