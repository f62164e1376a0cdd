"""
Unit tests for the submission boundary.
"""

import base64
import json
import re
from datetime import UTC, datetime

import pytest

from app.modules.admissions.models import Attachment, AttachmentKind
from app.modules.admissions.submission import (
    StubSubmissionService,
    build_payload,
    generate_reference_id,
)


class TestGenerateReferenceId:
    def test_format(self):
        reference = generate_reference_id(datetime(2026, 2, 3, tzinfo=UTC))

        assert re.fullmatch(r"AIS-2026-[0-9A-F]{8}", reference)

    def test_unique(self):
        assert len({generate_reference_id() for _ in range(50)}) == 50


class TestBuildPayload:
    """Tests for build_payload."""

    def test_inlines_attachments_as_base64(self, complete_draft):
        photo = Attachment(
            kind=AttachmentKind.PHOTO,
            filename="amara.png",
            content_type="image/png",
            data=b"\x89PNG",
            preview_token="token",
        )

        payload = build_payload(complete_draft, {AttachmentKind.PHOTO: photo})

        assert payload.photo.filename == "amara.png"
        assert base64.b64decode(payload.photo.data_base64) == b"\x89PNG"
        assert payload.proof_of_payment is None
        assert payload.first_name == complete_draft.first_name
        assert payload.submitted_at.tzinfo is not None

    def test_serializes_to_json(self, complete_draft):
        payload = build_payload(complete_draft, {})

        body = json.loads(payload.model_dump_json())

        assert body["payment_status"] == "paid"
        assert body["declare_school_policies"] is True
        assert body["photo"] is None


class TestStubSubmissionService:
    @pytest.mark.asyncio
    async def test_returns_reference(self, complete_draft):
        service = StubSubmissionService(delay_seconds=0)

        result = await service.submit(build_payload(complete_draft, {}))

        assert result.reference_id.startswith("AIS-")
