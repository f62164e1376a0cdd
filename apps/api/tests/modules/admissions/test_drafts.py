"""
Unit tests for application draft persistence.
"""

import json
from unittest.mock import MagicMock

from app.core.session import InMemorySessionStore
from app.modules.admissions.drafts import DRAFT_KEY, DraftStore
from app.modules.admissions.models import PaymentStatus
from app.modules.admissions.schemas import ApplicationDraft


def _failing_store() -> MagicMock:
    store = MagicMock()
    store.read.side_effect = RuntimeError("storage unavailable")
    store.write.side_effect = RuntimeError("quota exceeded")
    store.delete.side_effect = RuntimeError("storage unavailable")
    return store


class TestDraftStore:
    """Tests for DraftStore save/load/clear."""

    def test_save_and_load_keeps_every_field(self, draft_store, complete_draft):
        draft_store.save(complete_draft)

        assert draft_store.load() == complete_draft

    def test_saves_under_fixed_key(self, session_store, complete_draft):
        DraftStore(session_store).save(complete_draft)

        stored = json.loads(session_store.data[DRAFT_KEY])
        assert stored["first_name"] == "Amara"
        assert stored["payment_status"] == "paid"

    def test_nothing_stored_gives_blank_draft(self, draft_store):
        assert draft_store.load() == ApplicationDraft()

    def test_partial_draft_is_merged_over_blank_template(self):
        """A draft holding only first name and grade restores with defaults elsewhere."""
        store = InMemorySessionStore({DRAFT_KEY: json.dumps({"first_name": "Amara", "grade": "grade1"})})

        draft = DraftStore(store).load()

        assert draft.first_name == "Amara"
        assert draft.grade == "grade1"
        assert draft == ApplicationDraft(first_name="Amara", grade="grade1")
        assert draft.payment_status == PaymentStatus.UNSET
        assert draft.declare_information_accurate is False

    def test_unknown_keys_are_dropped(self):
        store = InMemorySessionStore(
            {DRAFT_KEY: json.dumps({"first_name": "Amara", "photo": "data:image/png;base64,AAAA"})}
        )

        draft = DraftStore(store).load()

        assert draft == ApplicationDraft(first_name="Amara")
        assert "photo" not in draft.model_dump()

    def test_malformed_json_gives_blank_draft(self):
        store = InMemorySessionStore({DRAFT_KEY: "{not json"})

        assert DraftStore(store).load() == ApplicationDraft()

    def test_non_object_json_gives_blank_draft(self):
        store = InMemorySessionStore({DRAFT_KEY: json.dumps(["first_name", "Amara"])})

        assert DraftStore(store).load() == ApplicationDraft()

    def test_wrongly_typed_value_gives_blank_draft(self):
        store = InMemorySessionStore({DRAFT_KEY: json.dumps({"payment_status": "later"})})

        assert DraftStore(store).load() == ApplicationDraft()

    def test_failing_store_is_silent(self, complete_draft):
        """Read, write and delete failures never reach the caller."""
        drafts = DraftStore(_failing_store())

        drafts.save(complete_draft)
        drafts.clear()
        assert drafts.load() == ApplicationDraft()

    def test_clear_removes_draft(self, session_store, complete_draft):
        drafts = DraftStore(session_store)
        drafts.save(complete_draft)

        drafts.clear()

        assert DRAFT_KEY not in session_store.data
        assert drafts.load() == ApplicationDraft()
