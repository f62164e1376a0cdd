"""
Admissions Draft Persistence

Saves the in-progress application to the visitor's session store so a
closed (or crashed) form can be resumed later in the same session.

Persistence is best-effort: a failed write is a no-op and an unreadable
draft is treated as no draft at all. Nothing here raises to the caller.
"""

import json
import logging

from pydantic import ValidationError

from app.core.session import SessionStore
from app.modules.admissions.schemas import ApplicationDraft

logger = logging.getLogger(__name__)

DRAFT_KEY = "ais:application-draft"


class DraftStore:
    """Save, load and clear the application draft under a fixed session key."""

    def __init__(self, store: SessionStore, key: str = DRAFT_KEY):
        self.store = store
        self.key = key

    def save(self, draft: ApplicationDraft) -> None:
        """Serialize every draft field to the session store."""
        try:
            self.store.write(self.key, draft.model_dump_json())
        except Exception as e:
            logger.warning(f"Could not save application draft: {e}")

    def load(self) -> ApplicationDraft:
        """
        Restore the saved draft, or a blank one.

        Stored fields are merged over a blank template, so fields added
        since the draft was saved take their defaults and unknown keys are
        dropped.

        Returns:
            The restored draft, or ``ApplicationDraft()`` when nothing valid is stored
        """
        try:
            raw = self.store.read(self.key)
        except Exception as e:
            logger.warning(f"Could not read application draft: {e}")
            return ApplicationDraft()

        if not raw:
            return ApplicationDraft()

        try:
            stored = json.loads(raw)
            if not isinstance(stored, dict):
                raise ValueError("draft is not an object")
            template = ApplicationDraft().model_dump()
            known = {key: value for key, value in stored.items() if key in template}
            return ApplicationDraft.model_validate({**template, **known})
        except (ValueError, ValidationError) as e:
            logger.warning(f"Discarding unreadable application draft: {e}")
            return ApplicationDraft()

    def clear(self) -> None:
        """Remove the saved draft."""
        try:
            self.store.delete(self.key)
        except Exception as e:
            logger.warning(f"Could not clear application draft: {e}")
