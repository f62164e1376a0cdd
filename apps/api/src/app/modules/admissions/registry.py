"""
Open Form Registry

Keeps the live form engine of each session in process memory. Engines
hold attachments and the in-flight submission, which never go to the
session store, so they are tracked here and evicted once idle.
"""

import logging
import time
from dataclasses import dataclass, field

from app.modules.admissions.engine import ApplicationFormEngine

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    engine: ApplicationFormEngine
    last_seen: float = field(default_factory=time.monotonic)


class EngineRegistry:
    """Session id -> open ApplicationFormEngine."""

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, session_id: str) -> ApplicationFormEngine | None:
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        entry.last_seen = time.monotonic()
        return entry.engine

    def put(self, session_id: str, engine: ApplicationFormEngine) -> None:
        self._entries[session_id] = _Entry(engine=engine)

    def remove(self, session_id: str) -> ApplicationFormEngine | None:
        entry = self._entries.pop(session_id, None)
        return entry.engine if entry else None

    def session_ids(self) -> set[str]:
        return set(self._entries)

    def preview_tokens(self) -> set[str]:
        """Preview tokens still referenced by open forms."""
        return {
            attachment.preview_token
            for entry in self._entries.values()
            for attachment in entry.engine.attachments.values()
        }

    def evict_idle(self, max_idle_seconds: float) -> int:
        """
        Close and drop engines not used for ``max_idle_seconds``.

        Engines with a submission in flight are left alone.

        Returns:
            Number of engines evicted
        """
        cutoff = time.monotonic() - max_idle_seconds
        idle = [
            session_id
            for session_id, entry in self._entries.items()
            if entry.last_seen < cutoff and not entry.engine.is_submitting
        ]
        for session_id in idle:
            entry = self._entries.pop(session_id)
            entry.engine.close()
            logger.debug(f"Evicted idle application form for session {session_id[:8]}")
        return len(idle)


# Process-wide registry of open forms
engine_registry = EngineRegistry()
