"""
Admissions Attachments

File checks for the student photo and proof-of-payment inputs, and the
preview registry that hands out short-lived renderable references.

A preview is created for every accepted file and must be released when
that file is cleared or replaced. Anything left behind by an abandoned
session is swept by a background job.
"""

import logging
import secrets
import time
from dataclasses import dataclass, field
from pathlib import PurePath

from app.modules.admissions.form_schema import AttachmentRule

logger = logging.getLogger(__name__)

PREVIEW_TOKEN_BYTES = 16


@dataclass
class Preview:
    content_type: str
    data: bytes
    created_at: float = field(default_factory=time.monotonic)


class PreviewRegistry:
    """In-process store of attachment previews keyed by opaque token."""

    def __init__(self) -> None:
        self._previews: dict[str, Preview] = {}

    def __len__(self) -> int:
        return len(self._previews)

    def __contains__(self, token: object) -> bool:
        return token in self._previews

    def create(self, content_type: str, data: bytes) -> str:
        token = secrets.token_urlsafe(PREVIEW_TOKEN_BYTES)
        self._previews[token] = Preview(content_type=content_type, data=data)
        return token

    def get(self, token: str) -> Preview | None:
        return self._previews.get(token)

    def release(self, token: str | None) -> None:
        """Release a preview. Unknown or already-released tokens are ignored."""
        if token:
            self._previews.pop(token, None)

    def release_older_than(self, max_age_seconds: float, keep: set[str] | None = None) -> int:
        """
        Release previews created more than ``max_age_seconds`` ago.

        Tokens in ``keep`` are still referenced and are left alone.

        Returns:
            Number of previews released
        """
        cutoff = time.monotonic() - max_age_seconds
        keep = keep or set()
        stale = [
            token
            for token, preview in self._previews.items()
            if preview.created_at < cutoff and token not in keep
        ]
        for token in stale:
            del self._previews[token]
        return len(stale)


# Process-wide registry shared by every form engine
preview_registry = PreviewRegistry()


def format_size_limit(max_bytes: int) -> str:
    return f"{max_bytes // (1024 * 1024)}MB"


def check_attachment(
    filename: str,
    content_type: str,
    size: int,
    rule: AttachmentRule | None,
    max_bytes: int,
) -> str | None:
    """
    Check a selected file against the size limit and type allowlist.

    Args:
        filename: Original file name (only the extension is used)
        content_type: MIME type reported by the client
        size: File size in bytes
        rule: Accepted types for this attachment input (None accepts any type)
        max_bytes: Maximum accepted size

    Returns:
        An error message, or None if the file is acceptable
    """
    if size == 0:
        return "The selected file is empty"

    if size > max_bytes:
        return f"File too large. Maximum size is {format_size_limit(max_bytes)}."

    if rule is None:
        return None

    extension = PurePath(filename).suffix.lower()
    base_type = content_type.split(";", 1)[0].strip().lower()
    if extension not in rule.extensions or base_type not in rule.content_types:
        allowed = ", ".join(ext.lstrip(".").upper() for ext in rule.extensions)
        return f"Unsupported file type. Allowed types: {allowed}."

    return None
