"""
Admissions Models

Enums and in-memory records for the student application form.
Nothing here is stored in a database: drafts live in the visitor's
session store and attachments only in process memory.
"""

import enum
from dataclasses import dataclass


class FormStep(str, enum.Enum):
    """States of the application wizard."""

    STEP1 = "step1"
    STEP2 = "step2"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


class PaymentStatus(str, enum.Enum):
    """Application fee payment status chosen by the guardian."""

    UNSET = ""
    PAID = "paid"
    NOT_YET_PAID = "not_yet_paid"


class AttachmentKind(str, enum.Enum):
    """File inputs on the application form."""

    PHOTO = "photo"
    PROOF_OF_PAYMENT = "proof_of_payment"


@dataclass
class Attachment:
    """
    A file selected by the user.

    ``data`` is retained for submission; ``preview_token`` points at a
    renderable copy in the preview registry and must be released when the
    attachment is cleared or replaced.
    """

    kind: AttachmentKind
    filename: str
    content_type: str
    data: bytes
    preview_token: str

    @property
    def size(self) -> int:
        return len(self.data)
