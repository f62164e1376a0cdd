"""
Admissions Errors

Exceptions raised by the form engine and service layer. Each carries an
error code and HTTP status so the router can translate it directly.

Field validation failures are not exceptions: they are reported in the
engine's error set.
"""


class AdmissionsError(Exception):
    """Base exception for admissions errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class UnknownFieldError(AdmissionsError):
    """Raised when an edit names a field the draft doesn't have."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            message=f"Unknown application field: {field}",
            error_code="UNKNOWN_FIELD",
            status_code=422,
        )


class InvalidFieldValueError(AdmissionsError):
    """Raised when an edit's value has the wrong type for its field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            message=f"Invalid value for field: {field}",
            error_code="INVALID_FIELD_VALUE",
            status_code=422,
        )


class InvalidTransitionError(AdmissionsError):
    """Raised when an action isn't allowed in the form's current step."""

    def __init__(self, action: str, step: str):
        super().__init__(
            message=f"Cannot {action} while the application is in {step}.",
            error_code="INVALID_TRANSITION",
            status_code=409,
        )


class SubmitUnavailableError(AdmissionsError):
    """Raised when submitting before every declaration is accepted, or when paying later."""

    def __init__(self):
        super().__init__(
            message="Accept all declarations and complete the application fee payment "
            "before submitting.",
            error_code="SUBMIT_UNAVAILABLE",
            status_code=409,
        )


class AttachmentRejectedError(AdmissionsError):
    """Raised when a selected file is too large, empty or of an unsupported type."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(
            message=message,
            error_code="ATTACHMENT_REJECTED",
            status_code=422,
        )


class FormClosedError(AdmissionsError):
    """Raised when acting on a form that was closed."""

    def __init__(self):
        super().__init__(
            message="The application form is closed. Open it again to continue.",
            error_code="FORM_CLOSED",
            status_code=409,
        )


class FormNotOpenError(AdmissionsError):
    """Raised when the visitor has no open application form."""

    def __init__(self):
        super().__init__(
            message="No application form is open for this session.",
            error_code="FORM_NOT_OPEN",
            status_code=404,
        )


class PreviewNotFoundError(AdmissionsError):
    """Raised when a preview token is unknown or already released."""

    def __init__(self):
        super().__init__(
            message="Preview not found.",
            error_code="PREVIEW_NOT_FOUND",
            status_code=404,
        )


class UnknownGradeError(AdmissionsError):
    """Raised when asking for the fees of a grade that isn't offered."""

    def __init__(self, grade: str):
        super().__init__(
            message=f"Grade '{grade}' is not offered.",
            error_code="UNKNOWN_GRADE",
            status_code=404,
        )
