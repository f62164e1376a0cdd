"""
Contact Schemas

Pydantic schemas for the contact and newsletter forms.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class ContactMessageCreate(BaseModel):
    """Request body for POST /contact."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("name", "subject", "message")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ContactMessageResponse(BaseModel):
    message: str = "Thank you for reaching out. We'll get back to you soon."


class NewsletterSubscribeRequest(BaseModel):
    """Request body for POST /contact/newsletter."""

    email: EmailStr


class NewsletterSubscribeResponse(BaseModel):
    message: str = "Thank you for subscribing to our newsletter."
