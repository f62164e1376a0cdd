"""
Site Content Schemas

Static content for the landing page sections.
"""

from pydantic import BaseModel, Field


class Stat(BaseModel):
    """An animated counter, e.g. "500+ Students Enrolled"."""

    value: int = Field(..., ge=0)
    suffix: str = ""
    label: str


class Program(BaseModel):
    title: str
    ages: str
    description: str


class Testimonial(BaseModel):
    name: str
    role: str
    content: str
    rating: int = Field(..., ge=1, le=5)


class ContactDetail(BaseModel):
    title: str
    content: str
    link: str | None = None


class SiteContent(BaseModel):
    """Everything the landing page renders besides images and forms."""

    school_name: str
    stats: list[Stat]
    programs: list[Program]
    testimonials: list[Testimonial]
    contact: list[ContactDetail]
