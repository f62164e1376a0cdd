"""
Gallery Schemas
"""

from pydantic import BaseModel, Field


class ImageListing(BaseModel):
    """Image URL paths per category, in display order."""

    ais: list[str] = Field(default_factory=list)
    hero: list[str] = Field(default_factory=list)
