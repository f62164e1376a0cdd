"""
Site Content Router

- GET /site/content - Stats, programs, testimonials and contact details
"""

from fastapi import APIRouter

from app.modules.site.content import SITE_CONTENT
from app.modules.site.schemas import SiteContent

router = APIRouter()


@router.get("/content", response_model=SiteContent, summary="Landing Page Content")
async def get_site_content() -> SiteContent:
    return SITE_CONTENT
