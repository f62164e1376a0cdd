"""
Gallery Router

- GET /api/images - Image paths for the landing page, by category
"""

from fastapi import APIRouter

from app.core.config import settings
from app.modules.gallery import service
from app.modules.gallery.schemas import ImageListing

router = APIRouter()


@router.get(
    "/images",
    response_model=ImageListing,
    summary="List Landing Page Images",
    description="""
Image paths for the landing page, one list per category
(`ais` for school photos, `hero` for carousel slides).

Paths are URL-encoded and served from `/images`. If the images
directory can't be read, both lists are empty.
""",
)
async def list_images() -> ImageListing:
    return service.list_images(settings.images_dir)
