from fastapi import APIRouter

from app.modules.admissions import router as admissions_router
from app.modules.contact import router as contact_router
from app.modules.site import router as site_router

api_router = APIRouter()

api_router.include_router(admissions_router, prefix="/admissions", tags=["Admissions"])

api_router.include_router(contact_router, prefix="/contact", tags=["Contact"])

api_router.include_router(site_router, prefix="/site", tags=["Site"])
