from fastapi import APIRouter
from outreach.api.public import forms, events, settings

router = APIRouter()
router.include_router(forms.router, prefix="/forms", tags=["PublicForms"])
router.include_router(events.router, prefix="/events", tags=["PublicEvents"])
router.include_router(settings.router, prefix="/settings", tags=["PublicSettings"])
