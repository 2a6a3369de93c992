from fastapi import APIRouter
from outreach.api.admin import auth, submissions, registrations, forms, events, settings, system

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["AdminAuth"])
router.include_router(submissions.router, prefix="/submissions", tags=["AdminSubmissions"])
router.include_router(registrations.router, prefix="/registrations", tags=["AdminRegistrations"])
router.include_router(forms.router, prefix="/forms", tags=["AdminForms"])
router.include_router(events.router, prefix="/events", tags=["AdminEvents"])
router.include_router(settings.router, prefix="/settings", tags=["AdminSettings"])
router.include_router(system.router, tags=["AdminSystem"])
