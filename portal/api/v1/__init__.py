"""API v1 routes."""

from fastapi import APIRouter

from portal.api.v1 import admin, applications, auth, chat, faqs, roles, stats

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(roles.router, prefix="/roles", tags=["Roles"])
api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(faqs.router, prefix="/faqs", tags=["FAQs"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chatbot"])
api_router.include_router(stats.router, prefix="/stats", tags=["Stats"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
