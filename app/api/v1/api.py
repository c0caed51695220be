from fastapi import APIRouter
from app.api.v1.endpoints import auth, users, waitlists, subscribe, public, upload

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(waitlists.router, prefix="/waitlists", tags=["waitlists"])
api_router.include_router(subscribe.router, tags=["subscribe"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(public.router)
api_router.include_router(public.themes_router)
