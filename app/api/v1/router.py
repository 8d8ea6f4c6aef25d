"""API v1 router: aggregates all sub-routers."""

from fastapi import APIRouter

from app.api.v1 import auth, events, evidence

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(evidence.router, prefix="/evidence", tags=["Evidence"])
api_router.include_router(events.router, tags=["Events"])
