from fastapi import APIRouter
from app.routers import interviewers, slots

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(interviewers.router, tags=["Interviewers"])
api_router.include_router(slots.router, tags=["Slots"])
