"""Health check endpoints."""

from fastapi import APIRouter

from src.schemas.api import HealthResponse

SERVICE = "truthcheck"
VERSION = "0.1.0"

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
async def health():
    return {"status": "ok"}


@router.get("/")
async def root():
    return {"service": SERVICE, "version": VERSION}
