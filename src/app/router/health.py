"""Router – health check."""

from fastapi import APIRouter

from src.app.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe; also reports which result schema this server speaks."""
    return {"status": "ok", "schemaVersion": settings.schema_version}
