"""Health check router."""

from fastapi import APIRouter

from skill_tracker import __version__

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """
    Liveness check.

    Returns:
        Status and the running API version.
    """
    return {"status": "ok", "version": __version__}
