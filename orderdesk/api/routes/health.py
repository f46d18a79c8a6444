"""
Health check endpoint.
"""

from fastapi import APIRouter, Request

from ..schemas import HealthResponse
from ... import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request):
    """Report API status and which dataset it serves."""
    settings = request.app.state.settings

    return HealthResponse(
        status="healthy",
        version=__version__,
        project_id=settings.project_id,
        dataset=settings.dataset,
    )
