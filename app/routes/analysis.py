"""
Analysis API Routes

Endpoints of the analysis API, mounted beneath the API prefix.
"""

import logging
from fastapi import APIRouter, Depends, FastAPI, Request

from app.models.schemas import AnalysisIn, AnalysisResponse, HealthResponse
from app.services import AnalysisClient
from app import __version__

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["analysis"])


def init_analysis_routes(app: FastAPI, client: AnalysisClient):
    """
    Initialize analysis routes with the analysis backend.

    Args:
        app: API application the routes are included in
        client: Analysis client instance, stored on that app's state
    """
    app.state.analysis_client = client


def get_analysis_client(request: Request) -> AnalysisClient:
    """Analysis backend of the application handling ``request``."""
    return getattr(request.app.state, "analysis_client", None)


@router.get("/ping")
async def ping():
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/health", response_model=HealthResponse)
async def health_check(analysis_client: AnalysisClient = Depends(get_analysis_client)):
    """
    Report whether the analysis backend is usable.

    Returns:
        JSON response with health check data
    """
    configured = analysis_client.is_configured() if analysis_client else False
    status = "healthy" if configured else "degraded"

    logger.info(f"Health check: {status}")
    return HealthResponse(
        status=status,
        version=__version__,
        backend=analysis_client.name if analysis_client else "none",
        backend_configured=configured
    )


@router.post("/analyze", response_model=AnalysisResponse)
def analyze(body: AnalysisIn, analysis_client: AnalysisClient = Depends(get_analysis_client)):
    """
    Run the analysis program on the submitted text.

    Declared sync so FastAPI runs the blocking backend call in its threadpool.

    Args:
        body: Text and options to analyse

    Returns:
        The backend name and its decoded result

    Raises:
        AnalysisError: Turned into a JSON error response by the API app
    """
    logger.info(f"Analysis requested ({len(body.text)} chars)")
    result = analysis_client.analyze(body.text, body.options)
    return AnalysisResponse(backend=analysis_client.name, result=result)
