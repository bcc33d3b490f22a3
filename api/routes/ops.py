"""Operational endpoints, kept under ``/-/`` so they never shadow a tag."""

from fastapi import APIRouter
from fastapi.responses import Response

from infrastructure.metrics import get_metrics_response

router = APIRouter(prefix="/-", tags=["ops"])


@router.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}


@router.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics endpoint.

    Returns metrics in Prometheus text exposition format.
    """
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
