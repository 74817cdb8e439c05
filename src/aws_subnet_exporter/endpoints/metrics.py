"""
Metrics scrape endpoint.

Serves the current gauge snapshot in the Prometheus text format.
"""

from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get("/metrics")
async def get_metrics(request: Request) -> Response:
    """
    Render all exporter metrics.

    Runs on the event loop, the same thread that publishes gauges, so a
    scrape never observes a subnet with only part of its gauges updated.
    """
    metrics = request.app.state.metrics
    return Response(content=metrics.render(), media_type=metrics.content_type)
