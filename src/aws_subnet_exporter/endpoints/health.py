"""Liveness endpoint."""

from fastapi import APIRouter, Response

router = APIRouter()


@router.get("/healthz")
async def healthz() -> Response:
    """Return 200 with an empty body."""
    return Response(status_code=200)
