"""Liveness response schema."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """GET /health body: process is up and serving this app/version."""

    status: str = "ok"
    service: str
    version: str
