"""Schemas for the health and discovery endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability, for load balancers."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV of the running process")
    database: Literal["connected", "disconnected"]


class ApiInfoResponse(BaseModel):
    message: str
    endpoints: dict[str, str]
