"""Body of GET /health."""

from typing import Literal

from pydantic import BaseModel, Field

DatabaseState = Literal["connected", "disconnected"]


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str = Field(..., description="APP_ENV of the running process")
    database: DatabaseState = Field(..., description="Result of a SELECT 1 on a pooled connection")
