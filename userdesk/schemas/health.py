"""Health check response for the user account service."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus reachability of the database holding user records."""

    status: Literal["ok"] = Field(default="ok", description="Always 'ok' when the API answers")
    environment: str = Field(description="APP_ENV the service was started with")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the user record database answered SELECT 1",
    )
