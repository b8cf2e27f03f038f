# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoint."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src import __version__
from src.api.dependencies import get_roster_store
from src.core.config import get_settings
from src.domains.roster import RosterStore

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class RosterCounts(BaseModel):
    """Totals held by the roster store."""

    sections: int
    students: int
    staged: int


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    roster: RosterCounts


@router.get("/health", response_model=HealthResponse)
def health_check(store: RosterStore = Depends(get_roster_store)) -> HealthResponse:
    """Report liveness with roster totals."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        roster=RosterCounts(**store.counts()),
    )
