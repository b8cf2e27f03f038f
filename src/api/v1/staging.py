# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staging API endpoints.

This module provides endpoints for the unassigned pool:
- GET / - Staged records and their origin groups
- GET /missing-origins - Origins with no section to receive them
- POST /selection - Apply a checkbox click to the selection
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_staging_pool
from src.domains.staging import StagingPool
from src.models.allocation import SelectionResponse, SelectionToggleRequest
from src.models.roster import MissingOriginsResponse, StagingResponse

router = APIRouter()


@router.get(
    "",
    response_model=StagingResponse,
    summary="Get staging pool",
)
def get_staging(pool: StagingPool = Depends(get_staging_pool)) -> StagingResponse:
    """List staged records grouped by origin."""
    staged = pool.staged()
    return StagingResponse(
        items=staged,
        groups=pool.origin_groups(),
        total=len(staged),
    )


@router.get(
    "/missing-origins",
    response_model=MissingOriginsResponse,
    summary="List missing destination sections",
    description="Origins in staging for which no section exists in any unit.",
)
def list_missing_origins(
    pool: StagingPool = Depends(get_staging_pool),
) -> MissingOriginsResponse:
    """List staged origins that need a new section."""
    return MissingOriginsResponse(labels=pool.list_missing_origins())


@router.post(
    "/selection",
    response_model=SelectionResponse,
    summary="Toggle selection",
    description=(
        "Clicking a staged student with an origin toggles the whole origin "
        "group. Any other student toggles alone."
    ),
)
def toggle_selection(
    data: SelectionToggleRequest,
    pool: StagingPool = Depends(get_staging_pool),
) -> SelectionResponse:
    """Apply a checkbox click."""
    selection = pool.toggle(data.clicked_id, data.selected_ids)
    return SelectionResponse(selected_ids=sorted(selection))
