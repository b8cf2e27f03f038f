# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Allocation and selection DTOs."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from src.models.roster import SchoolUnit


class AllocationResult(BaseModel):
    """Outcome of one accepted allocation batch.

    Attributes:
        destination_id: Target section, None for the unassigned pool.
        destination_name: Section name or the unassigned label.
        moved_ids: Students whose section changed.
        skipped_ids: Students already at the destination.
        allocated_at: When the batch was applied.
    """

    destination_id: str | None
    destination_name: str
    moved_ids: list[str] = Field(default_factory=list)
    skipped_ids: list[str] = Field(default_factory=list)
    allocated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DragAllocationRequest(BaseModel):
    """A student card dropped on a column.

    ``destination_id`` None means the "unassigned" column.
    """

    student_id: str
    destination_id: str | None = None
    selected_ids: list[str] = Field(default_factory=list)


class PickerAllocationRequest(BaseModel):
    """The allocation bar: explicit destination plus the active selection."""

    destination_id: str
    selected_ids: list[str] = Field(default_factory=list)


class AllocationResponse(BaseModel):
    """Allocation result plus what is left of the caller's selection."""

    result: AllocationResult
    selected_ids: list[str]


class SelectionToggleRequest(BaseModel):
    """A click on a student checkbox."""

    clicked_id: str
    selected_ids: list[str] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    """Selection after applying the reducer."""

    selected_ids: list[str]


class CapacityExceededDetail(BaseModel):
    """Error body for a batch blocked by seat capacity."""

    message: str
    destination_id: str
    destination_name: str
    unit: SchoolUnit
    free_seats: int
    requested: int
