# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Allocation API endpoints.

This module provides the two manual ways of moving students:
- POST /drag - A student card dropped on a column
- POST /picker - The allocation bar with an explicit destination

A batch that does not fit the destination is rejected as a whole with
409 and the exact seat numbers, so the dashboard can explain why.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_allocator
from src.domains.allocation import (
    Allocator,
    CapacityExceededError,
    Destination,
    InvalidBatchError,
)
from src.domains.roster import SectionNotFoundError, StudentNotFoundError
from src.models.allocation import (
    AllocationResponse,
    CapacityExceededDetail,
    DragAllocationRequest,
    PickerAllocationRequest,
)
from src.models.roster import UNASSIGNED

logger = logging.getLogger(__name__)

router = APIRouter()


def _run(allocate, *args) -> AllocationResponse:
    """Call an allocator entry point and map its errors to HTTP.

    Raises:
        HTTPException: 409 on capacity, 400 on a bad batch, 404 on an
            unknown section or student.
    """
    try:
        result, remaining = allocate(*args)
    except CapacityExceededError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=CapacityExceededDetail(
                message=e.message,
                destination_id=e.destination_id,
                destination_name=e.destination_name,
                unit=e.unit,
                free_seats=e.free_seats,
                requested=e.requested,
            ).model_dump(mode="json"),
        )
    except InvalidBatchError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except SectionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not found",
        )
    except StudentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )

    return AllocationResponse(result=result, selected_ids=sorted(remaining))


@router.post(
    "/drag",
    response_model=AllocationResponse,
    summary="Allocate by drag",
    description=(
        "Move the dragged student, or the whole selection when the dragged "
        "student is selected. A null destination means the unassigned column."
    ),
)
def allocate_by_drag(
    data: DragAllocationRequest,
    allocator: Allocator = Depends(get_allocator),
) -> AllocationResponse:
    """Handle a card dropped on a column."""
    destination: Destination = data.destination_id or UNASSIGNED
    return _run(
        allocator.allocate_by_drag,
        data.student_id,
        destination,
        data.selected_ids,
    )


@router.post(
    "/picker",
    response_model=AllocationResponse,
    summary="Allocate by picker",
    description="Move every selected student to the chosen section.",
)
def allocate_by_picker(
    data: PickerAllocationRequest,
    allocator: Allocator = Depends(get_allocator),
) -> AllocationResponse:
    """Handle the allocation bar."""
    return _run(allocator.allocate_by_picker, data.destination_id, data.selected_ids)
