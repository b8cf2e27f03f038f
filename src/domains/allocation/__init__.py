# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Allocation domain package.

This package provides the only operation that changes section membership:
- Capacity-checked, all-or-nothing batch moves
- Moves back to the unassigned pool
- Drag-and-drop and allocation-bar entry points
"""

from src.domains.allocation.service import (
    AllocationError,
    Allocator,
    CapacityExceededError,
    Destination,
    InvalidBatchError,
    remaining_selection,
)

__all__ = [
    "Allocator",
    "AllocationError",
    "CapacityExceededError",
    "InvalidBatchError",
    "Destination",
    "remaining_selection",
]
