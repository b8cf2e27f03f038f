# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster import domain package.

This package brings external students into the roster:
- Two-phase import (prepare, then commit)
- Placement of resolved rows through the allocator
- Manual (extemporaneous) intake
"""

from src.domains.roster_import.service import (
    ImportPlan,
    PlannedRow,
    RosterImportService,
)

__all__ = [
    "RosterImportService",
    "ImportPlan",
    "PlannedRow",
]
