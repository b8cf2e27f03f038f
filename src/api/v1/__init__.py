# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    sections: Section administration (create, edit, list).
    roster: Student intake (manual add, file import).
    staging: Unassigned pool, origin groups and selection.
    allocation: Drag-and-drop and allocation-bar moves.
"""

from fastapi import APIRouter

from src.api.v1 import allocation, roster, sections, staging

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(sections.router, prefix="/sections", tags=["Sections"])
router.include_router(roster.router, prefix="/roster", tags=["Roster"])
router.include_router(staging.router, prefix="/staging", tags=["Staging"])
router.include_router(allocation.router, prefix="/allocation", tags=["Allocation"])

__all__ = ["router"]
