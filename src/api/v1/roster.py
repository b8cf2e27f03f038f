# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster intake API endpoints.

This module provides endpoints for bringing students in:
- GET /students - List student records
- POST /students - Add an extemporaneous student to staging
- GET /students/{student_id} - Get a student record
- POST /import - Import rows from the roster file parser
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_import_service, get_roster_store
from src.domains.roster import RosterStore, StudentNotFoundError
from src.domains.roster_import import RosterImportService
from src.models.roster import (
    ImportReport,
    ImportRequest,
    ManualStudentRequest,
    StudentListResponse,
    StudentRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/students",
    response_model=StudentListResponse,
    summary="List students",
    description="List student records, staged ones first.",
)
def list_students(
    search: Annotated[str | None, Query(description="Search by name")] = None,
    store: RosterStore = Depends(get_roster_store),
) -> StudentListResponse:
    """List student records with an optional name filter."""
    students = store.list_students(search=search)
    return StudentListResponse(items=students, total=len(students))


@router.post(
    "/students",
    response_model=StudentRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Add student",
    description="Register an extemporaneous enrollment. The student starts in staging.",
)
def add_student(
    data: ManualStudentRequest,
    service: RosterImportService = Depends(get_import_service),
) -> StudentRecord:
    """Add a student by hand."""
    return service.add_manual_student(data)


@router.get(
    "/students/{student_id}",
    response_model=StudentRecord,
    summary="Get student",
)
def get_student(
    student_id: str,
    store: RosterStore = Depends(get_roster_store),
) -> StudentRecord:
    """Get a student record.

    Raises:
        HTTPException: If the student does not exist.
    """
    try:
        return store.get_student(student_id)
    except StudentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )


@router.post(
    "/import",
    response_model=ImportReport,
    summary="Import roster rows",
    description=(
        "Resolve parsed rows to live sections and place them within capacity. "
        "Rows that cannot be placed stay in staging."
    ),
)
def import_roster(
    data: ImportRequest,
    service: RosterImportService = Depends(get_import_service),
) -> ImportReport:
    """Import a batch of external rows.

    Args:
        data: Parsed rows.
        service: Import service.

    Returns:
        Report with the outcome of every row.
    """
    logger.info("Importing %d roster row(s)", len(data.rows))
    return service.import_rows(data.rows)
