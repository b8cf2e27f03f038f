# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Section administration API endpoints.

This module provides endpoints for the class administration screen:
- GET / - List sections with seat accounting
- POST / - Create a section
- GET /{section_id} - Get section details
- PUT /{section_id} - Update section metadata
- GET /{section_id}/students - List enrolled students

None of these endpoints change a roster. Students enter and leave
sections through the allocation endpoints only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_roster_store
from src.domains.roster import RosterStore, SectionExistsError, SectionNotFoundError
from src.models.roster import Section, StudentListResponse
from src.models.section import (
    SectionCreateRequest,
    SectionListResponse,
    SectionResponse,
    SectionUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=SectionListResponse,
    summary="List sections",
    description="List every section with enrolled and free seats.",
)
def list_sections(store: RosterStore = Depends(get_roster_store)) -> SectionListResponse:
    """List sections ordered by name."""
    sections = store.list_sections()
    return SectionListResponse(
        items=[SectionResponse.from_section(s) for s in sections],
        total=len(sections),
    )


@router.post(
    "",
    response_model=SectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create section",
    description="Create a section with an empty roster.",
)
def create_section(
    data: SectionCreateRequest,
    store: RosterStore = Depends(get_roster_store),
) -> SectionResponse:
    """Create a new section.

    Args:
        data: Section creation request.
        store: Roster store.

    Returns:
        Created section.

    Raises:
        HTTPException: If the requested id is already taken.
    """
    fields = data.model_dump(exclude_none=True)
    logger.info("Creating section: %s (%s)", data.name, data.unit.value)

    try:
        section = store.create_section(Section(**fields))
    except SectionExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    return SectionResponse.from_section(section)


@router.get(
    "/{section_id}",
    response_model=SectionResponse,
    summary="Get section",
)
def get_section(
    section_id: str,
    store: RosterStore = Depends(get_roster_store),
) -> SectionResponse:
    """Get section details.

    Raises:
        HTTPException: If the section does not exist.
    """
    try:
        return SectionResponse.from_section(store.get_section(section_id))
    except SectionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not found",
        )


@router.put(
    "/{section_id}",
    response_model=SectionResponse,
    summary="Update section",
    description="Update section metadata. The roster is never touched.",
)
def update_section(
    section_id: str,
    data: SectionUpdateRequest,
    store: RosterStore = Depends(get_roster_store),
) -> SectionResponse:
    """Update section metadata.

    Args:
        section_id: Section identifier.
        data: Fields to change.
        store: Roster store.

    Returns:
        Updated section.

    Raises:
        HTTPException: If the section does not exist.
    """
    try:
        section = store.update_section(section_id, data)
    except SectionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not found",
        )

    return SectionResponse.from_section(section)


@router.get(
    "/{section_id}/students",
    response_model=StudentListResponse,
    summary="List enrolled students",
)
def list_section_students(
    section_id: str,
    store: RosterStore = Depends(get_roster_store),
) -> StudentListResponse:
    """List the students enrolled in a section.

    Raises:
        HTTPException: If the section does not exist.
    """
    try:
        students = store.students_in(section_id)
    except SectionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not found",
        )

    return StudentListResponse(items=students, total=len(students))
