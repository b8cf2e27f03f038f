# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Section administration DTOs.

Sections are created and edited by the class administration screen.
None of these requests can touch a roster; that is the allocator's job.
"""

from pydantic import BaseModel, Field

from src.models.roster import ClassPeriod, SchoolUnit, SeatCount, Section


class SectionCreateRequest(BaseModel):
    """Request to create a section."""

    id: str | None = Field(None, description="Optional explicit identifier")
    name: str = Field(min_length=1)
    grade: str = Field(min_length=1)
    unit: SchoolUnit
    period: ClassPeriod = ClassPeriod.MORNING
    room: str = ""
    capacity: dict[SchoolUnit, SeatCount] = Field(default_factory=dict)


class SectionUpdateRequest(BaseModel):
    """Partial update of section metadata."""

    name: str | None = None
    grade: str | None = None
    unit: SchoolUnit | None = None
    period: ClassPeriod | None = None
    room: str | None = None
    capacity: dict[SchoolUnit, SeatCount] | None = None


class SectionResponse(BaseModel):
    """Section with seat accounting."""

    id: str
    name: str
    grade: str
    unit: SchoolUnit
    period: ClassPeriod
    room: str
    capacity: dict[SchoolUnit, int]
    seat_capacity: int
    enrolled: int
    free_seats: int
    student_ids: list[str]

    @classmethod
    def from_section(cls, section: Section) -> "SectionResponse":
        """Build a response from a section entity."""
        return cls(
            id=section.id,
            name=section.name,
            grade=section.grade,
            unit=section.unit,
            period=section.period,
            room=section.room,
            capacity=dict(section.capacity),
            seat_capacity=section.seat_capacity,
            enrolled=section.enrolled,
            free_seats=section.free_seats,
            student_ids=sorted(section.roster),
        )


class SectionListResponse(BaseModel):
    """List of sections."""

    items: list[SectionResponse]
    total: int
