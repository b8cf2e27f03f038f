# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster data models.

This module defines the entities the resolution and allocation engine
works with:
- SchoolUnit / ClassPeriod enums
- Section: a live class ("turma") with a per-unit seat table and a roster
- StudentRecord: a student, either assigned to a section or UNASSIGNED
- ExternalRosterRow: one transient row handed over by the file parser
- Resolved / Unresolved: the tagged outcome of class resolution
- Import and staging DTOs returned to the UI layer
"""

from enum import Enum
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, Field

UNASSIGNED_LABEL = "A alocar"


class SchoolUnit(str, Enum):
    """Campuses a section can belong to."""

    MATRIZ = "Matriz"
    FILIAL = "Filial"
    ANEXO = "Anexo"


PRIMARY_UNIT = SchoolUnit.MATRIZ

# Seats per unit; a section never offers negative seats.
SeatCount = Annotated[int, Field(ge=0)]


class ClassPeriod(str, Enum):
    """Teaching period of a section."""

    MORNING = "Manhã"
    AFTERNOON = "Tarde"


class Unassigned(Enum):
    """Sentinel type for the unassigned pool."""

    UNASSIGNED = "unassigned"


UNASSIGNED = Unassigned.UNASSIGNED


def _new_id() -> str:
    return str(uuid4())


class Section(BaseModel):
    """A live class section.

    Attributes:
        id: Section identifier.
        name: Display name, e.g. "1º Ano A".
        grade: Grade label, e.g. "1º Ano".
        unit: Campus the section belongs to.
        period: Teaching period.
        room: Room label.
        capacity: Seat table keyed by unit. Only the entry for ``unit`` applies.
        roster: Ids of the enrolled students.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    grade: str
    unit: SchoolUnit
    period: ClassPeriod = ClassPeriod.MORNING
    room: str = ""
    capacity: dict[SchoolUnit, SeatCount] = Field(default_factory=dict)
    roster: set[str] = Field(default_factory=set)

    @property
    def seat_capacity(self) -> int:
        """Seats available for the section's own unit."""
        return self.capacity.get(self.unit, 0)

    @property
    def enrolled(self) -> int:
        """Number of students currently on the roster."""
        return len(self.roster)

    @property
    def free_seats(self) -> int:
        """Seats left, never negative."""
        return max(self.seat_capacity - self.enrolled, 0)


class StudentRecord(BaseModel):
    """A student known to the dashboard.

    ``section_id`` is None while the record sits in staging. Origin labels
    keep the raw grade/turma text of the external source and are never
    rewritten after import.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    grade: str = ""
    section_id: str | None = None
    section_name: str = UNASSIGNED_LABEL
    unit: SchoolUnit = PRIMARY_UNIT
    origin_class_name: str = ""
    origin_class_turma: str = ""

    @property
    def is_unassigned(self) -> bool:
        """Check if the record has no section."""
        return self.section_id is None

    @property
    def origin_label(self) -> str:
        """Human-readable origin, e.g. "2º Ano B"."""
        return f"{self.origin_class_name} {self.origin_class_turma}".strip()


class ExternalRosterRow(BaseModel):
    """A row produced by the spreadsheet/legacy-export parser.

    Every field is best-effort text. Only ``class_name``, ``turma`` and
    ``unit_name`` take part in class resolution.
    """

    student_name: str = ""
    class_name: str = Field(default="", description="Grade or full class name")
    turma: str = Field(default="", description="Section suffix, e.g. 'A'")
    unit_name: str = Field(default="", description="Free-text campus label")


class Resolved(BaseModel):
    """Resolution found exactly one section."""

    kind: Literal["resolved"] = "resolved"
    section: Section


class Unresolved(BaseModel):
    """Resolution found no unique section."""

    kind: Literal["unresolved"] = "unresolved"
    original_label: str


ResolutionResult = Annotated[Resolved | Unresolved, Field(discriminator="kind")]


# =============================================================================
# Import / staging DTOs
# =============================================================================


class ManualStudentRequest(BaseModel):
    """Extemporaneous enrollment entered by an operator."""

    name: str = Field(min_length=1)
    grade: str = ""


class ImportRequest(BaseModel):
    """Rows handed over by the parsing collaborator."""

    rows: list[ExternalRosterRow] = Field(default_factory=list)


class ImportedRow(BaseModel):
    """Outcome of one imported row."""

    student: StudentRecord
    resolution: ResolutionResult
    unit_recognized: bool = True
    capacity_blocked: bool = False


class CapacityAdvisory(BaseModel):
    """A resolved placement that did not fit its destination."""

    section_id: str
    section_name: str
    unit: SchoolUnit
    free_seats: int
    requested: int


class ImportReport(BaseModel):
    """Summary of a committed import."""

    import_id: str
    rows: list[ImportedRow] = Field(default_factory=list)
    total: int = 0
    allocated: int = 0
    staged: int = 0
    skipped: int = 0
    missing_origins: list[str] = Field(default_factory=list)
    unrecognized_units: list[str] = Field(default_factory=list)
    capacity_advisories: list[CapacityAdvisory] = Field(default_factory=list)


class StudentListResponse(BaseModel):
    """List of student records."""

    items: list[StudentRecord]
    total: int


class OriginGroup(BaseModel):
    """Staged records sharing the same normalized origin."""

    label: str
    student_ids: list[str]


class StagingResponse(BaseModel):
    """Current staging pool."""

    items: list[StudentRecord]
    groups: list[OriginGroup]
    total: int


class MissingOriginsResponse(BaseModel):
    """Origins with no destination section anywhere."""

    labels: list[str]
