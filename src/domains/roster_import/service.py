# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster import service.

This module provides the RosterImportService class for:
- Resolving parsed roster rows against a stable section snapshot
- Creating student records and placing resolved ones through the allocator
- Manual (extemporaneous) student intake

Import runs in two phases. ``prepare`` is pure: it reads one snapshot of
the sections and resolves every row, so an import can be dropped at that
point with no side effects. ``commit`` creates the records in staging and
hands each resolved group to ``Allocator.allocate``; a group that does not
fit its section stays in staging with a capacity advisory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import uuid4

from src.domains.allocation import Allocator, CapacityExceededError
from src.domains.resolution import ClassResolver, UnitCatalog, origin_label
from src.domains.roster.store import RosterStore
from src.domains.staging import missing_origin_labels
from src.models.roster import (
    CapacityAdvisory,
    ExternalRosterRow,
    ImportedRow,
    ImportReport,
    ManualStudentRequest,
    Resolved,
    SchoolUnit,
    Section,
    StudentRecord,
    Unresolved,
)
from src.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlannedRow:
    """A row resolved during ``prepare``.

    Attributes:
        row: Source row.
        unit: Unit the row maps to.
        unit_recognized: Whether the unit label matched a keyword.
        resolution: Resolver outcome.
    """

    row: ExternalRosterRow
    unit: SchoolUnit
    unit_recognized: bool
    resolution: Resolved | Unresolved


@dataclass(frozen=True, slots=True)
class ImportPlan:
    """Side-effect free result of ``prepare``.

    Attributes:
        import_id: Identifier used in logs and the report.
        rows: Rows to create.
        skipped: Rows dropped for lack of a student name.
        sections: Snapshot the rows were resolved against.
    """

    import_id: str
    rows: tuple[PlannedRow, ...]
    skipped: int
    sections: tuple[Section, ...]


class RosterImportService:
    """Imports external roster rows into the roster store.

    Attributes:
        store: Roster store.
        allocator: Allocator used for every placement.
        resolver: Class resolver.
        units: Unit label catalog.
        strict_units: Leave rows with an unrecognized unit unresolved.
    """

    def __init__(
        self,
        store: RosterStore,
        allocator: Allocator,
        resolver: ClassResolver | None = None,
        units: UnitCatalog | None = None,
        strict_units: bool = False,
    ) -> None:
        """Initialize the import service.

        Args:
            store: Roster store.
            allocator: Allocator bound to the same store.
            resolver: Class resolver, a default one when omitted.
            units: Unit catalog, the built-in one when omitted.
            strict_units: See class attributes.
        """
        self.store = store
        self.allocator = allocator
        self.resolver = resolver or ClassResolver()
        self.units = units or UnitCatalog()
        self.strict_units = strict_units

    def prepare(self, rows: Iterable[ExternalRosterRow]) -> ImportPlan:
        """Resolve rows against one snapshot of the sections.

        Args:
            rows: Parsed rows.

        Returns:
            The import plan. Nothing is written to the store.
        """
        sections = self.store.snapshot_sections()
        planned: list[PlannedRow] = []
        skipped = 0

        for row in rows:
            if not row.student_name.strip():
                skipped += 1
                continue

            unit_match = self.units.match(row.unit_name)
            if self.strict_units and not unit_match.recognized:
                resolution: Resolved | Unresolved = Unresolved(
                    original_label=origin_label(row.class_name, row.turma)
                )
            else:
                resolution = self.resolver.resolve(
                    row.class_name, row.turma, unit_match.unit, sections
                )

            planned.append(
                PlannedRow(
                    row=row,
                    unit=unit_match.unit,
                    unit_recognized=unit_match.recognized,
                    resolution=resolution,
                )
            )

        if skipped:
            logger.warning("Skipped %d row(s) without a student name", skipped)

        return ImportPlan(
            import_id=str(uuid4()),
            rows=tuple(planned),
            skipped=skipped,
            sections=sections,
        )

    def commit(self, plan: ImportPlan) -> ImportReport:
        """Create the planned records and place the resolved ones.

        Args:
            plan: Plan from ``prepare``.

        Returns:
            Import report with the final state of every record.
        """
        bind_context(import_id=plan.import_id)
        try:
            return self._commit(plan)
        finally:
            clear_context()

    def import_rows(self, rows: Iterable[ExternalRosterRow]) -> ImportReport:
        """Prepare and commit in one call."""
        return self.commit(self.prepare(rows))

    def add_manual_student(self, request: ManualStudentRequest) -> StudentRecord:
        """Register an extemporaneous enrollment in staging.

        The record has no origin, so it is selected on its own.

        Args:
            request: Student name and grade.

        Returns:
            The stored record.
        """
        record = self.store.add_student(
            StudentRecord(
                name=request.name.strip(),
                grade=request.grade.strip(),
                unit=self.units.primary_unit,
            )
        )
        logger.info("Added extemporaneous student: %s (%s)", record.name, record.id)
        return record

    def _commit(self, plan: ImportPlan) -> ImportReport:
        created: list[tuple[PlannedRow, str]] = []
        placements: dict[str, list[str]] = {}

        for planned in plan.rows:
            record = self._to_record(planned)
            stored = self.store.add_student(record)
            created.append((planned, stored.id))
            if isinstance(planned.resolution, Resolved):
                placements.setdefault(planned.resolution.section.id, []).append(stored.id)

        advisories: list[CapacityAdvisory] = []
        blocked: set[str] = set()
        for section_id, student_ids in placements.items():
            try:
                self.allocator.allocate(student_ids, section_id)
            except CapacityExceededError as e:
                logger.warning(
                    "Import left %d student(s) in staging: section %s is full",
                    e.requested,
                    section_id,
                )
                advisories.append(
                    CapacityAdvisory(
                        section_id=e.destination_id,
                        section_name=e.destination_name,
                        unit=e.unit,
                        free_seats=e.free_seats,
                        requested=e.requested,
                    )
                )
                blocked.update(student_ids)

        rows = [
            ImportedRow(
                student=self.store.get_student(student_id),
                resolution=planned.resolution,
                unit_recognized=planned.unit_recognized,
                capacity_blocked=student_id in blocked,
            )
            for planned, student_id in created
        ]
        staged = [r.student for r in rows if r.student.is_unassigned]
        unrecognized = sorted(
            {p.row.unit_name.strip() for p, _ in created if not p.unit_recognized}
        )

        report = ImportReport(
            import_id=plan.import_id,
            rows=rows,
            total=len(rows),
            allocated=len(rows) - len(staged),
            staged=len(staged),
            skipped=plan.skipped,
            missing_origins=missing_origin_labels(staged, plan.sections, self.resolver),
            unrecognized_units=unrecognized,
            capacity_advisories=advisories,
        )

        logger.info(
            "Imported %d student(s): %d allocated, %d staged, %d skipped",
            report.total,
            report.allocated,
            report.staged,
            report.skipped,
        )
        return report

    @staticmethod
    def _to_record(planned: PlannedRow) -> StudentRecord:
        row = planned.row
        grade = row.class_name.strip()
        if isinstance(planned.resolution, Resolved):
            grade = planned.resolution.section.grade

        return StudentRecord(
            name=row.student_name.strip(),
            grade=grade,
            unit=planned.unit,
            origin_class_name=row.class_name,
            origin_class_turma=row.turma,
        )
