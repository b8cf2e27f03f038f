# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Keyed in-memory store for sections and student records.

This module provides the RosterStore class:
- Section create/edit for the class administration screen (never the roster)
- Student record intake (always into staging)
- Read-only queries returning copies
- Stable section snapshots for class resolution

Roster membership and section references are changed only by
``src.domains.allocation.service.Allocator``, which takes ``lock`` and
uses the ``*_for_update`` accessors.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from src.domains.roster.exceptions import (
    SectionExistsError,
    SectionNotFoundError,
    StudentNotFoundError,
)
from src.models.roster import UNASSIGNED_LABEL, Section, StudentRecord
from src.models.section import SectionUpdateRequest

logger = logging.getLogger(__name__)


class RosterStore:
    """Sections and student records keyed by id.

    Attributes:
        lock: Re-entrant lock guarding every read-check-write sequence.
        unassigned_label: Section name given to records in staging.
    """

    def __init__(
        self,
        sections: Iterable[Section] = (),
        students: Iterable[StudentRecord] = (),
        unassigned_label: str = UNASSIGNED_LABEL,
    ) -> None:
        """Initialize the store.

        Seed students keep their section reference and are added to that
        section's roster; this is how an existing enrollment is loaded.

        Args:
            sections: Initial sections.
            students: Initial student records.
            unassigned_label: Section name for records in staging.
        """
        self.lock = threading.RLock()
        self.unassigned_label = unassigned_label
        self._sections: dict[str, Section] = {}
        self._students: dict[str, StudentRecord] = {}

        for section in sections:
            self._sections[section.id] = section.model_copy(deep=True)

        for student in students:
            record = student.model_copy(deep=True)
            section = self._sections.get(record.section_id or "")
            if section is None:
                record.section_id = None
                record.section_name = unassigned_label
            else:
                section.roster.add(record.id)
                record.section_name = section.name
                record.unit = section.unit
            self._students[record.id] = record

    # =========================================================================
    # Class administration
    # =========================================================================

    def create_section(self, section: Section) -> Section:
        """Add a new section with an empty roster.

        Raises:
            SectionExistsError: If the id is already taken.
        """
        with self.lock:
            if section.id in self._sections:
                raise SectionExistsError(section.id)
            return self.save_section(section)

    def save_section(self, section: Section) -> Section:
        """Create or replace a section's metadata.

        The stored roster is kept as is; a roster carried by ``section``
        is ignored.

        Args:
            section: Section data.

        Returns:
            Copy of the stored section.
        """
        with self.lock:
            existing = self._sections.get(section.id)
            stored = section.model_copy(deep=True)
            stored.roster = set(existing.roster) if existing else set()
            self._sections[stored.id] = stored
            self._sync_member_names(stored)

        logger.info(
            "%s section: %s (%s)",
            "Updated" if existing else "Created",
            stored.name,
            stored.id,
        )
        if stored.enrolled > stored.seat_capacity:
            logger.warning(
                "Section %s holds %d students but seats only %d in %s",
                stored.id,
                stored.enrolled,
                stored.seat_capacity,
                stored.unit.value,
            )
        return stored.model_copy(deep=True)

    def update_section(self, section_id: str, request: SectionUpdateRequest) -> Section:
        """Apply a partial metadata update.

        Args:
            section_id: Section identifier.
            request: Fields to change.

        Returns:
            Copy of the updated section.

        Raises:
            SectionNotFoundError: If the section does not exist.
        """
        with self.lock:
            section = self.section_for_update(section_id)
            changes = request.model_dump(exclude_none=True)
            updated = section.model_copy(update=changes, deep=True)
            return self.save_section(updated)

    def _sync_member_names(self, section: Section) -> None:
        # Enrolled records display the section name and follow its unit.
        for student_id in section.roster:
            record = self._students.get(student_id)
            if record is not None:
                record.section_name = section.name
                record.unit = section.unit

    # =========================================================================
    # Student intake
    # =========================================================================

    def add_student(self, record: StudentRecord) -> StudentRecord:
        """Add a new record to staging.

        Any section reference on ``record`` is dropped; placement goes
        through the allocator.

        Args:
            record: New student record.

        Returns:
            Copy of the stored record.
        """
        with self.lock:
            stored = record.model_copy(
                update={"section_id": None, "section_name": self.unassigned_label},
                deep=True,
            )
            self._students[stored.id] = stored

        logger.debug("Staged student record: %s (%s)", stored.name, stored.id)
        return stored.model_copy(deep=True)

    # =========================================================================
    # Read-only queries
    # =========================================================================

    def get_section(self, section_id: str) -> Section:
        """Get a copy of a section.

        Raises:
            SectionNotFoundError: If not found.
        """
        with self.lock:
            return self.section_for_update(section_id).model_copy(deep=True)

    def has_section(self, section_id: str) -> bool:
        return section_id in self._sections

    def list_sections(self) -> list[Section]:
        """List copies of all sections ordered by name."""
        with self.lock:
            sections = [s.model_copy(deep=True) for s in self._sections.values()]
        return sorted(sections, key=lambda s: (s.name, s.id))

    def snapshot_sections(self) -> tuple[Section, ...]:
        """Take a consistent, detached copy of every section.

        Resolution must run against one stable view; later edits to the
        store do not show up in a snapshot already taken.
        """
        with self.lock:
            return tuple(s.model_copy(deep=True) for s in self._sections.values())

    def get_student(self, student_id: str) -> StudentRecord:
        """Get a copy of a student record.

        Raises:
            StudentNotFoundError: If not found.
        """
        with self.lock:
            return self.student_for_update(student_id).model_copy(deep=True)

    def has_student(self, student_id: str) -> bool:
        return student_id in self._students

    def list_students(self, search: str | None = None) -> list[StudentRecord]:
        """List student records, staged ones first.

        Args:
            search: Optional case-insensitive substring of the name.

        Returns:
            Copies of the matching records.
        """
        needle = search.casefold() if search else None
        with self.lock:
            records = [
                r.model_copy(deep=True)
                for r in self._students.values()
                if needle is None or needle in r.name.casefold()
            ]
        return sorted(records, key=lambda r: (not r.is_unassigned, r.name, r.id))

    def unassigned_students(self) -> list[StudentRecord]:
        """Copies of every record without a section, in intake order."""
        with self.lock:
            return [r.model_copy(deep=True) for r in self._students.values() if r.is_unassigned]

    def students_in(self, section_id: str) -> list[StudentRecord]:
        """Copies of the records enrolled in a section.

        Raises:
            SectionNotFoundError: If the section does not exist.
        """
        with self.lock:
            section = self.section_for_update(section_id)
            records = [self._students[i].model_copy(deep=True) for i in section.roster if i in self._students]
        return sorted(records, key=lambda r: (r.name, r.id))

    def counts(self) -> dict[str, int]:
        """Section, student and staged totals."""
        with self.lock:
            return {
                "sections": len(self._sections),
                "students": len(self._students),
                "staged": sum(1 for r in self._students.values() if r.is_unassigned),
            }

    # =========================================================================
    # Allocator access (caller holds ``lock``)
    # =========================================================================

    def section_for_update(self, section_id: str) -> Section:
        """Get the live section object.

        Raises:
            SectionNotFoundError: If not found.
        """
        section = self._sections.get(section_id)
        if section is None:
            raise SectionNotFoundError(section_id)
        return section

    def student_for_update(self, student_id: str) -> StudentRecord:
        """Get the live student record.

        Raises:
            StudentNotFoundError: If not found.
        """
        record = self._students.get(student_id)
        if record is None:
            raise StudentNotFoundError(student_id)
        return record
