# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staging pool for student records without a section.

This module provides:
- origin_key / toggle_selection: pure helpers for grouping and selection
- missing_origin_labels: advisory of origins with no destination section
- StagingPool: read-only view of the store's unassigned records

Records imported from the same external class share an origin group, so
an operator can move a whole unresolved cohort with one click. Nothing in
this module raises or mutates the store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence, Set

from src.domains.normalization import normalize_label
from src.domains.resolution import ClassResolver
from src.domains.roster.store import RosterStore
from src.models.roster import OriginGroup, Section, StudentRecord

logger = logging.getLogger(__name__)

OriginKey = tuple[str, str]


def origin_key(record: StudentRecord) -> OriginKey | None:
    """Normalized (class name, turma) pair, None when there is no origin."""
    name_key = normalize_label(record.origin_class_name)
    if not name_key:
        return None
    return name_key, normalize_label(record.origin_class_turma)


def toggle_selection(
    clicked: StudentRecord,
    selection: Set[str],
    staged: Sequence[StudentRecord],
) -> frozenset[str]:
    """Apply a checkbox click to the current selection.

    Clicking a staged record that has an origin selects or deselects every
    staged record of its origin group, following the clicked record's own
    state. Any other record toggles only itself.

    Args:
        clicked: Record whose checkbox was clicked.
        selection: Currently selected ids.
        staged: Records currently in staging.

    Returns:
        The new selection.
    """
    key = origin_key(clicked) if clicked.is_unassigned else None
    if key is None:
        return frozenset(selection ^ {clicked.id})

    group = {r.id for r in staged if r.is_unassigned and origin_key(r) == key}
    group.add(clicked.id)

    if clicked.id in selection:
        return frozenset(selection - group)
    return frozenset(selection | group)


def group_by_origin(staged: Iterable[StudentRecord]) -> list[OriginGroup]:
    """Group staged records by origin, in first-seen order.

    Records without an origin are left out.
    """
    groups: dict[OriginKey, OriginGroup] = {}
    for record in staged:
        key = origin_key(record)
        if key is None:
            continue
        group = groups.get(key)
        if group is None:
            groups[key] = OriginGroup(label=record.origin_label, student_ids=[record.id])
        else:
            group.student_ids.append(record.id)
    return list(groups.values())


def missing_origin_labels(
    staged: Iterable[StudentRecord],
    live_sections: Sequence[Section],
    resolver: ClassResolver,
) -> list[str]:
    """Distinct origin labels with no matching section in any unit.

    Args:
        staged: Records to inspect.
        live_sections: Section snapshot.
        resolver: Resolver providing the candidate check.

    Returns:
        Labels in first-seen order, one per origin group.
    """
    seen: set[OriginKey] = set()
    missing: list[str] = []
    for record in staged:
        key = origin_key(record)
        if key is None or key in seen:
            continue
        seen.add(key)
        if not resolver.has_candidate(
            record.origin_class_name, record.origin_class_turma, live_sections
        ):
            missing.append(record.origin_label)
    return missing


class StagingPool:
    """Unassigned records of a roster store.

    Attributes:
        store: Roster store to read from.
        resolver: Resolver used for the missing-origin advisory.
    """

    def __init__(self, store: RosterStore, resolver: ClassResolver | None = None) -> None:
        """Initialize the staging pool.

        Args:
            store: Roster store.
            resolver: Class resolver, a default one when omitted.
        """
        self.store = store
        self.resolver = resolver or ClassResolver()

    def staged(self) -> list[StudentRecord]:
        """Records currently without a section."""
        return self.store.unassigned_students()

    def origin_groups(self) -> list[OriginGroup]:
        """Staged records grouped by origin."""
        return group_by_origin(self.staged())

    def toggle(self, clicked_id: str, selection: Iterable[str]) -> frozenset[str]:
        """Apply a checkbox click by student id.

        An unknown id leaves the selection unchanged.

        Args:
            clicked_id: Clicked student id.
            selection: Currently selected ids.

        Returns:
            The new selection.
        """
        current = frozenset(selection)
        if not self.store.has_student(clicked_id):
            logger.warning("Selection toggle for unknown student %s ignored", clicked_id)
            return current

        clicked = self.store.get_student(clicked_id)
        return toggle_selection(clicked, current, self.staged())

    def list_missing_origins(self, live_sections: Sequence[Section] | None = None) -> list[str]:
        """Origins in staging that no section could receive.

        A destination has to be created for these before allocation is
        possible.

        Args:
            live_sections: Section snapshot, the store's current one when omitted.

        Returns:
            Missing origin labels.
        """
        sections = self.store.snapshot_sections() if live_sections is None else live_sections
        missing = missing_origin_labels(self.staged(), sections, self.resolver)
        if missing:
            logger.info("Staged origins without a section: %s", ", ".join(missing))
        return missing
