# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Allocator: the single boundary that changes section membership.

This module provides the Allocator class for:
- Moving a batch of students into a section under its seat capacity
- Moving a batch back to the unassigned pool
- The drag-and-drop and allocation-bar entry points

A batch is all-or-nothing. The capacity check and the roster writes run
under the store lock as one step, so two batches can never both pass the
check against the same free seats.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.domains.roster.exceptions import RosterError
from src.domains.roster.store import RosterStore
from src.models.allocation import AllocationResult
from src.models.roster import UNASSIGNED, SchoolUnit, Section, Unassigned

logger = logging.getLogger(__name__)

Destination = str | Unassigned


class AllocationError(RosterError):
    """Base exception for allocation errors."""

    pass


class InvalidBatchError(AllocationError):
    """Raised when a batch is empty or names unknown students."""

    pass


class CapacityExceededError(AllocationError):
    """Raised when a batch does not fit the destination's free seats.

    Attributes:
        destination_id: Target section id.
        destination_name: Target section name.
        unit: Target section unit.
        free_seats: Free seats at the time of the check.
        requested: Students in the batch that needed a seat.
    """

    def __init__(self, destination: Section, free_seats: int, requested: int):
        self.destination_id = destination.id
        self.destination_name = destination.name
        self.unit: SchoolUnit = destination.unit
        self.free_seats = free_seats
        self.requested = requested
        super().__init__(
            f'Section "{destination.name}" ({destination.unit.value}) has no room for '
            f"{requested} new student(s). Free seats: {free_seats}",
            details={
                "destination_id": destination.id,
                "unit": destination.unit.value,
                "free_seats": free_seats,
                "requested": requested,
            },
        )


def remaining_selection(selection: Iterable[str], result: AllocationResult) -> frozenset[str]:
    """Clear the moved ids from a caller's pending selection."""
    return frozenset(selection) - set(result.moved_ids)


class Allocator:
    """Moves students between sections and the unassigned pool.

    Attributes:
        store: Roster store whose rosters this allocator owns.
    """

    def __init__(self, store: RosterStore) -> None:
        """Initialize the allocator.

        Args:
            store: Roster store to mutate.
        """
        self.store = store

    def allocate(
        self,
        student_ids: Iterable[str],
        destination: Destination,
    ) -> AllocationResult:
        """Move a batch of students to a section or to the unassigned pool.

        Students already at the destination are skipped and need no seat.
        For a section destination the remaining students must all fit in
        its free seats, otherwise nothing moves.

        Args:
            student_ids: Students to move.
            destination: Section id, or UNASSIGNED.

        Returns:
            Moved and skipped ids.

        Raises:
            InvalidBatchError: If the batch is empty or has unknown ids.
            SectionNotFoundError: If the destination section does not exist.
            CapacityExceededError: If the batch does not fit.
        """
        ids = sorted(set(student_ids))
        if not ids:
            logger.warning("Rejected empty allocation batch")
            raise InvalidBatchError("Allocation batch is empty")

        with self.store.lock:
            unknown = [i for i in ids if not self.store.has_student(i)]
            if unknown:
                logger.warning("Rejected allocation batch with unknown students: %s", unknown)
                raise InvalidBatchError(
                    "Allocation batch contains unknown students",
                    details={"unknown_ids": unknown},
                )

            target = None if destination is UNASSIGNED else self.store.section_for_update(destination)
            target_id = target.id if target else None

            students = [self.store.student_for_update(i) for i in ids]
            skipped = [s.id for s in students if s.section_id == target_id]
            to_move = [s for s in students if s.section_id != target_id]

            if target is not None and len(to_move) > target.free_seats:
                logger.warning(
                    "Blocked allocation of %d student(s) to %s: %d free seat(s)",
                    len(to_move),
                    target.id,
                    target.free_seats,
                )
                raise CapacityExceededError(target, target.free_seats, len(to_move))

            for student in to_move:
                if student.section_id is not None and self.store.has_section(student.section_id):
                    self.store.section_for_update(student.section_id).roster.discard(student.id)

                if target is None:
                    student.section_id = None
                    student.section_name = self.store.unassigned_label
                else:
                    target.roster.add(student.id)
                    student.section_id = target.id
                    student.section_name = target.name
                    student.unit = target.unit

        result = AllocationResult(
            destination_id=target_id,
            destination_name=target.name if target else self.store.unassigned_label,
            moved_ids=[s.id for s in to_move],
            skipped_ids=skipped,
        )
        logger.info(
            "Allocated %d student(s) to %s (%d skipped)",
            len(result.moved_ids),
            target_id or "unassigned",
            len(result.skipped_ids),
        )
        return result

    def allocate_by_drag(
        self,
        student_id: str,
        destination: Destination,
        selection: Iterable[str] = (),
    ) -> tuple[AllocationResult, frozenset[str]]:
        """Handle a card dropped on a column.

        If the dragged student is part of the selection the whole selection
        moves, otherwise only the dragged student.

        Args:
            student_id: Dragged student.
            destination: Section id of the column, or UNASSIGNED.
            selection: Current selection.

        Returns:
            The allocation result and the selection with moved ids cleared.
        """
        selected = frozenset(selection)
        batch = selected if student_id in selected else frozenset({student_id})
        result = self.allocate(batch, destination)
        return result, remaining_selection(selected, result)

    def allocate_by_picker(
        self,
        destination_id: str,
        selection: Iterable[str],
    ) -> tuple[AllocationResult, frozenset[str]]:
        """Handle the allocation bar: move the selection to a chosen section.

        Args:
            destination_id: Section picked in the bar.
            selection: Current selection.

        Returns:
            The allocation result and the selection with moved ids cleared.
        """
        selected = frozenset(selection)
        result = self.allocate(selected, destination_id)
        return result, remaining_selection(selected, result)
