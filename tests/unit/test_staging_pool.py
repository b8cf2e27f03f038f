# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the staging pool and selection reducer."""

import pytest

from src.domains.staging import (
    group_by_origin,
    missing_origin_labels,
    origin_key,
    toggle_selection,
)
from src.models.roster import StudentRecord


@pytest.fixture
def cohort(store) -> list[StudentRecord]:
    """Three staged records: two from 2º Ano B and one from 3º Ano."""
    return [
        store.add_student(
            StudentRecord(name="Bruno", origin_class_name="2º Ano", origin_class_turma="B")
        ),
        store.add_student(
            StudentRecord(name="Carla", origin_class_name="2º ano", origin_class_turma="b")
        ),
        store.add_student(
            StudentRecord(name="Davi", origin_class_name="3º Ano", origin_class_turma="")
        ),
    ]


class TestOriginKey:
    """Tests for origin keys."""

    def test_key_is_normalized(self) -> None:
        """Test that spelling differences share a key."""
        a = StudentRecord(name="a", origin_class_name="2º Ano", origin_class_turma="B")
        b = StudentRecord(name="b", origin_class_name="2 ANO", origin_class_turma=" b ")

        assert origin_key(a) == origin_key(b) == ("2ano", "b")

    def test_no_origin(self) -> None:
        """Test that manual records have no key."""
        assert origin_key(StudentRecord(name="x")) is None


class TestToggleSelection:
    """Tests for the selection reducer."""

    def test_selecting_one_selects_its_origin_group(self, cohort) -> None:
        """Test that the group follows the clicked record."""
        bruno, carla, davi = cohort

        selection = toggle_selection(bruno, frozenset(), cohort)

        assert selection == {bruno.id, carla.id}
        assert davi.id not in selection

    def test_deselecting_one_deselects_group(self, cohort) -> None:
        """Test that unchecking removes the whole group."""
        bruno, carla, davi = cohort
        selection = frozenset({bruno.id, carla.id, davi.id})

        selection = toggle_selection(carla, selection, cohort)

        assert selection == {davi.id}

    def test_record_without_origin_toggles_alone(self, store, cohort) -> None:
        """Test that a manual record selects only itself."""
        manual = store.add_student(StudentRecord(name="Eva"))
        staged = [*cohort, manual]

        selected = toggle_selection(manual, frozenset(), staged)
        cleared = toggle_selection(manual, selected, staged)

        assert selected == {manual.id}
        assert cleared == frozenset()

    def test_assigned_record_toggles_alone(self, cohort) -> None:
        """Test that a record with a section never pulls a group."""
        bruno, carla, _ = cohort
        placed = bruno.model_copy(update={"section_id": "s-1b"})

        selection = toggle_selection(placed, frozenset(), cohort)

        assert selection == {bruno.id}
        assert carla.id not in selection

    def test_reducer_does_not_mutate_input(self, cohort) -> None:
        """Test that the current selection is left untouched."""
        current = {cohort[2].id}

        toggle_selection(cohort[0], current, cohort)

        assert current == {cohort[2].id}


class TestGrouping:
    """Tests for origin grouping and the missing-origin advisory."""

    def test_group_by_origin(self, cohort) -> None:
        """Test groups in first-seen order."""
        bruno, carla, davi = cohort

        groups = group_by_origin(cohort)

        assert [g.label for g in groups] == ["2º Ano B", "3º Ano"]
        assert groups[0].student_ids == [bruno.id, carla.id]
        assert groups[1].student_ids == [davi.id]

    def test_missing_origin_labels(self, cohort, sections, resolver) -> None:
        """Test that only origins without any section are listed once.

        Only 2º Ano A exists, so 2º Ano B still has to be created.
        """
        missing = missing_origin_labels([*cohort, cohort[2]], sections, resolver)

        assert missing == ["2º Ano B", "3º Ano"]

    def test_origin_with_candidate_not_missing(self, store, sections, resolver) -> None:
        """Test that an origin some section could take is not listed."""
        record = store.add_student(
            StudentRecord(name="Fabi", origin_class_name="1º Ano", origin_class_turma="")
        )

        assert missing_origin_labels([record], sections, resolver) == []

    def test_suffix_without_section_is_missing(self, store, staging_pool) -> None:
        """Test that a grade match does not cover an unknown suffix."""
        store.add_student(
            StudentRecord(name="Gil", origin_class_name="1º Ano", origin_class_turma="C")
        )

        assert staging_pool.list_missing_origins() == ["1º Ano C"]

    def test_suffix_repeating_grade_uses_grade(self, store, sections, resolver) -> None:
        """Test that a turma equal to the class name counts as no suffix."""
        record = store.add_student(
            StudentRecord(name="Hana", origin_class_name="2º Ano", origin_class_turma="2º ano")
        )

        assert missing_origin_labels([record], sections, resolver) == []


class TestStagingPool:
    """Tests for StagingPool."""

    def test_staged_excludes_placed_records(self, staging_pool, allocator, cohort) -> None:
        """Test that placed students leave staging."""
        allocator.allocate([cohort[0].id], "s-1b")

        staged_ids = [r.id for r in staging_pool.staged()]

        assert staged_ids == [cohort[1].id, cohort[2].id]

    def test_toggle_by_id(self, staging_pool, cohort) -> None:
        """Test the pool-level reducer."""
        selection = staging_pool.toggle(cohort[1].id, [])

        assert selection == {cohort[0].id, cohort[1].id}

    def test_toggle_unknown_id_is_noop(self, staging_pool, cohort) -> None:
        """Test that an unknown id leaves the selection unchanged."""
        assert staging_pool.toggle("nope", [cohort[2].id]) == {cohort[2].id}

    def test_list_missing_origins_tracks_new_sections(
        self, staging_pool, store, cohort, section_factory
    ) -> None:
        """Test that creating a destination clears the advisory."""
        assert staging_pool.list_missing_origins() == ["2º Ano B", "3º Ano"]

        store.create_section(section_factory("s-2b", "2º Ano B", "2º Ano"))
        store.create_section(section_factory("s-3a", "3º Ano A", "3º Ano"))

        assert staging_pool.list_missing_origins() == []
