# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class resolution for external roster rows.

This module provides the ClassResolver class, which matches a
(grade-or-full-name, section suffix, unit) triple to a live section.

Resolution runs an ordered tuple of strategies and the first one that
returns a section wins:

1. combined name ("grade suffix") within the unit
2. combined name in any unit (tolerates a mislabeled unit)
3. grade only within the unit
4. grade only in any unit

Each strategy only answers when exactly one section qualifies. Anything
ambiguous or unmatched comes back as ``Unresolved`` and the record waits
in staging; the resolver never guesses and never raises. Matching is
plain equality of normalized keys, so every decision can be audited.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from src.domains.normalization import normalize_label
from src.models.roster import Resolved, SchoolUnit, Section, Unresolved

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolutionQuery:
    """Normalized input shared by every strategy.

    Attributes:
        combined_key: Key of "grade suffix".
        grade_key: Key of the grade field alone.
        unit: Unit of the row, None when it must not be used.
        sections: Stable snapshot of live sections.
    """

    combined_key: str
    grade_key: str
    unit: SchoolUnit | None
    sections: tuple[Section, ...]


Strategy = Callable[[ResolutionQuery], Section | None]


def _only(candidates: Iterable[Section]) -> Section | None:
    """Return the single candidate, or None for zero or several."""
    found = list(candidates)
    return found[0] if len(found) == 1 else None


def match_combined_in_unit(query: ResolutionQuery) -> Section | None:
    if not query.combined_key or query.unit is None:
        return None
    return _only(
        s for s in query.sections
        if normalize_label(s.name) == query.combined_key and s.unit == query.unit
    )


def match_combined_any_unit(query: ResolutionQuery) -> Section | None:
    if not query.combined_key:
        return None
    return _only(s for s in query.sections if normalize_label(s.name) == query.combined_key)


def match_grade_in_unit(query: ResolutionQuery) -> Section | None:
    # Only safe because the grade is unambiguous within the unit.
    if not query.grade_key or query.unit is None:
        return None
    return _only(
        s for s in query.sections
        if normalize_label(s.grade) == query.grade_key and s.unit == query.unit
    )


def match_grade_any_unit(query: ResolutionQuery) -> Section | None:
    if not query.grade_key:
        return None
    return _only(s for s in query.sections if normalize_label(s.grade) == query.grade_key)


STRATEGIES: tuple[Strategy, ...] = (
    match_combined_in_unit,
    match_combined_any_unit,
    match_grade_in_unit,
    match_grade_any_unit,
)


def effective_suffix(grade_or_full_name: str | None, section_suffix: str | None) -> str:
    """Drop a suffix that merely repeats the grade field."""
    suffix = (section_suffix or "").strip()
    if suffix and normalize_label(suffix) == normalize_label(grade_or_full_name):
        return ""
    return suffix


def origin_label(grade_or_full_name: str | None, section_suffix: str | None) -> str:
    """Human-readable "grade suffix" label of a row."""
    grade = (grade_or_full_name or "").strip()
    return f"{grade} {effective_suffix(grade, section_suffix)}".strip()


def build_query(
    grade_or_full_name: str | None,
    section_suffix: str | None,
    unit: SchoolUnit | None,
    live_sections: Sequence[Section],
) -> ResolutionQuery:
    """Normalize resolver input once for all strategies."""
    return ResolutionQuery(
        combined_key=normalize_label(origin_label(grade_or_full_name, section_suffix)),
        grade_key=normalize_label(grade_or_full_name),
        unit=unit,
        sections=tuple(live_sections),
    )


class ClassResolver:
    """Resolves external class labels to live sections.

    Attributes:
        strategies: Ordered strategies, first match wins.
    """

    def __init__(self, strategies: Sequence[Strategy] = STRATEGIES) -> None:
        """Initialize the resolver.

        Args:
            strategies: Ordered strategies to run.
        """
        self.strategies = tuple(strategies)

    def resolve(
        self,
        grade_or_full_name: str | None,
        section_suffix: str | None,
        unit: SchoolUnit | None,
        live_sections: Sequence[Section],
    ) -> Resolved | Unresolved:
        """Resolve one row against a section snapshot.

        Args:
            grade_or_full_name: Grade ("1º Ano") or full class name ("1º Ano A").
            section_suffix: Section suffix ("A"), may be blank.
            unit: Unit of the row.
            live_sections: Complete, stable snapshot of sections.

        Returns:
            ``Resolved`` with the section, or ``Unresolved`` with the
            original "grade suffix" label.
        """
        query = build_query(grade_or_full_name, section_suffix, unit, live_sections)

        for strategy in self.strategies:
            section = strategy(query)
            if section is not None:
                logger.debug(
                    "Resolved '%s' to section %s via %s",
                    query.combined_key,
                    section.id,
                    strategy.__name__,
                )
                return Resolved(section=section)

        label = origin_label(grade_or_full_name, section_suffix)
        logger.debug("Could not resolve '%s'", label)
        return Unresolved(original_label=label)

    def has_candidate(
        self,
        grade_or_full_name: str | None,
        section_suffix: str | None,
        live_sections: Sequence[Section],
    ) -> bool:
        """Check whether any section in any unit could receive the label.

        Ambiguous labels count as having a candidate: the destination
        exists, the operator just has to pick it. A label with a suffix
        needs a section of that exact name; only suffix-less labels may
        fall back to the grade.
        """
        query = build_query(grade_or_full_name, section_suffix, None, live_sections)
        grade_only = not effective_suffix(grade_or_full_name, section_suffix)
        for section in query.sections:
            if query.combined_key and normalize_label(section.name) == query.combined_key:
                return True
            if not grade_only or not query.grade_key:
                continue
            if normalize_label(section.grade) == query.grade_key:
                return True
        return False
