# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mapping of free-text unit labels to SchoolUnit.

Legacy exports write the campus as free text ("Unidade Filial",
"ANEXO II", ""). A label maps to the first catalog unit whose keyword it
contains, compared case-insensitively. Blank labels map to the primary
unit. Whether an unmatched label also falls back to the primary unit is
the caller's decision; ``UnitMatch.recognized`` tells the two cases apart.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from src.core.config.yaml_loader import YAMLLoadError, load_yaml
from src.models.roster import PRIMARY_UNIT, SchoolUnit

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS: dict[SchoolUnit, tuple[str, ...]] = {
    SchoolUnit.FILIAL: ("filial",),
    SchoolUnit.ANEXO: ("anexo",),
    SchoolUnit.MATRIZ: ("matriz", "sede"),
}


@dataclass(frozen=True, slots=True)
class UnitMatch:
    """Result of mapping a unit label.

    Attributes:
        unit: Mapped unit (the primary unit when nothing matched).
        recognized: False when a non-blank label matched no keyword.
    """

    unit: SchoolUnit
    recognized: bool


class UnitCatalog:
    """Keyword catalog for unit labels.

    Attributes:
        primary_unit: Unit used for blank or unmatched labels.
    """

    def __init__(
        self,
        keywords: Mapping[SchoolUnit, Sequence[str]] | None = None,
        primary_unit: SchoolUnit = PRIMARY_UNIT,
    ) -> None:
        """Initialize the catalog.

        Args:
            keywords: Keywords per unit, checked in mapping order.
            primary_unit: Fallback unit.
        """
        source = DEFAULT_KEYWORDS if keywords is None else keywords
        self.primary_unit = primary_unit
        self._keywords: tuple[tuple[SchoolUnit, tuple[str, ...]], ...] = tuple(
            (unit, tuple(k.casefold() for k in words if k and k.strip()))
            for unit, words in source.items()
        )

    @classmethod
    def from_yaml(cls, path: Path) -> UnitCatalog:
        """Load a catalog file.

        Expected layout::

            primary: Matriz
            units:
              Filial: [filial]
              Anexo: [anexo]

        Args:
            path: YAML file.

        Returns:
            Loaded catalog.

        Raises:
            YAMLLoadError: If the file is missing, malformed, or names an
                unknown unit.
        """
        data = load_yaml(path)
        units = data.get("units") or {}
        if not isinstance(units, dict):
            raise YAMLLoadError(path, "'units' must be a mapping of unit to keywords")

        try:
            primary = SchoolUnit(data.get("primary", PRIMARY_UNIT.value))
            keywords = {
                SchoolUnit(name): [str(k) for k in (words or [])]
                for name, words in units.items()
            }
        except ValueError as e:
            raise YAMLLoadError(path, f"Unknown unit: {e}") from e

        return cls(keywords or None, primary)

    @classmethod
    def load(cls, path: Path | None) -> UnitCatalog:
        """Load ``path`` if it exists, otherwise use the built-in catalog."""
        if path is None or not path.exists():
            logger.info("Unit catalog file not found, using built-in keywords")
            return cls()
        return cls.from_yaml(path)

    def match(self, label: str | None) -> UnitMatch:
        """Map a unit label.

        Args:
            label: Free-text unit label.

        Returns:
            The mapped unit and whether a keyword matched.
        """
        text = (label or "").strip().casefold()
        if not text:
            return UnitMatch(self.primary_unit, recognized=True)

        for unit, words in self._keywords:
            if any(word in text for word in words):
                return UnitMatch(unit, recognized=True)

        return UnitMatch(self.primary_unit, recognized=False)

    def to_unit(self, label: str | None) -> SchoolUnit:
        """Map a unit label, falling back to the primary unit."""
        return self.match(label).unit
