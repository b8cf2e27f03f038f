# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the unit label catalog."""

from pathlib import Path

import pytest

from src.core.config import YAMLLoadError
from src.core.config.settings import DEFAULT_UNITS_FILE
from src.domains.resolution import UnitCatalog
from src.models.roster import SchoolUnit


class TestUnitCatalogMatch:
    """Tests for matching free-text unit labels."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Filial", SchoolUnit.FILIAL),
            ("Unidade FILIAL Norte", SchoolUnit.FILIAL),
            ("anexo II", SchoolUnit.ANEXO),
            ("Matriz", SchoolUnit.MATRIZ),
            ("Sede", SchoolUnit.MATRIZ),
        ],
    )
    def test_keyword_containment(self, unit_catalog, label, expected) -> None:
        """Test case-insensitive substring matching."""
        match = unit_catalog.match(label)

        assert match.unit == expected
        assert match.recognized is True

    def test_blank_label_is_primary_unit(self, unit_catalog) -> None:
        """Test that an empty label maps to the primary unit."""
        match = unit_catalog.match("  ")

        assert match.unit == SchoolUnit.MATRIZ
        assert match.recognized is True

    def test_unknown_label_falls_back_unrecognized(self, unit_catalog) -> None:
        """Test that an unmatched label falls back but is flagged."""
        match = unit_catalog.match("Campus Centro")

        assert match.unit == SchoolUnit.MATRIZ
        assert match.recognized is False
        assert unit_catalog.to_unit("Campus Centro") == SchoolUnit.MATRIZ

    def test_custom_primary_unit(self) -> None:
        """Test that the fallback unit is configurable."""
        catalog = UnitCatalog(primary_unit=SchoolUnit.FILIAL)

        assert catalog.to_unit("") == SchoolUnit.FILIAL


class TestUnitCatalogLoading:
    """Tests for loading the catalog from YAML."""

    def test_shipped_catalog_loads(self) -> None:
        """Test that config/units.yaml is valid."""
        catalog = UnitCatalog.from_yaml(DEFAULT_UNITS_FILE)

        assert catalog.primary_unit == SchoolUnit.MATRIZ
        assert catalog.to_unit("Filial") == SchoolUnit.FILIAL
        assert catalog.to_unit("Anexo") == SchoolUnit.ANEXO

    def test_from_yaml_custom_keywords(self, tmp_path: Path) -> None:
        """Test loading keywords and primary unit."""
        path = tmp_path / "units.yaml"
        path.write_text("primary: Anexo\nunits:\n  Filial: [norte, filial]\n")

        catalog = UnitCatalog.from_yaml(path)

        assert catalog.to_unit("Unidade Norte") == SchoolUnit.FILIAL
        assert catalog.to_unit("") == SchoolUnit.ANEXO

    def test_unknown_unit_raises_error(self, tmp_path: Path) -> None:
        """Test that a unit outside SchoolUnit is rejected."""
        path = tmp_path / "units.yaml"
        path.write_text("units:\n  Satelite: [sat]\n")

        with pytest.raises(YAMLLoadError) as exc_info:
            UnitCatalog.from_yaml(path)

        assert "Unknown unit" in str(exc_info.value)

    def test_units_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that a list under 'units' is rejected."""
        path = tmp_path / "units.yaml"
        path.write_text("units:\n  - filial\n")

        with pytest.raises(YAMLLoadError):
            UnitCatalog.from_yaml(path)

    def test_load_missing_file_uses_builtin(self, tmp_path: Path) -> None:
        """Test that a missing file falls back to the built-in catalog."""
        catalog = UnitCatalog.load(tmp_path / "absent.yaml")

        assert catalog.to_unit("anexo") == SchoolUnit.ANEXO
