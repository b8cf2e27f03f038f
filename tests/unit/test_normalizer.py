# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for label normalization."""

import pytest

from src.domains.normalization import normalize_label


class TestNormalizeLabel:
    """Tests for normalize_label."""

    def test_spelling_variants_share_a_key(self) -> None:
        """Test that common spellings of one class collapse to one key."""
        assert normalize_label("1º Ano - A") == normalize_label("1 ano a")
        assert normalize_label("1 ano a") == normalize_label("1ANO A")

    @pytest.mark.parametrize(
        "raw",
        ["1º Ano - A", "Infantil II: Manhã", "  3ª SÉRIE  ", "Pré–Escola 2.B", ""],
    )
    def test_idempotent(self, raw: str) -> None:
        """Test that normalizing a key returns the same key."""
        key = normalize_label(raw)
        assert normalize_label(key) == key

    def test_strips_diacritics(self) -> None:
        """Test that accented letters compare equal to plain ones."""
        assert normalize_label("Manhã") == normalize_label("manha")
        assert normalize_label("Pré-Escola") == "preescola"

    def test_removes_separators(self) -> None:
        """Test that hyphen variants, ordinals, periods and colons vanish."""
        assert normalize_label("1º-A") == "1a"
        assert normalize_label("2ª Série: B") == "2serieb"
        assert normalize_label("3.º Ano — C") == "3anoc"

    def test_blank_and_none_give_empty_key(self) -> None:
        """Test that missing input never raises."""
        assert normalize_label(None) == ""
        assert normalize_label("") == ""
        assert normalize_label("   ") == ""
