# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest.mock import patch

from src.core.config.settings import (
    DEFAULT_UNITS_FILE,
    APISettings,
    CORSSettings,
    RosterSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestRosterSettings:
    """Tests for RosterSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = RosterSettings()

        assert settings.units_file == DEFAULT_UNITS_FILE
        assert settings.strict_units is False
        assert settings.unassigned_label == "A alocar"

    def test_default_units_file_ships_with_project(self) -> None:
        """Test that the default catalog path points at config/units.yaml."""
        assert DEFAULT_UNITS_FILE.name == "units.yaml"
        assert DEFAULT_UNITS_FILE.parent.name == "config"
        assert DEFAULT_UNITS_FILE.is_file()

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "ROSTER_UNITS_FILE": "/etc/turma/units.yaml",
            "ROSTER_STRICT_UNITS": "true",
            "ROSTER_UNASSIGNED_LABEL": "Sem turma",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = RosterSettings()

        assert settings.units_file == Path("/etc/turma/units.yaml")
        assert settings.strict_units is True
        assert settings.unassigned_label == "Sem turma"


class TestCORSSettings:
    """Tests for CORSSettings."""

    def test_origins_list_property(self) -> None:
        """Test origins list parsing."""
        settings = CORSSettings(origins="http://a.com, http://b.com,,")

        assert settings.origins_list == ["http://a.com", "http://b.com"]


class TestAPISettings:
    """Tests for APISettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = APISettings()

        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.reload is False

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        with patch.dict(os.environ, {"API_PORT": "9100"}, clear=False):
            settings = APISettings()

        assert settings.port == 9100


class TestSettings:
    """Tests for main Settings class."""

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.roster, RosterSettings)
        assert isinstance(settings.cors, CORSSettings)
        assert isinstance(settings.api, APISettings)

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        assert Settings(environment="development").is_development is True
        assert Settings(environment="production").is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        assert Settings(environment="production").is_production is True
        assert Settings(environment="staging").is_production is False


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self) -> None:
        """Test that clearing the cache picks up new environment values."""
        first = get_settings()

        with patch.dict(os.environ, {"ROSTER_STRICT_UNITS": "true"}, clear=False):
            clear_settings_cache()
            second = get_settings()

        assert second is not first
        assert second.roster.strict_units is True
