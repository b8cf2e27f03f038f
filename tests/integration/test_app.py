# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the application factory."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import reset_roster_state
from src.core.config import YAMLLoadError, clear_settings_cache

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def clean_state():
    """Start and end every test with fresh singletons."""
    reset_roster_state()
    yield
    reset_roster_state()


class TestCreateApp:
    """Tests for create_app and its lifespan."""

    def test_startup_and_health(self):
        """Test that the app starts with an empty store."""
        with TestClient(create_app()) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["roster"] == {"sections": 0, "students": 0, "staged": 0}

    def test_docs_disabled_outside_debug(self):
        """Test that API docs follow the debug flag."""
        with patch.dict(os.environ, {"DEBUG": "false"}, clear=False):
            clear_settings_cache()
            app = create_app()

        assert app.docs_url is None
        assert app.openapi_url is None

    def test_unassigned_label_from_settings(self):
        """Test that ROSTER_UNASSIGNED_LABEL reaches staged records."""
        with patch.dict(os.environ, {"ROSTER_UNASSIGNED_LABEL": "Sem turma"}, clear=False):
            clear_settings_cache()
            with TestClient(create_app()) as client:
                response = client.post("/api/v1/roster/students", json={"name": "Ana"})

        assert response.json()["section_name"] == "Sem turma"

    def test_broken_unit_catalog_fails_startup(self, tmp_path):
        """Test that an invalid catalog file stops the app at startup."""
        catalog = tmp_path / "units.yaml"
        catalog.write_text("- not a mapping\n")

        with patch.dict(os.environ, {"ROSTER_UNITS_FILE": str(catalog)}, clear=False):
            clear_settings_cache()
            with pytest.raises(YAMLLoadError):
                with TestClient(create_app()):
                    pass
