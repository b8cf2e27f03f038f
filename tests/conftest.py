# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Generator

import pytest

from src.core.config import clear_settings_cache
from src.domains.allocation import Allocator
from src.domains.resolution import ClassResolver, UnitCatalog
from src.domains.roster import RosterStore
from src.domains.roster_import import RosterImportService
from src.domains.staging import StagingPool
from src.models.roster import ClassPeriod, SchoolUnit, Section, StudentRecord


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses the HTTP app)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Section Fixtures
# =============================================================================


def make_section(
    section_id: str,
    name: str,
    grade: str,
    unit: SchoolUnit = SchoolUnit.MATRIZ,
    seats: int = 30,
    period: ClassPeriod = ClassPeriod.MORNING,
) -> Section:
    """Build a section whose seat table only covers its own unit."""
    return Section(
        id=section_id,
        name=name,
        grade=grade,
        unit=unit,
        period=period,
        capacity={unit: seats},
    )


@pytest.fixture
def section_1a() -> Section:
    """1º Ano A at Matriz with two seats."""
    return make_section("s-1a", "1º Ano A", "1º Ano", seats=2)


@pytest.fixture
def section_1b() -> Section:
    """1º Ano B at Matriz."""
    return make_section("s-1b", "1º Ano B", "1º Ano")


@pytest.fixture
def section_2a_filial() -> Section:
    """2º Ano A at Filial, the only 2º Ano section."""
    return make_section("s-2a-f", "2º Ano A", "2º Ano", unit=SchoolUnit.FILIAL, seats=25)


@pytest.fixture
def sections(section_1a, section_1b, section_2a_filial) -> list[Section]:
    """Default set of live sections."""
    return [section_1a, section_1b, section_2a_filial]


# =============================================================================
# Store and Service Fixtures
# =============================================================================


@pytest.fixture
def store(sections) -> RosterStore:
    """Roster store seeded with the default sections and no students."""
    return RosterStore(sections=sections)


@pytest.fixture
def resolver() -> ClassResolver:
    """Class resolver with the default strategies."""
    return ClassResolver()


@pytest.fixture
def unit_catalog() -> UnitCatalog:
    """Built-in unit catalog."""
    return UnitCatalog()


@pytest.fixture
def allocator(store) -> Allocator:
    """Allocator bound to the test store."""
    return Allocator(store)


@pytest.fixture
def staging_pool(store, resolver) -> StagingPool:
    """Staging pool over the test store."""
    return StagingPool(store, resolver)


@pytest.fixture
def import_service(store, allocator, resolver, unit_catalog) -> RosterImportService:
    """Import service over the test store."""
    return RosterImportService(
        store=store,
        allocator=allocator,
        resolver=resolver,
        units=unit_catalog,
    )


@pytest.fixture
def staged_student(store) -> StudentRecord:
    """A student waiting in staging."""
    return store.add_student(StudentRecord(name="Ana Souza", grade="1º Ano"))


@pytest.fixture
def section_factory():
    """Provide the section builder to tests that need custom layouts."""
    return make_section
