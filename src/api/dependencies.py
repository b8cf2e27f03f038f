# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
The roster store and the services bound to it are process-wide
singletons, created lazily from settings on first use.

Example:
    @router.post("/drag")
    def drag(
        data: DragAllocationRequest,
        allocator: Allocator = Depends(get_allocator),
    ):
        ...
"""

import logging

from fastapi import Depends

from src.core.config import get_settings
from src.domains.allocation import Allocator
from src.domains.resolution import ClassResolver, UnitCatalog
from src.domains.roster import RosterStore
from src.domains.roster_import import RosterImportService
from src.domains.staging import StagingPool

logger = logging.getLogger(__name__)

_roster_store: RosterStore | None = None
_unit_catalog: UnitCatalog | None = None
_resolver: ClassResolver | None = None


def get_roster_store() -> RosterStore:
    """Get the roster store singleton."""
    global _roster_store
    if _roster_store is None:
        settings = get_settings()
        _roster_store = RosterStore(unassigned_label=settings.roster.unassigned_label)
        logger.info("Roster store initialized")
    return _roster_store


def get_unit_catalog() -> UnitCatalog:
    """Get the unit catalog loaded from ``ROSTER_UNITS_FILE``.

    Raises:
        YAMLLoadError: If the configured file exists but is invalid.
    """
    global _unit_catalog
    if _unit_catalog is None:
        _unit_catalog = UnitCatalog.load(get_settings().roster.units_file)
    return _unit_catalog


def get_resolver() -> ClassResolver:
    """Get the class resolver singleton."""
    global _resolver
    if _resolver is None:
        _resolver = ClassResolver()
    return _resolver


def get_allocator(store: RosterStore = Depends(get_roster_store)) -> Allocator:
    """Get an allocator bound to the roster store."""
    return Allocator(store)


def get_staging_pool(
    store: RosterStore = Depends(get_roster_store),
    resolver: ClassResolver = Depends(get_resolver),
) -> StagingPool:
    """Get a staging pool view of the roster store."""
    return StagingPool(store, resolver)


def get_import_service(
    store: RosterStore = Depends(get_roster_store),
    allocator: Allocator = Depends(get_allocator),
    resolver: ClassResolver = Depends(get_resolver),
    units: UnitCatalog = Depends(get_unit_catalog),
) -> RosterImportService:
    """Get a roster import service bound to the roster store."""
    return RosterImportService(
        store=store,
        allocator=allocator,
        resolver=resolver,
        units=units,
        strict_units=get_settings().roster.strict_units,
    )


def reset_roster_state() -> None:
    """Drop the singletons so the next request starts from an empty store.

    Used by tests and after a settings reload.
    """
    global _roster_store, _unit_catalog, _resolver
    _roster_store = None
    _unit_catalog = None
    _resolver = None
