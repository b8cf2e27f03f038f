# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster domain package.

This package provides the keyed store of sections and student records:
- Section create/edit for class administration
- Student intake into staging
- Read-only queries and stable section snapshots
"""

from src.domains.roster.exceptions import (
    RosterError,
    SectionExistsError,
    SectionNotFoundError,
    StudentNotFoundError,
)
from src.domains.roster.store import RosterStore

__all__ = [
    "RosterStore",
    "RosterError",
    "SectionExistsError",
    "SectionNotFoundError",
    "StudentNotFoundError",
]
