# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staging domain package.

This package handles student records awaiting a section:
- Origin groups for bulk selection of an unresolved cohort
- The checkbox selection reducer
- The missing-destination advisory
"""

from src.domains.staging.service import (
    OriginKey,
    StagingPool,
    group_by_origin,
    missing_origin_labels,
    origin_key,
    toggle_selection,
)

__all__ = [
    "StagingPool",
    "OriginKey",
    "origin_key",
    "toggle_selection",
    "group_by_origin",
    "missing_origin_labels",
]
