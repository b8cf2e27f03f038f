# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class resolution domain package.

This package matches loosely formatted roster rows to live sections:
- Unit label catalog (free text to SchoolUnit)
- Ordered, first-match-wins resolution strategies
"""

from src.domains.resolution.service import (
    STRATEGIES,
    ClassResolver,
    ResolutionQuery,
    Strategy,
    build_query,
    origin_label,
)
from src.domains.resolution.units import UnitCatalog, UnitMatch

__all__ = [
    "ClassResolver",
    "ResolutionQuery",
    "Strategy",
    "STRATEGIES",
    "build_query",
    "origin_label",
    "UnitCatalog",
    "UnitMatch",
]
