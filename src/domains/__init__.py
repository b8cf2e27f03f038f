# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

This package contains the services that encapsulate the allocation rules.

Domains:
    normalization: Label normalization for class matching.
    resolution: Unit catalog and class resolver.
    roster: Keyed store of sections and student records.
    staging: Unassigned pool, origin groups and selection.
    allocation: Capacity-checked roster moves.
    roster_import: Import of external roster rows.
"""
