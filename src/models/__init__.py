# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared by domain services and the API layer.

Modules:
    roster: Units, sections, student records, external rows, resolution results.
    section: Section administration request/response DTOs.
    allocation: Allocation requests, results and selection DTOs.
"""
