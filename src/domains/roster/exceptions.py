# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for roster operations.

This module defines the base of the roster exception hierarchy:
- RosterError: Base exception for roster, staging and allocation errors
- SectionNotFoundError: Unknown section id
- StudentNotFoundError: Unknown student id
- SectionExistsError: Section id already taken

Allocation-specific errors live in ``src.domains.allocation.service``.
"""


class RosterError(Exception):
    """Base exception for roster errors.

    Attributes:
        message: Human-readable error description.
        details: Extra context for operator messaging.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize roster error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class SectionNotFoundError(RosterError):
    """Raised when a section id is unknown."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section {section_id} not found")


class StudentNotFoundError(RosterError):
    """Raised when a student id is unknown."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found")


class SectionExistsError(RosterError):
    """Raised when creating a section whose id is already taken."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section {section_id} already exists")
