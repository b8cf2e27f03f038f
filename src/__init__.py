"""Turma Allocation Backend.

Class resolution and seat allocation for school rosters: imported students
are matched to live sections, the rest wait in staging until an operator
places them within each section's seat capacity.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
