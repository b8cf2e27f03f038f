# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Label normalization package.

Turns free-text grade/class labels into canonical comparison keys.
"""

from src.domains.normalization.normalizer import SEPARATORS, normalize_label

__all__ = [
    "SEPARATORS",
    "normalize_label",
]
