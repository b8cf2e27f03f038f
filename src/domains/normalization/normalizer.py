# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Canonical keys for free-text class labels.

Spreadsheets and legacy exports spell the same class in many ways
("1º Ano - A", "1 ano a", "1ANO A"). ``normalize_label`` maps all of them
to one key so the resolver can compare by plain equality.

Example:
    >>> normalize_label("1º Ano - A")
    '1anoa'
    >>> normalize_label("Infantil II: Manhã")
    'infantiliimanha'
"""

import re
import unicodedata

# Whitespace, hyphen variants, ordinal markers, periods, colons.
SEPARATORS = "-‐‑‒–—ºª°.:"

_SEPARATOR_RE = re.compile(r"[\s" + re.escape(SEPARATORS) + r"]+")


def normalize_label(text: str | None) -> str:
    """Build the comparison key for a label.

    Lowercases, strips diacritics and removes every separator. Never
    raises; ``None`` and blank input give an empty key. Applying it to
    its own output returns the same key.

    Args:
        text: Raw label.

    Returns:
        Canonical key.
    """
    if not text:
        return ""

    # Lowercase first so characters like "İ" cannot reintroduce marks later.
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SEPARATOR_RE.sub("", stripped).strip()
