"""Small text helpers used by routing, cognition and the personality catalog."""

from __future__ import annotations

import re
from typing import List

import numpy as np

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def extract_entities(text: str) -> List[str]:
    """
    Pull likely named entities out of free text.

    A token is an entity when, stripped of punctuation, it starts with an
    uppercase letter. Order of first appearance is kept, duplicates dropped.
    """
    entities: List[str] = []
    for word in text.split():
        clean = _NON_ALNUM.sub("", word)
        if clean and clean[0].isupper() and clean not in entities:
            entities.append(clean)
    return entities


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings."""
    rows, cols = len(b) + 1, len(a) + 1
    matrix = np.zeros((rows, cols), dtype=np.int64)
    matrix[0, :] = np.arange(cols)
    matrix[:, 0] = np.arange(rows)

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[j - 1] == b[i - 1] else 1
            matrix[i, j] = min(
                matrix[i, j - 1] + 1,
                matrix[i - 1, j] + 1,
                matrix[i - 1, j - 1] + cost,
            )

    return int(matrix[rows - 1, cols - 1])


def string_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: 1 - distance / len(longer). Two empty strings are identical."""
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    if not longer:
        return 1.0
    return (len(longer) - levenshtein_distance(longer, shorter)) / len(longer)
