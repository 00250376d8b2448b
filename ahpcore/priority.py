from __future__ import annotations

from typing import Sequence

import numpy as np

from ahpcore.core import PriorityResult


def compute_priorities(ids: Sequence[str], matrix: np.ndarray) -> PriorityResult:
    ids = list(ids)
    if not ids:
        return PriorityResult()

    matrix = np.asarray(matrix, dtype=float)
    column_sums = matrix.sum(axis=0)
    normalized = matrix / column_sums
    vector = normalized.mean(axis=1)
    return PriorityResult(
        ids=ids,
        matrix=matrix,
        normalized=normalized,
        column_sums=column_sums,
        vector=vector,
    )


def equal_priorities(ids: Sequence[str]) -> PriorityResult:
    ids = list(ids)
    if not ids:
        return PriorityResult(defaulted=True)
    n_items = len(ids)
    matrix = np.ones((n_items, n_items), dtype=float)
    result = compute_priorities(ids, matrix)
    result.vector = np.full(n_items, 1.0 / n_items)
    result.defaulted = True
    return result
