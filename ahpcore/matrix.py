from __future__ import annotations

from typing import Sequence

import numpy as np

from ahpcore.judgments import Judgment


def build_comparison_matrix(ids: Sequence[str], judgment: Judgment) -> np.ndarray:
    n_items = len(ids)
    matrix = np.ones((n_items, n_items), dtype=float)
    for i in range(n_items):
        for j in range(i + 1, n_items):
            value = _positive(judgment(ids[i], ids[j]))
            if value is not None:
                matrix[i, j] = value
                matrix[j, i] = 1.0 / value
                continue
            reverse = _positive(judgment(ids[j], ids[i]))
            if reverse is not None:
                matrix[j, i] = reverse
                matrix[i, j] = 1.0 / reverse
    return matrix


def is_reciprocal(matrix: np.ndarray, tol: float = 1e-9) -> bool:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    if not np.allclose(np.diag(matrix), 1.0, atol=tol):
        return False
    return bool(np.allclose(matrix * matrix.T, np.ones_like(matrix), atol=tol))


def _positive(value: float | None) -> float | None:
    if value is None:
        return None
    value = float(value)
    if value <= 0 or not np.isfinite(value):
        return None
    return value
