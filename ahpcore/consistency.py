from __future__ import annotations

import numpy as np

from ahpcore.constants import CONSISTENCY_THRESHOLD, DEFAULT_RANDOM_INDEX, RANDOM_INDEX
from ahpcore.core import ConsistencyMetrics


def random_index(n_items: int) -> float:
    if n_items <= 0:
        return 0.0
    return RANDOM_INDEX.get(n_items, DEFAULT_RANDOM_INDEX)


def analyze_consistency(
    matrix: np.ndarray,
    vector: np.ndarray,
    threshold: float = CONSISTENCY_THRESHOLD,
) -> ConsistencyMetrics:
    matrix = np.asarray(matrix, dtype=float)
    vector = np.asarray(vector, dtype=float)
    n_items = vector.shape[0]
    if n_items == 0:
        return ConsistencyMetrics(is_consistent=True)

    weighted = matrix * vector
    row_sums = weighted.sum(axis=1)
    contributions = np.zeros(n_items, dtype=float)
    np.divide(row_sums, vector, out=contributions, where=vector != 0)
    lambda_max = float(contributions.mean())

    ci = (lambda_max - n_items) / (n_items - 1) if n_items > 1 else 0.0
    ri = random_index(n_items)
    cr = ci / ri if ri != 0 else 0.0
    return ConsistencyMetrics(
        lambda_max=lambda_max,
        ci=float(ci),
        ri=ri,
        cr=float(cr),
        weighted_sums=row_sums.tolist(),
        is_consistent=cr < threshold,
    )
