from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np


def _empty_matrix() -> np.ndarray:
    return np.zeros((0, 0), dtype=float)


def _empty_vector() -> np.ndarray:
    return np.zeros(0, dtype=float)


@dataclass
class PriorityResult:
    ids: List[str] = field(default_factory=list)
    matrix: np.ndarray = field(default_factory=_empty_matrix)
    normalized: np.ndarray = field(default_factory=_empty_matrix)
    column_sums: np.ndarray = field(default_factory=_empty_vector)
    vector: np.ndarray = field(default_factory=_empty_vector)
    defaulted: bool = False

    @property
    def priorities(self) -> Dict[str, float]:
        return {item_id: float(value) for item_id, value in zip(self.ids, self.vector)}

    def weight_of(self, item_id: str) -> float:
        return self.priorities.get(item_id, 0.0)

    def to_dict(self) -> dict:
        return {
            "ids": list(self.ids),
            "matrix": self.matrix.tolist(),
            "normalizedMatrix": self.normalized.tolist(),
            "columnSums": self.column_sums.tolist(),
            "priorities": self.priorities,
            "defaulted": self.defaulted,
        }


@dataclass
class ConsistencyMetrics:
    lambda_max: float = 0.0
    ci: float = 0.0
    ri: float = 0.0
    cr: float = 0.0
    weighted_sums: List[float] = field(default_factory=list)
    is_consistent: bool = True

    def to_dict(self) -> dict:
        return {
            "lambdaMax": self.lambda_max,
            "consistencyIndex": self.ci,
            "randomIndex": self.ri,
            "weightedSums": list(self.weighted_sums),
            "consistencyRatio": self.cr,
            "isConsistent": self.is_consistent,
        }


@dataclass
class PriorityAnalysis:
    priorities: PriorityResult
    consistency: ConsistencyMetrics

    def to_dict(self) -> dict:
        data = self.priorities.to_dict()
        data["consistency"] = self.consistency.to_dict()
        return data
