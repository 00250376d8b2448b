from __future__ import annotations

import logging
from typing import Sequence

from ahpcore.consistency import analyze_consistency
from ahpcore.constants import CONSISTENCY_THRESHOLD
from ahpcore.core import PriorityAnalysis
from ahpcore.judgments import Judgment
from ahpcore.matrix import build_comparison_matrix
from ahpcore.priority import compute_priorities

logger = logging.getLogger(__name__)


def derive_priorities(
    ids: Sequence[str],
    judgment: Judgment,
    threshold: float = CONSISTENCY_THRESHOLD,
    label: str = "criteria",
) -> PriorityAnalysis:
    matrix = build_comparison_matrix(ids, judgment)
    priorities = compute_priorities(ids, matrix)
    consistency = analyze_consistency(priorities.matrix, priorities.vector, threshold)
    logger.debug(
        "%s: n=%d lambda_max=%.5f CR=%.5f", label, len(ids), consistency.lambda_max, consistency.cr
    )
    if not consistency.is_consistent:
        logger.warning(
            "%s judgments are inconsistent (CR=%.4f >= %.2f)", label, consistency.cr, threshold
        )
    return PriorityAnalysis(priorities=priorities, consistency=consistency)
