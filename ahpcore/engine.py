from __future__ import annotations

import logging
from typing import Any, Dict

from ahpcore.constants import CONSISTENCY_THRESHOLD
from ahpcore.hierarchy import (
    aggregate_option_scores,
    normalize_flat,
    sub_criterion_priorities,
    sub_criterion_weights,
    summarize_measurements,
)
from ahpcore.models import CalculationInput, CalculationResult
from ahpcore.pipeline import derive_priorities
from ahpcore.ranking import build_table, rank_alternatives

logger = logging.getLogger(__name__)


def calculate(
    inputs: CalculationInput,
    threshold: float = CONSISTENCY_THRESHOLD,
) -> CalculationResult:
    criterion_ids = inputs.criterion_ids
    alternative_ids = inputs.alternative_ids

    criteria = derive_priorities(
        criterion_ids, inputs.criteria_judgments.judge(), threshold, label="criteria"
    )
    weights = [criteria.priorities.weight_of(criterion_id) for criterion_id in criterion_ids]

    normalized = normalize_flat(
        criterion_ids, alternative_ids, inputs.evaluation_values, inputs.criteria_types
    )

    sub_analyses = {}
    weight_analyses = {}
    if inputs.is_hierarchical:
        sub_analyses = sub_criterion_priorities(inputs, threshold)
        weight_analyses = sub_criterion_weights(inputs, threshold)

    option_scores = aggregate_option_scores(
        alternative_ids,
        criterion_ids,
        normalized,
        {criterion_id: [sub.id for sub in inputs.sub_criteria_of(criterion_id)] for criterion_id in criterion_ids},
        {sub_id: analysis.priorities for sub_id, analysis in sub_analyses.items()},
        {criterion_id: analysis.priorities for criterion_id, analysis in weight_analyses.items()},
    )
    ranking = rank_alternatives(inputs.alternatives, weights, option_scores)

    result = CalculationResult(
        mode="hierarchical" if inputs.is_hierarchical else "flat",
        criterion_ids=criterion_ids,
        criteria=criteria,
        ranking=ranking,
        normalized_values=normalized,
        option_scores=option_scores,
        sub_criteria=sub_analyses,
        sub_weights=weight_analyses,
        measurement_summary=summarize_measurements(inputs.measurements),
    )
    if inputs.is_hierarchical:
        result.table = build_table(ranking, criterion_ids, weights, option_scores)

    logger.info(
        "ranked %d alternatives over %d criteria (%s mode, CR=%.4f)",
        len(alternative_ids),
        len(criterion_ids),
        result.mode,
        criteria.consistency.cr,
    )
    return result


def calculate_record(record: Dict[str, Any], threshold: float = CONSISTENCY_THRESHOLD) -> Dict[str, Any]:
    return calculate(CalculationInput.from_dict(record), threshold).to_dict()
