from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ahpcore.consistency import analyze_consistency
from ahpcore.constants import CONSISTENCY_THRESHOLD, SAATY_MAX, SAATY_MIN
from ahpcore.core import PriorityAnalysis, PriorityResult
from ahpcore.judgments import Judgment, JudgmentSet
from ahpcore.models import CalculationInput, CriterionType, Measurement, MeasurementSummary
from ahpcore.pipeline import derive_priorities
from ahpcore.priority import equal_priorities

logger = logging.getLogger(__name__)


def normalize_column(values: Sequence[float], criterion_type: CriterionType) -> List[float]:
    if not values:
        return []
    max_value = max(values)
    min_value = min(values)
    if max_value == 0 and min_value == 0:
        return [0.0] * len(values)

    if criterion_type == CriterionType.BENEFIT:
        if max_value == 0:
            return [0.0] * len(values)
        return [value / max_value for value in values]

    positives = [value for value in values if value > 0]
    reference = min(positives) if positives else min_value
    return [1.0 if value == 0 else reference / value for value in values]


def normalize_flat(
    criterion_ids: Sequence[str],
    alternative_ids: Sequence[str],
    values: Mapping[Tuple[str, str], float],
    criterion_types: Mapping[str, CriterionType],
) -> Dict[str, Dict[str, float]]:
    normalized: Dict[str, Dict[str, float]] = {}
    for criterion_id in criterion_ids:
        criterion_type = criterion_types.get(criterion_id, CriterionType.BENEFIT)
        raw = [float(values.get((alternative_id, criterion_id), 0.0)) for alternative_id in alternative_ids]
        normalized[criterion_id] = dict(zip(alternative_ids, normalize_column(raw, criterion_type)))
    return normalized


def distance_judgment(distance_a: Optional[float], distance_b: Optional[float]) -> float:
    if distance_a is None or distance_b is None or distance_a <= 0 or distance_b <= 0:
        return 1.0
    ratio = distance_b / distance_a
    return min(SAATY_MAX, max(SAATY_MIN, ratio))


def alternative_judgment(
    judgments: JudgmentSet,
    distances: Mapping[Tuple[str, str], float],
    sub_id: str,
) -> Judgment:
    has_distances = any(key[0] == sub_id for key in distances)

    def judgment(a: str, b: str) -> Optional[float]:
        value = judgments.lookup(a, b, scope=sub_id)
        if value is not None:
            return value
        if has_distances:
            return distance_judgment(distances.get((sub_id, a)), distances.get((sub_id, b)))
        return None

    return judgment


def sub_criterion_priorities(
    inputs: CalculationInput,
    threshold: float = CONSISTENCY_THRESHOLD,
) -> Dict[str, PriorityAnalysis]:
    alternative_ids = inputs.alternative_ids
    analyses: Dict[str, PriorityAnalysis] = {}
    for sub in inputs.sub_criteria:
        judgment = alternative_judgment(inputs.sub_judgments, inputs.distances, sub.id)
        analyses[sub.id] = derive_priorities(
            alternative_ids, judgment, threshold, label=f"sub-criterion {sub.id}"
        )
    return analyses


def sub_criterion_weights(
    inputs: CalculationInput,
    threshold: float = CONSISTENCY_THRESHOLD,
) -> Dict[str, PriorityAnalysis]:
    analyses: Dict[str, PriorityAnalysis] = {}
    for criterion in inputs.criteria:
        sub_ids = [sub.id for sub in inputs.sub_criteria_of(criterion.id)]
        if not sub_ids:
            continue
        if inputs.sub_weight_judgments.has_scope(criterion.id):
            analyses[criterion.id] = derive_priorities(
                sub_ids,
                inputs.sub_weight_judgments.judge(criterion.id),
                threshold,
                label=f"sub-weights of {criterion.id}",
            )
            continue
        logger.debug("no sub-weight judgments for %s, splitting equally", criterion.id)
        priorities = equal_priorities(sub_ids)
        analyses[criterion.id] = PriorityAnalysis(
            priorities=priorities,
            consistency=analyze_consistency(priorities.matrix, priorities.vector, threshold),
        )
    return analyses


def aggregate_option_scores(
    options: Sequence[str],
    criteria: Sequence[str],
    normalized: Mapping[str, Mapping[str, float]],
    subcriteria: Mapping[str, Sequence[str]],
    sub_priorities: Mapping[str, PriorityResult],
    sub_weights: Mapping[str, PriorityResult],
) -> Dict[str, List[float]]:
    if not options or not criteria:
        return {}

    option_scores: Dict[str, List[float]] = {}
    for option in options:
        scores_row: List[float] = []
        for criterion in criteria:
            sub_items = list(subcriteria.get(criterion, []))
            if sub_items:
                weights_result = sub_weights.get(criterion)
                weights = [weights_result.weight_of(sub_id) for sub_id in sub_items] if weights_result else []
                if len(weights) != len(sub_items) or sum(weights) <= 0:
                    weights = [1.0 / len(sub_items)] * len(sub_items)
                sub_row = [
                    sub_priorities[sub_id].weight_of(option) if sub_id in sub_priorities else 0.0
                    for sub_id in sub_items
                ]
                scores_row.append(sum(w * s for w, s in zip(weights, sub_row)))
            else:
                scores_row.append(float(normalized.get(criterion, {}).get(option, 0.0)))
        option_scores[option] = scores_row
    return option_scores


def summarize_measurements(
    measurements: Sequence[Measurement],
) -> Dict[str, Dict[str, MeasurementSummary]]:
    grouped: Dict[str, Dict[str, List[Measurement]]] = {}
    for measurement in measurements:
        by_option = grouped.setdefault(measurement.criterion_id, {})
        by_option.setdefault(measurement.alternative_id, []).append(measurement)

    summary: Dict[str, Dict[str, MeasurementSummary]] = {}
    for criterion_id, by_option in grouped.items():
        summary[criterion_id] = {}
        for option, records in by_option.items():
            ratios = [record.rate / record.area for record in records if record.area > 0]
            summary[criterion_id][option] = MeasurementSummary(
                rate=sum(record.rate for record in records) / len(records),
                area=sum(record.area for record in records) / len(records),
                ratio=sum(ratios) / len(ratios) if ratios else 0.0,
                count=len(records),
            )
    return summary
