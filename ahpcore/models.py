from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ahpcore.constants import (
    DISTANCE_AHP_PREFIX,
    DISTANCE_PREFIX,
    DISTANCE_SUFFIX,
    FIELD_AHP_VALUE,
    FIELD_SUB_WEIGHT,
    REPORT_DIGITS,
)
from ahpcore.core import PriorityAnalysis
from ahpcore.errors import ValidationError
from ahpcore.judgments import JudgmentSet, split_composite_key

logger = logging.getLogger(__name__)


class CriterionType(str, Enum):
    BENEFIT = "BENEFIT"
    COST = "COST"


@dataclass
class Criterion:
    id: str
    name: str


@dataclass
class SubCriterion:
    id: str
    name: str
    criterion_id: str


@dataclass
class Alternative:
    id: str
    name: str


@dataclass
class Measurement:
    alternative_id: str
    criterion_id: str
    measurement_group_id: str
    rate: float
    area: float


@dataclass
class MeasurementSummary:
    rate: float
    area: float
    ratio: float
    count: int

    def to_dict(self) -> dict:
        return {"rate": self.rate, "area": self.area, "ratio": self.ratio, "count": self.count}


@dataclass
class RankingEntry:
    id: str
    name: str
    score: float
    formatted_score: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "formattedScore": self.formatted_score,
        }


@dataclass
class TableCell:
    raw: float
    weighted: float


@dataclass
class TableRow:
    id: str
    name: str
    values: Dict[str, TableCell]
    score: float
    formatted_score: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "values": {
                criterion_id: {"raw": cell.raw, "weighted": cell.weighted}
                for criterion_id, cell in self.values.items()
            },
            "score": self.score,
            "formattedScore": self.formatted_score,
        }


@dataclass
class CalculationInput:
    criteria: List[Criterion]
    alternatives: List[Alternative]
    criteria_judgments: JudgmentSet = field(default_factory=JudgmentSet)
    sub_criteria: List[SubCriterion] = field(default_factory=list)
    evaluation_values: Dict[Tuple[str, str], float] = field(default_factory=dict)
    criteria_types: Dict[str, CriterionType] = field(default_factory=dict)
    sub_judgments: JudgmentSet = field(default_factory=JudgmentSet)
    sub_weight_judgments: JudgmentSet = field(default_factory=JudgmentSet)
    distances: Dict[Tuple[str, str], float] = field(default_factory=dict)
    measurements: List[Measurement] = field(default_factory=list)

    @property
    def criterion_ids(self) -> List[str]:
        return [criterion.id for criterion in self.criteria]

    @property
    def alternative_ids(self) -> List[str]:
        return [alternative.id for alternative in self.alternatives]

    @property
    def is_hierarchical(self) -> bool:
        return bool(self.sub_criteria)

    def sub_criteria_of(self, criterion_id: str) -> List[SubCriterion]:
        return [sub for sub in self.sub_criteria if sub.criterion_id == criterion_id]

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationInput":
        if not isinstance(data, dict):
            raise ValidationError(["calculation input must be an object"])

        errors: List[str] = []
        criteria = [
            Criterion(id=item_id, name=name)
            for item_id, name in _entities(data.get("criteria"), "criteria", errors)
        ]
        alternatives = [
            Alternative(id=item_id, name=name)
            for item_id, name in _entities(data.get("cities"), "cities", errors)
        ]
        criterion_ids = [criterion.id for criterion in criteria]
        city_ids = [alternative.id for alternative in alternatives]

        sub_criteria: List[SubCriterion] = []
        for item in _records(data, "subCriteria", errors):
            if not item.get("id"):
                errors.append("subCriteria entries require an id")
                continue
            parent = str(item.get("criterionId", ""))
            if parent not in criterion_ids:
                errors.append(f"sub-criterion {item['id']} references unknown criterion {parent!r}")
                continue
            sub_criteria.append(
                SubCriterion(id=str(item["id"]), name=str(item.get("name", item["id"])), criterion_id=parent)
            )
        sub_ids = [sub.id for sub in sub_criteria]
        if len(set(sub_ids)) != len(sub_ids):
            errors.append("sub-criterion ids must be unique")

        criteria_judgments = JudgmentSet()
        for key, value in _mapping(data, "criteriaMatrix", errors).items():
            number = _strict_number(value, f"criteriaMatrix[{key!r}]", errors)
            parts = split_composite_key(str(key), criterion_ids, criterion_ids)
            if parts is None or number is None:
                _skip("criteriaMatrix", key)
                continue
            criteria_judgments.set(parts[0], parts[1], number)

        evaluation_values: Dict[Tuple[str, str], float] = {}
        for key, value in _mapping(data, "evaluationValues", errors).items():
            number = _strict_number(value, f"evaluationValues[{key!r}]", errors)
            parts = split_composite_key(str(key), city_ids, criterion_ids)
            if parts is None or number is None:
                _skip("evaluationValues", key)
                continue
            evaluation_values[(parts[0], parts[1])] = number

        criteria_types: Dict[str, CriterionType] = {}
        for criterion_id, value in _mapping(data, "criteriaConfig", errors).items():
            try:
                criteria_types[criterion_id] = CriterionType(str(value).upper())
            except ValueError:
                errors.append(f"criteriaConfig[{criterion_id!r}] must be BENEFIT or COST")

        inputs = cls(
            criteria=criteria,
            alternatives=alternatives,
            criteria_judgments=criteria_judgments,
            sub_criteria=sub_criteria,
            evaluation_values=evaluation_values,
            criteria_types=criteria_types,
        )
        inputs._read_field_values(_mapping(data, "criterionFieldValues", errors), errors)
        inputs._read_measurements(_records(data, "measurements", errors), errors)

        if errors:
            raise ValidationError(errors)
        return inputs

    def _read_field_values(self, field_values: Dict[str, Any], errors: List[str]) -> None:
        criterion_ids = self.criterion_ids
        city_ids = self.alternative_ids
        sub_ids = [sub.id for sub in self.sub_criteria]

        for scope_key, fields in field_values.items():
            scope_key = str(scope_key)
            if not isinstance(fields, dict):
                errors.append(f"criterionFieldValues[{scope_key!r}] must be an object")
                continue

            if scope_key.endswith(DISTANCE_SUFFIX) and scope_key[: -len(DISTANCE_SUFFIX)] in city_ids:
                self._read_distance_fields(scope_key[: -len(DISTANCE_SUFFIX)], fields, sub_ids, city_ids)
                continue

            if FIELD_AHP_VALUE in fields:
                value = _loose_number(fields[FIELD_AHP_VALUE])
                parts = split_composite_key(scope_key, sub_ids, city_ids, city_ids)
                if parts is None or value is None:
                    _skip("criterionFieldValues", scope_key)
                else:
                    self.sub_judgments.set(parts[1], parts[2], value, scope=parts[0])

            if FIELD_SUB_WEIGHT in fields:
                value = _loose_number(fields[FIELD_SUB_WEIGHT])
                parts = split_composite_key(scope_key, criterion_ids, sub_ids, sub_ids)
                if parts is None or value is None:
                    _skip("criterionFieldValues", scope_key)
                else:
                    self.sub_weight_judgments.set(parts[1], parts[2], value, scope=parts[0])

    def _read_distance_fields(
        self,
        city_id: str,
        fields: Dict[str, Any],
        sub_ids: List[str],
        city_ids: List[str],
    ) -> None:
        for field_key, raw in fields.items():
            field_key = str(field_key)
            value = _loose_number(raw)
            if value is None:
                continue
            if field_key.startswith(DISTANCE_PREFIX):
                sub_id = field_key[len(DISTANCE_PREFIX):]
                if sub_id in sub_ids:
                    self.distances[(sub_id, city_id)] = value
                    continue
            elif field_key.startswith(DISTANCE_AHP_PREFIX):
                parts = split_composite_key(field_key[len(DISTANCE_AHP_PREFIX):], sub_ids, city_ids)
                if parts is not None:
                    self.sub_judgments.set(city_id, parts[1], value, scope=parts[0])
                    continue
            _skip(f"criterionFieldValues[{city_id}{DISTANCE_SUFFIX}]", field_key)

    def _read_measurements(self, items: List[dict], errors: List[str]) -> None:
        for item in items:
            group_id = str(item.get("measurementGroupId", ""))
            rate = _loose_number(item.get("rate"))
            area = _loose_number(item.get("area"))
            if rate is None or area is None:
                errors.append(f"measurement {group_id!r} requires finite numeric rate and area")
                continue
            self.measurements.append(
                Measurement(
                    alternative_id=str(item.get("cityId", "")),
                    criterion_id=str(item.get("criterionId", "")),
                    measurement_group_id=group_id,
                    rate=rate,
                    area=area,
                )
            )


@dataclass
class CalculationResult:
    mode: str
    criterion_ids: List[str]
    criteria: PriorityAnalysis
    ranking: List[RankingEntry]
    normalized_values: Dict[str, Dict[str, float]] = field(default_factory=dict)
    option_scores: Dict[str, List[float]] = field(default_factory=dict)
    sub_criteria: Dict[str, PriorityAnalysis] = field(default_factory=dict)
    sub_weights: Dict[str, PriorityAnalysis] = field(default_factory=dict)
    table: List[TableRow] = field(default_factory=list)
    measurement_summary: Dict[str, Dict[str, MeasurementSummary]] = field(default_factory=dict)

    @property
    def criteria_weights(self) -> Dict[str, float]:
        return self.criteria.priorities.priorities

    def to_dict(self, digits: Optional[int] = REPORT_DIGITS) -> dict:
        consistency = self.criteria.consistency
        priorities = self.criteria.priorities
        weights = self.criteria_weights
        data = {
            "mode": self.mode,
            "criteriaWeights": weights,
            "ranking": [entry.to_dict() for entry in self.ranking],
            "matrixRaw": priorities.matrix.tolist(),
            "normalizedMatrix": priorities.normalized.tolist(),
            "columnSums": priorities.column_sums.tolist(),
            "lambdaMax": _round(consistency.lambda_max, digits),
            "consistencyIndex": _round(consistency.ci, digits),
            "consistencyRatio": _round(consistency.cr, digits),
            "randomIndex": consistency.ri,
            "weightedSums": list(consistency.weighted_sums),
            "isConsistent": consistency.is_consistent,
            "eigenvector": [weights.get(criterion_id, 0.0) for criterion_id in self.criterion_ids],
            "normalizedValues": {
                criterion_id: dict(values) for criterion_id, values in self.normalized_values.items()
            },
        }
        if self.mode == "hierarchical":
            data["subCriteriaPriorities"] = {
                sub_id: analysis.to_dict() for sub_id, analysis in self.sub_criteria.items()
            }
            data["subCriteriaWeights"] = {
                criterion_id: analysis.to_dict() for criterion_id, analysis in self.sub_weights.items()
            }
            data["table"] = [row.to_dict() for row in self.table]
        if self.measurement_summary:
            data["measurementSummary"] = {
                criterion_id: {city_id: summary.to_dict() for city_id, summary in rows.items()}
                for criterion_id, rows in self.measurement_summary.items()
            }
        return data


def _entities(items: Any, label: str, errors: List[str]) -> List[Tuple[str, str]]:
    if not isinstance(items, list) or not items:
        errors.append(f"at least one entry is required in {label}")
        return []
    entities: List[Tuple[str, str]] = []
    seen = set()
    for item in items:
        if not isinstance(item, dict) or not item.get("id"):
            errors.append(f"{label} entries require an id")
            continue
        item_id = str(item["id"])
        if item_id in seen:
            errors.append(f"duplicate id {item_id!r} in {label}")
            continue
        seen.add(item_id)
        entities.append((item_id, str(item.get("name", item_id))))
    return entities


def _mapping(data: dict, key: str, errors: List[str]) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        errors.append(f"{key} must be an object")
        return {}
    return value


def _records(data: dict, key: str, errors: List[str]) -> List[dict]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        errors.append(f"{key} must be a list")
        return []
    records: List[dict] = []
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            errors.append(f"{key}[{index}] must be an object")
            continue
        records.append(item)
    return records


def _strict_number(value: Any, label: str, errors: List[str]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        errors.append(f"{label} must be a number")
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number")
        return None
    if not math.isfinite(number):
        errors.append(f"{label} must be a finite number")
        return None
    return number


def _loose_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _skip(source: str, key: str) -> None:
    logger.debug("ignoring %s key %r: no matching ids", source, key)


def _round(value: float, digits: Optional[int]) -> float:
    if digits is None:
        return value
    return round(value, digits)
