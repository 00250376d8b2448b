import logging

from ahpcore.consistency import analyze_consistency, random_index
from ahpcore.core import ConsistencyMetrics, PriorityAnalysis, PriorityResult
from ahpcore.engine import calculate, calculate_record
from ahpcore.errors import ValidationError
from ahpcore.judgments import JudgmentSet
from ahpcore.matrix import build_comparison_matrix
from ahpcore.models import CalculationInput, CalculationResult, CriterionType
from ahpcore.pipeline import derive_priorities
from ahpcore.priority import compute_priorities

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CalculationInput",
    "CalculationResult",
    "ConsistencyMetrics",
    "CriterionType",
    "JudgmentSet",
    "PriorityAnalysis",
    "PriorityResult",
    "ValidationError",
    "analyze_consistency",
    "build_comparison_matrix",
    "calculate",
    "calculate_record",
    "compute_priorities",
    "derive_priorities",
    "random_index",
]
