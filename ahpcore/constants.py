from __future__ import annotations

from typing import Dict

RANDOM_INDEX: Dict[int, float] = {
    1: 0.0,
    2: 0.0,
    3: 0.58,
    4: 0.9,
    5: 1.12,
    6: 1.24,
    7: 1.32,
    8: 1.41,
    9: 1.45,
    10: 1.49,
}
DEFAULT_RANDOM_INDEX = 1.12
CONSISTENCY_THRESHOLD = 0.1

SAATY_MIN = 1.0 / 9.0
SAATY_MAX = 9.0

REPORT_DIGITS = 5

# criterionFieldValues conventions
FIELD_AHP_VALUE = "ahp-value"
FIELD_SUB_WEIGHT = "subw"
DISTANCE_SUFFIX = "-distance"
DISTANCE_PREFIX = "distance-"
DISTANCE_AHP_PREFIX = "ahp-"
