from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

JudgmentKey = Tuple[Optional[str], str, str]
Judgment = Callable[[str, str], Optional[float]]


class JudgmentSet:
    """Sparse pairwise judgments keyed by (scope, a, b).

    ``scope`` is ``None`` for the criteria level, a sub-criterion id for
    alternative judgments and a criterion id for sub-criterion weights.
    Only one direction of a pair needs to be stored.
    """

    def __init__(self, items: Iterable[Tuple[JudgmentKey, float]] = ()) -> None:
        self._values: Dict[JudgmentKey, float] = {}
        for (scope, a, b), value in items:
            self.set(a, b, value, scope=scope)

    def __len__(self) -> int:
        return len(self._values)

    def set(self, a: str, b: str, value: float, scope: Optional[str] = None) -> None:
        self._values[(scope, a, b)] = float(value)

    def get(self, a: str, b: str, scope: Optional[str] = None) -> Optional[float]:
        value = self._values.get((scope, a, b))
        if value is None or value <= 0:
            return None
        return value

    def lookup(self, a: str, b: str, scope: Optional[str] = None) -> Optional[float]:
        value = self.get(a, b, scope)
        if value is not None:
            return value
        reverse = self.get(b, a, scope)
        if reverse is not None:
            return 1.0 / reverse
        return None

    def judge(self, scope: Optional[str] = None) -> Judgment:
        def judgment(a: str, b: str) -> Optional[float]:
            return self.get(a, b, scope)

        return judgment

    def has_scope(self, scope: Optional[str]) -> bool:
        return any(
            key[0] == scope and value > 0 for key, value in self._values.items()
        )

    def scoped(self, scope: Optional[str]) -> Dict[Tuple[str, str], float]:
        return {
            (a, b): value
            for (key_scope, a, b), value in self._values.items()
            if key_scope == scope
        }


def split_composite_key(key: str, *id_sets: Sequence[str]) -> Optional[List[str]]:
    """Split ``"a-b-c"`` into one id per id set.

    Ids may contain hyphens, so the split is driven by the known ids rather
    than by ``str.split``. Longer ids are tried first.
    """
    if not id_sets:
        return [] if key == "" else None
    head, rest = id_sets[0], id_sets[1:]
    for candidate in sorted(set(head), key=len, reverse=True):
        if not key.startswith(candidate):
            continue
        remainder = key[len(candidate):]
        if not rest:
            if remainder == "":
                return [candidate]
            continue
        if not remainder.startswith("-"):
            continue
        tail = split_composite_key(remainder[1:], *rest)
        if tail is not None:
            return [candidate] + tail
    return None
