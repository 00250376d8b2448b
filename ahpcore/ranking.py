from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple

from ahpcore.models import Alternative, RankingEntry, TableCell, TableRow


def format_score(score: float) -> str:
    return f"{score * 100:.2f}%"


def compute_scores(
    weights: Sequence[float],
    option_scores: Mapping[str, Sequence[float]],
) -> List[Tuple[str, float]]:
    if not option_scores:
        return []

    results = [
        (option, sum(w * s for w, s in zip(weights, scores)))
        for option, scores in option_scores.items()
    ]
    results.sort(key=lambda item: item[1], reverse=True)
    return results


def rank_alternatives(
    alternatives: Sequence[Alternative],
    weights: Sequence[float],
    option_scores: Mapping[str, Sequence[float]],
) -> List[RankingEntry]:
    names = {alternative.id: alternative.name for alternative in alternatives}
    ordered = {alternative.id: option_scores.get(alternative.id, []) for alternative in alternatives}
    return [
        RankingEntry(
            id=option,
            name=names[option],
            score=score * 100,
            formatted_score=format_score(score),
        )
        for option, score in compute_scores(weights, ordered)
    ]


def build_table(
    ranking: Sequence[RankingEntry],
    criterion_ids: Sequence[str],
    weights: Sequence[float],
    option_scores: Mapping[str, Sequence[float]],
) -> List[TableRow]:
    rows: List[TableRow] = []
    for entry in ranking:
        scores = option_scores.get(entry.id, [])
        values: Dict[str, TableCell] = {}
        for criterion_id, weight, raw in zip(criterion_ids, weights, scores):
            values[criterion_id] = TableCell(raw=raw, weighted=raw * weight)
        total = sum(cell.weighted for cell in values.values())
        rows.append(
            TableRow(
                id=entry.id,
                name=entry.name,
                values=values,
                score=total,
                formatted_score=format_score(total),
            )
        )
    return rows
