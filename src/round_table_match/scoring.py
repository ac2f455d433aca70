"""
Preference values and seating scores.

Preference scale:
    want: +1
    neutral: 0
    dislike: -1
Any other relation falls back to the numeric ``strength`` of the record.

A seating is graded A to F on the mean combined score of its neighbour pairs,
where a pair (a, b) scores ``pref[a][b] + pref[b][a]``.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from .models import Person, Preference, PreferenceMatrix


# ----------------------------- preference values -----------------------------
PREFERENCE_VALUE_WANT = 1
PREFERENCE_VALUE_DISLIKE = -1

_RELATION_VALUE = {
    "want": PREFERENCE_VALUE_WANT,
    "neutral": 0,
    "dislike": PREFERENCE_VALUE_DISLIKE,
}


def relation_value(pref: Preference) -> int:
    return _RELATION_VALUE.get(str(pref.relation).strip().lower(), pref.strength)


def build_preference_matrix(people: List[Person], preferences: List[Preference]) -> List[List[float]]:
    """Square matrix indexed like ``people``. Later records overwrite earlier ones."""
    index = {p.id: i for i, p in enumerate(people)}
    n = len(people)
    matrix: List[List[float]] = [[0] * n for _ in range(n)]
    for p in preferences:
        if p.a not in index or p.b not in index:
            raise ValueError(f"Preference references unknown person: {p.a}, {p.b}")
        i, j = index[p.a], index[p.b]
        if i == j:
            continue
        matrix[i][j] = relation_value(p)
    return matrix


# ----------------------------- seating scores -----------------------------
def seating_stats(order: Sequence[int], pref: PreferenceMatrix) -> Dict[str, int | float]:
    """Total and mean neighbour-pair scores plus sign breakdown for a seating order."""
    n = len(order)
    if n < 2:
        pairs = []
    elif n == 2:
        pairs = [(order[0], order[1])]
    else:
        pairs = [(order[k], order[(k + 1) % n]) for k in range(n)]

    total = 0.0
    pos = neg = neu = 0
    for a, b in pairs:
        v = pref[a][b] + pref[b][a]
        total += v
        if v > 0:
            pos += 1
        elif v < 0:
            neg += 1
        else:
            neu += 1
    mean = total / len(pairs) if pairs else 0.0
    return {
        "total_score": total,
        "mean_score": mean,
        "pair_count": len(pairs),
        "pos_pairs": pos,
        "neg_pairs": neg,
        "neu_pairs": neu,
    }


def grade_seating(stats: Dict[str, int | float]) -> Dict[str, int | float | str]:
    """Assign A to F based on the mean neighbour score."""
    m = stats["mean_score"]
    if m >= 1.5:
        g = "A"
    elif m >= 1.0:
        g = "B"
    elif m >= 0.5:
        g = "C"
    elif m >= 0.0:
        g = "D"
    else:
        g = "F"
    out = dict(stats)
    out["grade"] = g
    return out
