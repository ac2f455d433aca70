"""CSV loading utilities."""
from __future__ import annotations

import math
from pathlib import Path
from typing import IO, Any, List, Optional, Tuple

import pandas as pd

from .errors import InvalidPreferenceMatrixError
from .models import Person, Preference


def _text(value: object, default: str = "") -> str:
    """``str(value)`` with pandas' NaN treated as missing."""
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return str(value).strip()


def _int(value: object, default: int = 0) -> int:
    text = _text(value)
    return int(float(text)) if text else default


def load_people(path: Path | str | IO[Any]) -> List[Person]:
    """Load people from ``people.csv`` (columns ``id,name``).

    Ids must be unique.
    """
    df = pd.read_csv(path, dtype={"id": str})
    people: List[Person] = []
    for _, row in df.iterrows():
        people.append(Person(id=_text(row["id"]), name=_text(row["name"])))

    seen = set()
    for p in people:
        if p.id in seen:
            raise ValueError(f"Duplicate person id: {p.id}")
        seen.add(p.id)
    return people


def load_preferences(path: Path | str | IO[Any], person_ids: Optional[set[str]] = None) -> List[Preference]:
    """Load directional preferences.

    If ``person_ids`` is provided it validates that both endpoints exist.
    """
    df = pd.read_csv(path, dtype={"guest1_id": str, "guest2_id": str})
    preferences: List[Preference] = []
    for _, row in df.iterrows():
        a = _text(row["guest1_id"])
        b = _text(row["guest2_id"])
        if person_ids is not None and (a not in person_ids or b not in person_ids):
            raise ValueError(f"Preference references unknown person: {a}, {b}")
        preferences.append(
            Preference(
                a=a,
                b=b,
                relation=_text(row.get("relationship")),
                strength=_int(row.get("strength")),
                notes=_text(row.get("notes")),
            )
        )
    return preferences


def load_matrix(path: Path | str | IO[Any]) -> Tuple[List[str], List[List[float]]]:
    """Load a square preference matrix whose header row holds the names.

    Blank cells on the diagonal are allowed; blank cells elsewhere are
    rejected when the matrix is validated.
    """
    df = pd.read_csv(path)
    names = [str(c).strip() for c in df.columns]
    if df.shape[0] != df.shape[1]:
        raise InvalidPreferenceMatrixError(
            f"Preference matrix must be square, got {df.shape[0]} rows and {df.shape[1]} columns."
        )
    matrix: List[List[float]] = []
    for i, row in enumerate(df.itertuples(index=False)):
        values = []
        for j, value in enumerate(row):
            if i == j and (value is None or (isinstance(value, float) and math.isnan(value))):
                value = 0.0
            values.append(value if isinstance(value, str) else float(value))
        matrix.append(values)
    return names, matrix


def load_all(people_path: Path | str, preferences_path: Path | str):
    """Convenience wrapper returning people and preferences."""
    people = load_people(people_path)
    person_ids = {p.id for p in people}
    preferences = load_preferences(preferences_path, person_ids)
    return people, preferences
