from typing import Dict, Hashable, Iterable, Mapping, Optional

import pandas as pd

from election_seats.errors import InvalidInputError


def _require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InvalidInputError(f"Vote table is missing columns: {missing}")


def party_votes_from_frame(
    df: pd.DataFrame, party_col: str = "party_code", votes_col: str = "votes"
) -> Dict[str, float]:
    """
    Collapse a party table into a vote mapping.

    Rows of the same party are summed; parties keep the order of their
    first row.
    """
    _require_columns(df, [party_col, votes_col])
    votes = pd.to_numeric(df[votes_col], errors="coerce")
    if votes.isna().any():
        bad = df.loc[votes.isna(), [party_col, votes_col]].head(5)
        raise InvalidInputError(f"Non-numeric values found in {votes_col}:\n{bad}")

    totals = votes.groupby(df[party_col].astype(str), sort=False).sum()
    return {party: float(v) for party, v in totals.items()}


def district_votes_from_frame(
    df: pd.DataFrame,
    district_col: str = "district",
    party_col: str = "party_code",
    votes_col: str = "votes",
) -> Dict[str, Dict[str, float]]:
    """Turn long-format district rows (district, party, votes) into nested mappings."""
    _require_columns(df, [district_col, party_col, votes_col])
    result: Dict[str, Dict[str, float]] = {}
    for district, rows in df.groupby(df[district_col].astype(str), sort=False):
        result[district] = party_votes_from_frame(rows, party_col, votes_col)
    return result


def load_party_votes(path: str, **kwargs) -> Dict[str, float]:
    return party_votes_from_frame(pd.read_csv(path), **kwargs)


def load_district_votes(path: str, **kwargs) -> Dict[str, Dict[str, float]]:
    return district_votes_from_frame(pd.read_csv(path), **kwargs)


def seats_frame(
    seats: Mapping[Hashable, int],
    votes: Optional[Mapping[Hashable, float]] = None,
    direct_mandates: Optional[Mapping[Hashable, int]] = None,
) -> pd.DataFrame:
    """
    Tabulate a seat distribution.

    Returns:
        DataFrame with columns: party_code, votes, direct_mandates, seats,
        sorted by seats (descending)
    """
    votes = votes or {}
    direct_mandates = direct_mandates or {}
    df = pd.DataFrame(
        {
            "party_code": list(seats),
            "votes": [float(votes.get(p, 0.0)) for p in seats],
            "direct_mandates": [int(direct_mandates.get(p, 0)) for p in seats],
            "seats": [int(n) for n in seats.values()],
        },
        columns=["party_code", "votes", "direct_mandates", "seats"],
    )
    return df.sort_values("seats", ascending=False, kind="stable").reset_index(drop=True)
