import math
import re
from numbers import Real
from typing import Any, Dict, Hashable, Mapping

from election_seats.errors import InvalidInputError
from election_seats.utils.logging import get_logger

logger = get_logger("normalize")

THOUSANDS_COMMA = re.compile(r"^\d{1,3},\d{3}$")


def parse_weight(value: Any, label: Hashable = "value") -> float:
    """
    Parse a single vote weight into a float.

    Accepts numbers and numeric strings. A single decimal comma ("27,5") is
    read as a decimal point, the way percentages appear in exported result
    tables. "1,000" could be either a decimal or a thousands separator and
    is rejected.

    Raises:
        InvalidInputError: for missing, non-numeric, non-finite or negative values
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"Votes for {label!r} must be numeric, got {value!r}")

    if isinstance(value, Real):
        weight = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if THOUSANDS_COMMA.match(text):
            raise InvalidInputError(
                f"Votes for {label!r} use an ambiguous comma separator: {value!r}"
            )
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        try:
            weight = float(text)
        except ValueError:
            raise InvalidInputError(f"Votes for {label!r} must be numeric, got {value!r}")
    else:
        raise InvalidInputError(f"Votes for {label!r} must be numeric, got {value!r}")

    if not math.isfinite(weight):
        raise InvalidInputError(f"Votes for {label!r} must be finite, got {value!r}")
    if weight < 0:
        raise InvalidInputError(f"Votes for {label!r} must not be negative, got {value!r}")
    return weight


def parse_vote_table(votes: Any) -> Dict[Hashable, float]:
    if not isinstance(votes, Mapping):
        raise InvalidInputError(f"Vote table must be a mapping, got {type(votes).__name__}")
    return {party: parse_weight(value, party) for party, value in votes.items()}


def parse_direct_mandates(direct_mandates: Any) -> Dict[Hashable, int]:
    """
    Parse a direct-mandate table into non-negative integer counts.

    Anything that is not a mapping is treated as an empty table. ``None``
    counts are read as zero.
    """
    if not isinstance(direct_mandates, Mapping):
        if direct_mandates is not None:
            logger.debug(
                f"Ignoring direct mandates of type {type(direct_mandates).__name__}"
            )
        return {}

    parsed = {}
    for party, value in direct_mandates.items():
        if value is None:
            parsed[party] = 0
            continue
        count = parse_weight(value, party)
        if not count.is_integer():
            raise InvalidInputError(
                f"Direct mandates for {party!r} must be a whole number, got {value!r}"
            )
        parsed[party] = int(count)
    return parsed


def normalize_votes(votes: Mapping[Hashable, float]) -> Dict[Hashable, float]:
    """Drop parties without votes, keeping the caller's party order."""
    return {party: float(weight) for party, weight in votes.items() if weight > 0}
