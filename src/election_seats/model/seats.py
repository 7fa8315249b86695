"""Public entry points for seat distribution.

Inputs are validated and parsed here before they reach the allocators, so
the allocators can assume clean numeric tables. Distribution methods are
registered by name in ``METHODS``; ``calculate_seats`` dispatches on that name.
"""
import math
from numbers import Real
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Union

from election_seats.errors import InvalidInputError
from election_seats.model.districts import DirectMandateResult, aggregate_district_winners
from election_seats.model.normalize import parse_direct_mandates, parse_vote_table
from election_seats.model.rock import allocate_rock
from election_seats.model.sainte_lague import allocate_sainte_lague
from election_seats.model.tiebreak import TieBreak, get_tie_break
from election_seats.settings import TIE_BREAK
from election_seats.utils.logging import get_logger

logger = get_logger("seats")

METHODS: Dict[str, Callable[..., Dict[Hashable, int]]] = {}


def register_method(name: str):
    def mark(func):
        METHODS[name] = func
        return func
    return mark


def _seat_count(value: Any, label: str) -> int:
    """Parse a seat count: a non-negative whole number, given as a number or numeric string."""
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{label} must be a whole number of seats, got {value!r}")
    if isinstance(value, str):
        try:
            seats = float(value.strip())
        except ValueError:
            raise InvalidInputError(f"{label} must be a whole number of seats, got {value!r}")
    elif isinstance(value, Real):
        seats = float(value)
    else:
        raise InvalidInputError(f"{label} must be a whole number of seats, got {value!r}")

    if not math.isfinite(seats) or not seats.is_integer():
        raise InvalidInputError(f"{label} must be a whole number of seats, got {value!r}")
    if seats < 0:
        raise InvalidInputError(f"{label} must not be negative, got {value!r}")
    return int(seats)


def _check_seats(total_seats: Any, independent_seats: Any):
    total = _seat_count(total_seats, "total_seats")
    independent = _seat_count(independent_seats, "independent_seats")
    if independent > total:
        raise InvalidInputError(
            f"{independent} independent seats exceed the house size of {total}"
        )
    return total, independent


@register_method("sainte-lague")
def sainte_lague(
    votes: Mapping[Hashable, Any],
    total_seats: int,
    direct_mandates: Optional[Mapping[Hashable, Any]] = None,
    independent_seats: int = 0,
) -> Dict[Hashable, int]:
    parsed = parse_vote_table(votes)
    total, independent = _check_seats(total_seats, independent_seats)
    return allocate_sainte_lague(
        parsed, total, parse_direct_mandates(direct_mandates), independent
    )


@register_method("rock")
def rock(
    votes: Mapping[Hashable, Any],
    total_seats: int,
    direct_mandates: Optional[Mapping[Hashable, Any]] = None,
    independent_seats: int = 0,
    tie_break: Union[str, TieBreak, None] = None,
) -> Dict[Hashable, int]:
    """
    Rock distribution.

    ``tie_break`` is either a registered rule name or a key function; it
    defaults to the TIE_BREAK setting.
    """
    parsed = parse_vote_table(votes)
    total, independent = _check_seats(total_seats, independent_seats)
    if tie_break is None or isinstance(tie_break, str):
        tie_break = get_tie_break(tie_break or TIE_BREAK, parsed)
    return allocate_rock(
        parsed, total, parse_direct_mandates(direct_mandates), independent, tie_break
    )


def calculate_district_winners(district_votes: Mapping[Hashable, Any]) -> DirectMandateResult:
    if not isinstance(district_votes, Mapping):
        raise InvalidInputError(
            f"District votes must be a mapping, got {type(district_votes).__name__}"
        )
    for district, party_votes in district_votes.items():
        if not isinstance(party_votes, Mapping):
            raise InvalidInputError(f"Votes for district {district!r} must be a mapping")
    return aggregate_district_winners(district_votes)


def calculate_seats(
    method: str,
    votes: Mapping[Hashable, Any],
    total_seats: int,
    direct_mandates: Optional[Mapping[Hashable, Any]] = None,
    independent_seats: int = 0,
    **options,
) -> Dict[Hashable, int]:
    """
    Distribute seats with the method registered under ``method``.

    Extra keyword options (such as ``tie_break`` for "rock") are passed on to
    the method. Unknown methods are logged and produce an empty result.
    """
    allocator = METHODS.get(method)
    if allocator is None:
        logger.warning(f"Unknown seat allocation method: {method}")
        return {}
    return allocator(votes, total_seats, direct_mandates, independent_seats, **options)
