"""Deterministic tie-break rules for ranking parties.

A tie-break is a key function mapping a party to a sortable value. When two
parties have the same score the one with the smaller key ranks first. Rules
are registered by name in ``TIE_BREAKS`` so callers can select them from
configuration.
"""
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional

from election_seats.errors import DeterminismViolation, InvalidInputError

TieBreak = Callable[[Hashable], object]


def by_party_id(party: Hashable) -> str:
    """Lexicographic order of the party identifier."""
    return str(party)


def input_order(parties: Iterable[Hashable]) -> TieBreak:
    """Order parties as they were supplied by the caller."""
    positions = {party: i for i, party in enumerate(parties)}

    def _position(party: Hashable) -> int:
        return positions[party]

    return _position


TIE_BREAKS: Dict[str, Callable[[List[Hashable]], TieBreak]] = {
    "party_id": lambda parties: by_party_id,
    "input_order": input_order,
}


def get_tie_break(name: str, parties: Iterable[Hashable]) -> TieBreak:
    try:
        factory = TIE_BREAKS[name]
    except KeyError:
        raise InvalidInputError(f"Unknown tie-break rule: {name}")
    return factory(list(parties))


def rank_parties(
    scores: Mapping[Hashable, float], tie_break: Optional[TieBreak] = None
) -> List[Hashable]:
    """
    Sort parties by descending score, resolving equal scores with ``tie_break``.

    Raises:
        DeterminismViolation: if two parties share both score and tie-break key
    """
    tie_break = tie_break or by_party_id
    keyed = [(-scores[party], tie_break(party), party) for party in scores]
    keyed.sort(key=lambda item: (item[0], item[1]))

    for (score_a, key_a, party_a), (score_b, key_b, party_b) in zip(keyed, keyed[1:]):
        if score_a == score_b and key_a == key_b:
            raise DeterminismViolation(
                f"Tie between {party_a!r} and {party_b!r} cannot be ordered"
            )
    return [party for _, _, party in keyed]
