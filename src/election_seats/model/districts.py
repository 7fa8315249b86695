from dataclasses import dataclass, field
from typing import Dict, Hashable, Mapping

from election_seats.model.normalize import parse_weight
from election_seats.utils.logging import get_logger

logger = get_logger("districts")


@dataclass(frozen=True)
class DirectMandateResult:
    """District winners and the direct mandates they add up to per party."""
    counts: Dict[Hashable, int] = field(default_factory=dict)
    districts: Dict[Hashable, Hashable] = field(default_factory=dict)


def aggregate_district_winners(
    district_votes: Mapping[Hashable, Mapping[Hashable, object]]
) -> DirectMandateResult:
    """
    Find the winner of every single-member district.

    The party with strictly the most votes wins; on equal votes the party
    listed first in the district wins. Districts where no party has a
    positive vote count have no winner.
    """
    counts: Dict[Hashable, int] = {}
    districts: Dict[Hashable, Hashable] = {}

    for district, party_votes in district_votes.items():
        max_votes = 0.0
        winner = None
        for party, value in party_votes.items():
            votes = 0.0 if value is None else parse_weight(value, party)
            if votes > max_votes:
                max_votes = votes
                winner = party

        if winner is None:
            logger.debug(f"District {district!r} has no votes, no winner recorded")
            continue
        counts[winner] = counts.get(winner, 0) + 1
        districts[district] = winner

    return DirectMandateResult(counts=counts, districts=districts)
