"""Quota-based seat distribution ("Rock" method).

Seats are handed out by rounding down each party's ideal claim (its vote
share times the number of seats) and distributing the remaining seats by how
close each claim is to the next whole seat, ``claim / ceil(claim)``. Claims
that are already whole numbers rank last.

When a party holding seats won more districts than it is entitled to, the
house is enlarged to an even size large enough to cover the strongest
overhang and filled again among the parties that held seats. Otherwise a
party with an absolute majority of the votes but not of the seats receives
one extra seat.
"""
import math
from typing import Dict, Hashable, List, Mapping, Optional

from election_seats.model.normalize import normalize_votes
from election_seats.model.overhang import analyze_overhang, apply_direct_floor
from election_seats.model.tiebreak import TieBreak, rank_parties
from election_seats.utils.logging import get_logger

logger = get_logger("rock")


def ideal_claims(weights: Mapping[Hashable, float], seats_total: int) -> Dict[Hashable, float]:
    total_votes = sum(weights.values())
    if total_votes <= 0:
        return {party: 0.0 for party in weights}
    return {party: weight / total_votes * seats_total for party, weight in weights.items()}


def closeness_ratio(claim: float) -> float:
    """``claim / ceil(claim)`` for fractional claims, -1 for whole ones."""
    if claim - math.floor(claim) > 0:
        return claim / math.ceil(claim)
    return -1.0


def distribute_residual(
    floors: Mapping[Hashable, int], order: List[Hashable], residual: int
) -> Dict[Hashable, int]:
    """Hand out ``residual`` seats one at a time, cycling through ``order``."""
    seats = dict(floors)
    for i in range(max(0, residual)):
        seats[order[i % len(order)]] += 1
    return seats


def largest_remainder(
    weights: Mapping[Hashable, float], seats_total: int, tie_break: Optional[TieBreak] = None
) -> Dict[Hashable, int]:
    """Hare quota with the leftover seats going to the largest fractional parts."""
    if not weights:
        return {}
    claims = ideal_claims(weights, seats_total)
    floors = {party: math.floor(claim) for party, claim in claims.items()}
    rests = {party: claims[party] - floors[party] for party in claims}
    order = rank_parties(rests, tie_break)
    return distribute_residual(floors, order, seats_total - sum(floors.values()))


def _majority_bonus(
    seats: Mapping[Hashable, int], recipient: Hashable, ranking: List[Hashable]
) -> Dict[Hashable, int]:
    """
    Give ``recipient`` one more seat, taken from the lowest ranked party.

    If the lowest ranked party is the recipient itself or holds no seat,
    nobody gives up a seat and the house grows by one.
    """
    bonus = dict(seats)
    bonus[recipient] += 1
    donor = ranking[-1]
    if donor == recipient or bonus[donor] < 1:
        donor = None
    else:
        bonus[donor] -= 1
    logger.info(f"Majority bonus seat for {recipient!r}, taken from {donor!r}")
    return bonus


def allocate_rock(
    votes: Mapping[Hashable, float],
    total_seats: int,
    direct_mandates: Optional[Mapping[Hashable, int]] = None,
    independent_seats: int = 0,
    tie_break: Optional[TieBreak] = None,
) -> Dict[Hashable, int]:
    """
    Distribute seats with the Rock method.

    Args:
        votes: parsed vote weights per party
        total_seats: size of the house
        direct_mandates: district seats per party
        independent_seats: seats already held by non-party candidates
        tie_break: key function ordering parties with equal ranking values
            (defaults to the party identifier)

    Returns:
        Seats per party with votes, in the order of ``votes``; empty if no
        party has votes
    """
    direct_mandates = direct_mandates or {}
    remaining = total_seats - independent_seats
    eligible = normalize_votes(votes)
    if not eligible:
        return {}
    if remaining <= 0:
        return apply_direct_floor({party: 0 for party in eligible}, direct_mandates)

    claims = ideal_claims(eligible, remaining)
    floors = {party: math.floor(claim) for party, claim in claims.items()}
    ranking = rank_parties(
        {party: closeness_ratio(claim) for party, claim in claims.items()}, tie_break
    )
    seats = distribute_residual(floors, ranking, remaining - sum(floors.values()))
    logger.debug(f"Proportional allocation of {remaining} seats: {seats}")

    holding = [party for party in eligible if seats[party] >= 1]
    report = analyze_overhang(seats, direct_mandates, holding)
    if report.has_overhang:
        max_ratio = max(direct_mandates[p] / claims[p] for p in report.overhang_parties)
        new_total = max(math.floor(max_ratio * remaining), remaining + report.total_overhang)
        if new_total % 2:
            new_total += 1
        logger.info(
            f"Overhang of {report.total_overhang} seats for {report.overhang_parties}, "
            f"enlarging to {new_total} seats among {len(holding)} parties"
        )
        leveled = largest_remainder({p: eligible[p] for p in holding}, new_total, tie_break)
        widened = {party: leveled.get(party, 0) for party in eligible}
        return apply_direct_floor(widened, direct_mandates)

    total_votes = sum(eligible.values())
    for party, weight in eligible.items():
        # Only one party can hold more than half the votes
        if weight / total_votes > 0.5 and seats[party] <= remaining / 2:
            seats = _majority_bonus(seats, party, ranking)
            break

    return apply_direct_floor(seats, direct_mandates)
