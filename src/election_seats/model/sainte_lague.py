from typing import Dict, Hashable, Mapping, Optional

from election_seats.model.divisor import allocate_divisor
from election_seats.model.normalize import normalize_votes
from election_seats.model.overhang import analyze_overhang, apply_direct_floor
from election_seats.utils.logging import get_logger

logger = get_logger("sainte_lague")


def allocate_sainte_lague(
    votes: Mapping[Hashable, float],
    total_seats: int,
    direct_mandates: Optional[Mapping[Hashable, int]] = None,
    independent_seats: int = 0,
) -> Dict[Hashable, int]:
    """
    Sainte-Laguë distribution with overhang and leveling seats.

    The house is first filled proportionally. If some party won more
    districts than its proportional share, the house grows by the total
    overhang and is filled again, after which each party is raised to its
    direct mandates.

    Args:
        votes: parsed vote weights per party
        total_seats: size of the house
        direct_mandates: district seats per party
        independent_seats: seats already held by non-party candidates

    Returns:
        Seats per party with votes, in the order of ``votes``
    """
    remaining = max(0, total_seats - independent_seats)
    eligible = normalize_votes(votes)

    base = allocate_divisor(eligible, remaining)
    logger.debug(f"Base allocation of {remaining} seats: {base}")
    if not direct_mandates:
        return base

    report = analyze_overhang(base, direct_mandates)
    if not report.has_overhang:
        return apply_direct_floor(base, direct_mandates)

    # Vote shares and raw weights give the same divisor result
    new_total = remaining + report.total_overhang
    logger.info(
        f"Overhang of {report.total_overhang} seats for {report.overhang_parties}, "
        f"leveling to {new_total} seats"
    )
    adjusted = allocate_divisor(eligible, new_total)
    return apply_direct_floor(adjusted, direct_mandates)
