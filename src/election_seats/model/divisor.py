from typing import Callable, Dict, Hashable, Mapping

import numpy as np


def sainte_lague_divisor(seats: np.ndarray) -> np.ndarray:
    # 1, 3, 5, ...
    return 2 * seats + 1


def allocate_divisor(
    weights: Mapping[Hashable, float],
    seats_total: int,
    divisor: Callable[[np.ndarray], np.ndarray] = sainte_lague_divisor,
) -> Dict[Hashable, int]:
    """
    Highest-quotient allocation of ``seats_total`` seats.

    Each round the party with the strictly greatest ``weight / divisor(seats)``
    gets the next seat. Equal quotients go to the party listed first in
    ``weights``: ``np.argmax`` returns the first maximal index. A round in which
    no quotient is positive assigns nothing.

    Args:
        weights: eligible parties and their vote weights, in canonical order
        seats_total: number of seats to hand out (non-positive means none)
        divisor: divisor sequence applied to the running seat counts

    Returns:
        Mapping of every eligible party to its seat count
    """
    parties = list(weights)
    if not parties:
        return {}

    v = np.array([weights[p] for p in parties], dtype=float)
    counts = np.zeros(len(parties), dtype=int)
    for _ in range(max(0, int(seats_total))):
        quotients = v / divisor(counts)
        best = int(np.argmax(quotients))
        if quotients[best] <= 0:
            break
        counts[best] += 1
    return {p: int(c) for p, c in zip(parties, counts)}
