from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Mapping, Optional


@dataclass(frozen=True)
class OverhangReport:
    """Direct mandates a proportional allocation does not cover."""
    overhang: Dict[Hashable, int] = field(default_factory=dict)

    @property
    def has_overhang(self) -> bool:
        return any(seats > 0 for seats in self.overhang.values())

    @property
    def total_overhang(self) -> int:
        return sum(self.overhang.values())

    @property
    def overhang_parties(self):
        return [party for party, seats in self.overhang.items() if seats > 0]


def analyze_overhang(
    allocation: Mapping[Hashable, int],
    direct_mandates: Mapping[Hashable, int],
    parties: Optional[Iterable[Hashable]] = None,
) -> OverhangReport:
    """
    Compare direct mandates against a proportional allocation.

    Args:
        allocation: proportional seats per party
        direct_mandates: district seats per party, missing parties count 0
        parties: parties to check (defaults to every party in ``allocation``)
    """
    parties = allocation.keys() if parties is None else parties
    return OverhangReport(
        {
            party: max(0, direct_mandates.get(party, 0) - allocation.get(party, 0))
            for party in parties
        }
    )


def apply_direct_floor(
    allocation: Mapping[Hashable, int], direct_mandates: Mapping[Hashable, int]
) -> Dict[Hashable, int]:
    """Raise every allocated party to at least its direct mandates."""
    return {
        party: max(seats, direct_mandates.get(party, 0))
        for party, seats in allocation.items()
    }
