"""Command line seat calculator.

Reads party votes (and optionally district results) from CSV files and
prints the resulting seat distribution.
"""
import argparse
import sys
from typing import Dict, List, Optional, Sequence

from election_seats.data_adapters.tables import load_district_votes, load_party_votes, seats_frame
from election_seats.errors import SeatAllocationError
from election_seats.model.normalize import parse_direct_mandates
from election_seats.model.seats import METHODS, calculate_district_winners, calculate_seats
from election_seats.settings import default_preset, load_parliament_config
from election_seats.utils.logging import get_logger


def _parse_direct(items: List[str], parser: argparse.ArgumentParser) -> Dict[str, str]:
    direct = {}
    for item in items:
        party, sep, count = item.partition("=")
        if not sep or not party:
            parser.error(f"--direct expects PARTY=N, got {item!r}")
        direct[party] = count
    return direct


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="election-seats",
        description="Distribute parliamentary seats from party votes and district winners.",
    )
    parser.add_argument("--votes", required=True, help="CSV with party_code,votes columns")
    parser.add_argument(
        "--districts",
        help="CSV with district,party_code,votes rows; district winners become direct mandates",
    )
    parser.add_argument(
        "--direct",
        nargs="*",
        default=[],
        metavar="PARTY=N",
        help="Direct mandates per party (added on top of --districts winners)",
    )
    parser.add_argument("--method", help=f"Distribution method ({', '.join(METHODS)})")
    parser.add_argument("--seats", type=int, help="Total number of seats")
    parser.add_argument("--independent", type=int, help="Seats won by independent candidates")
    parser.add_argument("--config", help="YAML parliament preset")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    direct_args = _parse_direct(args.direct, parser)
    logger = get_logger("cli")

    try:
        preset = load_parliament_config(args.config) if args.config else default_preset()
        method = args.method or preset["method"]
        total_seats = args.seats if args.seats is not None else preset["total_seats"]
        independent = (
            args.independent if args.independent is not None else preset["independent_seats"]
        )

        votes = load_party_votes(args.votes)
        direct: Dict[str, int] = {}
        if args.districts:
            winners = calculate_district_winners(load_district_votes(args.districts))
            logger.info(f"{len(winners.districts)} districts decided: {winners.counts}")
            direct.update(winners.counts)
        for party, count in parse_direct_mandates(direct_args).items():
            direct[party] = direct.get(party, 0) + count

        options = {"tie_break": preset["tie_break"]} if method == "rock" else {}
        seats = calculate_seats(method, votes, total_seats, direct, independent, **options)
    except SeatAllocationError as e:
        logger.error(f"Seat calculation failed: {e}")
        return 2
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 2

    if not seats:
        logger.error(f"No seats distributed with method {method!r}")
        return 1

    print(seats_frame(seats, votes, direct).to_string(index=False))
    print(f"Total seats: {sum(seats.values())}")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
