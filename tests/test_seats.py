import logging
import math

import pytest

from election_seats.errors import InvalidInputError
from election_seats.model import seats as seats_module
from election_seats.model.normalize import (
    normalize_votes,
    parse_direct_mandates,
    parse_vote_table,
    parse_weight,
)
from election_seats.model.seats import (
    METHODS,
    calculate_district_winners,
    calculate_seats,
    register_method,
    rock,
    sainte_lague,
)

VOTES = {"A": 50, "B": 30, "C": 20}


class TestInputParsing:
    """Test explicit parsing of caller-supplied tables."""

    @pytest.mark.parametrize(
        "value, expected",
        [(12, 12.0), (3.5, 3.5), ("42", 42.0), (" 7.25 ", 7.25), ("27,5", 27.5), (0, 0.0)],
    )
    def test_parse_weight_accepts_numbers(self, value, expected):
        """Numbers and numeric strings are read as floats."""
        assert parse_weight(value, "A") == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, -1, "-3", math.nan, math.inf, [1]])
    def test_parse_weight_rejects_invalid(self, value):
        """Non-numeric, non-finite and negative values are rejected."""
        with pytest.raises(InvalidInputError):
            parse_weight(value, "A")

    @pytest.mark.parametrize("value", ["1,000", "12,345", " 999,999 "])
    def test_parse_weight_rejects_thousands_comma(self, value):
        """A comma followed by exactly three digits is ambiguous and rejected."""
        with pytest.raises(InvalidInputError, match="ambiguous"):
            parse_weight(value, "A")

    def test_parse_vote_table_requires_mapping(self):
        """A vote table must be a mapping."""
        with pytest.raises(InvalidInputError):
            parse_vote_table([("A", 1)])

    @pytest.mark.parametrize("value", [None, "oops", [1, 2], 7])
    def test_direct_mandates_non_mapping_is_empty(self, value):
        """Direct mandates that are not a mapping are treated as none."""
        assert parse_direct_mandates(value) == {}

    def test_direct_mandates_parsing(self):
        """Counts are parsed to integers, missing counts read as zero."""
        assert parse_direct_mandates({"A": "3", "B": 2.0, "C": None}) == {"A": 3, "B": 2, "C": 0}

    def test_direct_mandates_must_be_whole(self):
        """Fractional direct mandates are rejected."""
        with pytest.raises(InvalidInputError):
            parse_direct_mandates({"A": 1.5})

    def test_normalize_drops_zero_votes(self):
        """Parties without votes are removed, order kept."""
        assert list(normalize_votes({"C": 3, "B": 0, "A": 1})) == ["C", "A"]


class TestSainteLagueBoundary:
    """Test the public Sainte-Laguë entry point."""

    def test_string_votes(self):
        """Numeric strings are accepted at the boundary."""
        assert sainte_lague({"A": "50", "B": "30", "C": "20"}, 7) == {"A": 4, "B": 2, "C": 1}

    def test_seat_sum_without_direct_mandates(self):
        """All seats are distributed when there are no districts."""
        for seats in range(0, 25):
            assert sum(sainte_lague(VOTES, seats).values()) == seats

    def test_invalid_votes(self):
        """Non-numeric votes are a validation error."""
        with pytest.raises(InvalidInputError):
            sainte_lague({"A": "many"}, 5)

    def test_negative_votes(self):
        """Negative votes are a validation error."""
        with pytest.raises(InvalidInputError):
            sainte_lague({"A": -5, "B": 10}, 5)

    def test_independent_seats_exceeding_house(self):
        """A negative remaining pool is rejected explicitly."""
        with pytest.raises(InvalidInputError):
            sainte_lague(VOTES, 3, independent_seats=4)

    @pytest.mark.parametrize("seats", [-1, 10.5, "ten"])
    def test_invalid_seat_counts(self, seats):
        """House size must be a non-negative whole number."""
        with pytest.raises(InvalidInputError):
            sainte_lague(VOTES, seats)

    @pytest.mark.parametrize("label, kwargs", [
        ("total_seats", {"total_seats": "ten"}),
        ("total_seats", {"total_seats": -1}),
        ("independent_seats", {"total_seats": 10, "independent_seats": 2.5}),
    ])
    def test_seat_count_errors_name_the_seat_argument(self, label, kwargs):
        """Seat count errors talk about seats, not votes."""
        with pytest.raises(InvalidInputError, match=label) as excinfo:
            sainte_lague(VOTES, **kwargs)

        assert "Votes for" not in str(excinfo.value)

    def test_thousands_comma_votes_rejected(self):
        """A thousands separator is not silently read as a decimal comma."""
        with pytest.raises(InvalidInputError):
            sainte_lague({"A": "1,000", "B": "900"}, 10)

    def test_direct_mandates_garbage_ignored(self):
        """A non-mapping direct-mandate argument behaves like none."""
        assert sainte_lague(VOTES, 7, "not a table") == {"A": 4, "B": 2, "C": 1}


class TestRockBoundary:
    """Test the public Rock entry point."""

    def test_empty_votes(self):
        """No parties give an empty result."""
        assert rock({}, 10) == {}

    def test_tie_break_by_name(self):
        """Tie-break rules can be chosen by name."""
        votes = {"B": 50, "A": 50}

        assert rock(votes, 3) == {"B": 1, "A": 2}
        assert rock(votes, 3, tie_break="input_order") == {"B": 2, "A": 1}

    def test_unknown_tie_break(self):
        """Unknown tie-break names are rejected."""
        with pytest.raises(InvalidInputError):
            rock(VOTES, 10, tie_break="coin_flip")

    def test_float_seat_count(self):
        """Whole-number floats are accepted as seat counts."""
        assert rock(VOTES, 10.0) == {"A": 5, "B": 3, "C": 2}


class TestCalculateSeats:
    """Test dispatch by method name."""

    def test_dispatch_sainte_lague(self):
        """The sainte-lague name selects Sainte-Laguë."""
        assert calculate_seats("sainte-lague", VOTES, 7) == sainte_lague(VOTES, 7)

    def test_dispatch_rock(self):
        """The rock name selects the Rock method."""
        votes = {"A": 45, "B": 35, "C": 20}

        assert calculate_seats("rock", votes, 7, {"C": 1}) == rock(votes, 7, {"C": 1})

    def test_options_passed_through(self):
        """Method-specific options reach the allocator."""
        votes = {"B": 50, "A": 50}

        assert calculate_seats("rock", votes, 3, tie_break="input_order") == {"B": 2, "A": 1}

    def test_unknown_method(self, caplog):
        """Unknown methods log a warning and return nothing."""
        with caplog.at_level(logging.WARNING):
            result = calculate_seats("unknown", VOTES, 7)

        assert result == {}
        assert "Unknown seat allocation method: unknown" in caplog.text

    def test_register_method(self, monkeypatch):
        """New strategies can be registered by name."""
        monkeypatch.setattr(seats_module, "METHODS", dict(METHODS))

        @register_method("everything-to-first")
        def everything_to_first(votes, total_seats, direct_mandates=None, independent_seats=0):
            first = next(iter(votes))
            return {party: total_seats if party == first else 0 for party in votes}

        assert calculate_seats("everything-to-first", VOTES, 5) == {"A": 5, "B": 0, "C": 0}
        assert "everything-to-first" not in METHODS

    @pytest.mark.parametrize("method", ["sainte-lague", "rock"])
    def test_floor_guarantee(self, method):
        """Both methods keep every party at or above its district wins."""
        votes = {"A": 34.1, "B": 29.8, "C": 17.2, "D": 10.5, "E": 8.4}
        for direct in ({"A": 12}, {"B": 3, "D": 6}, {"E": 2}, {"A": 1, "B": 1, "C": 1}):
            result = calculate_seats(method, votes, 30, direct)
            for party, count in direct.items():
                assert result[party] >= count


class TestCalculateDistrictWinners:
    """Test the public district aggregation entry point."""

    def test_winners(self):
        """District winners become direct mandates."""
        result = calculate_district_winners({1: {"A": 100, "B": 50}, 2: {"A": 30, "B": 80}})

        assert result.counts == {"A": 1, "B": 1}
        assert result.districts == {1: "A", 2: "B"}

    def test_feeds_allocator(self):
        """Aggregated counts plug straight into an allocator."""
        districts = {i: {"C": 10, "A": 1} for i in range(3)}

        direct = calculate_district_winners(districts).counts
        result = sainte_lague(VOTES, 7, direct)

        assert result == {"A": 4, "B": 3, "C": 3}

    @pytest.mark.parametrize("value", [None, [1], {1: [("A", 3)]}])
    def test_invalid_tables(self, value):
        """Malformed district tables are rejected."""
        with pytest.raises(InvalidInputError):
            calculate_district_winners(value)
