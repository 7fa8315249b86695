class SeatAllocationError(Exception):
    """Base class for errors raised while computing a seat distribution."""


class InvalidInputError(SeatAllocationError, ValueError):
    """Vote or seat input that cannot be coerced into a valid table."""


class DeterminismViolation(SeatAllocationError):
    """A tie could not be resolved into a reproducible order."""
