"""Errors raised by board accessors and placements."""


class OutOfRange(IndexError):
    """A row, column or box coordinate lies outside the board."""


class InvalidValue(ValueError):
    """A placement value lies outside [1, max_value]."""
