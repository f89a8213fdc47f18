"""Base exception shared by every feedbin-cli failure."""


class FeedbinError(Exception):
    """Base class for errors that are reported to the user as a message."""
