class BikewatchError(Exception):
    """Base exception for traffic view failures."""


class InvalidTimeSelection(BikewatchError, ValueError):
    """Raised when a time-of-day selection is outside 0..1439 or unparsable."""


class DatasetError(BikewatchError):
    """Raised when a station or trip dataset cannot be loaded."""
