from .errors import BikewatchError, DatasetError, InvalidTimeSelection

__all__ = [
    "BikewatchError",
    "DatasetError",
    "InvalidTimeSelection",
]
