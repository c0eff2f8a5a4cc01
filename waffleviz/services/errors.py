from __future__ import annotations


class WaffleVizError(RuntimeError):
    """Base error for dataset preparation and layout failures."""


class UnsupportedSourceError(WaffleVizError):
    """Raised when a dataset location has an extension other than json, tsv or csv."""

    def __init__(self, location: str, extension: str) -> None:
        super().__init__(f"Unsupported data source '{location}': extension '{extension}' is not one of json, tsv, csv.")
        self.location = location
        self.extension = extension


class LoadError(WaffleVizError):
    """Raised when a supported location cannot be fetched or parsed."""


class DateCoercionError(WaffleVizError):
    """Raised when a temporal column holds a value that does not parse as a date."""

    def __init__(self, column: str, value: object, time_format: str | None = None) -> None:
        detail = f" with format '{time_format}'" if time_format else ""
        super().__init__(f"Column '{column}' value {value!r} could not be parsed as a date{detail}.")
        self.column = column
        self.value = value
        self.time_format = time_format


class DegenerateLayoutError(WaffleVizError):
    """Raised when a waffle grid cannot allocate squares."""
