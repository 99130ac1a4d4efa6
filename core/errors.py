# core/errors.py


class OracleUnavailable(RuntimeError):
    """The external price source could not produce a usable quote."""


class CatalogUnavailable(RuntimeError):
    """The catalog file is missing, unreadable or not a list of records."""


class MalformedCatalogRecord(ValueError):
    """A single catalog record is missing a field or carries a bad value."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"record {index}: {reason}")
        self.index = index
        self.reason = reason


class InvalidFilter(ValueError):
    """A filter bound could not be parsed into a finite number."""
