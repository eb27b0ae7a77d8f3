"""Error types raised by the time engine."""


class TimeDateError(Exception):
    """Base class for user-visible time/date errors."""


class UnknownTimezone(TimeDateError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid timezone: {name}")


class ParseError(TimeDateError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid date format: {text}")


class InvalidOffset(TimeDateError):
    def __init__(self, hours: float):
        self.hours = hours
        super().__init__(f"Invalid offset hours: {hours}")


class CatalogLoadFailure(TimeDateError):
    """The timezone database is missing or unusable. Fatal at startup."""
