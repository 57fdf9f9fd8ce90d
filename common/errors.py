"""Error taxonomy for the analytics commands.

Everything fatal derives from AnalyticsError so the CLI can report it
and exit non-zero in one place.
"""


class AnalyticsError(Exception):
    """Base class for all analytics errors."""


class ConfigError(AnalyticsError):
    """Required configuration (repo owner/name, token) is missing."""


class InvalidDateFormat(AnalyticsError):
    """A date token is neither a relative marker nor YYYY-MM-DD[THH:MM:SSZ]."""

    def __init__(self, token):
        self.token = token
        super().__init__(f"Invalid date format for {token!r}")


class InvalidDateRange(AnalyticsError):
    """The end of a range lies before its start."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: {end} is before {start}")


class RawDataMissing(AnalyticsError):
    """Raw snapshot is absent and fetching was not allowed or wrote nothing."""

    def __init__(self, day: str, kind: str, hint: str = ""):
        self.day = day
        self.kind = kind
        message = f"Raw {kind} data for {day} is missing"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class HeaderMismatch(AnalyticsError):
    """Two CSV files being merged have different header lines."""

    def __init__(self, path, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Header of {path} does not match: expected {expected!r}, got {actual!r}"
        )


class EmptySourceList(AnalyticsError):
    """merge() was called without any source file."""

    def __init__(self):
        super().__init__("Cannot merge: no source files given")


class UnknownConclusion(AnalyticsError):
    """A run or job carries a conclusion outside the known set."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown conclusion: {value!r}")
