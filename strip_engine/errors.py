"""Exceptions raised by the strip chart engine."""


class StripChartError(Exception):
    """Base exception for the strip chart engine."""
    pass


class InvalidSampleError(StripChartError, ValueError):
    """Raised when a sample handed to a time series is malformed."""
    pass


class EmptySeriesError(StripChartError):
    """Raised when statistics are requested for a scope with no data."""
    pass


class InvalidIntervalError(StripChartError, ValueError):
    """Raised when a window interval has bad bounds."""
    pass


class ConfigError(StripChartError, ValueError):
    """Raised when a sink or attribute setting is not recognised."""
    pass
