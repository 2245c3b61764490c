class ReportError(Exception):
    """Base class for errors raised while producing the daily report."""


class ConfigurationError(ReportError):
    """A configuration value failed validation."""


class DatabaseConnectionError(ReportError):
    """The database could not be reached at startup."""
