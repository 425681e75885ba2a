class ExporterError(Exception):
    """Base exception for the ephemeral storage exporter."""

    pass


class AlreadyRunningError(ExporterError):
    """Raised when the stats manager is started while already running."""

    pass


class FetchError(ExporterError):
    """Raised when the node stats summary cannot be fetched."""

    pass


class DecodeError(ExporterError):
    """Raised when a stats summary payload cannot be decoded."""

    pass


class ConfigurationError(ExporterError):
    """Raised when the exporter cannot be configured at startup."""

    pass
