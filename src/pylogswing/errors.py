class SwingLogError(RuntimeError):
    """Base error for pylogswing."""


class ConfigValidationError(ValueError):
    """Raised when logger configuration is invalid."""


class ThemeError(SwingLogError):
    """Raised when a theme has no usable colors for a level."""


class RecordFormatError(SwingLogError):
    """Raised when a record cannot be laid out (e.g. unrepresentable timestamp)."""


class LoggerAlreadyInitializedError(SwingLogError):
    """Raised when a process-wide logger is registered twice."""
