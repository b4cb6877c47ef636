class ReadFailure(Exception):
    """Base for every classified failure of a single sensor read."""

class IOFailure(ReadFailure):
    """Sensor file could not be read (unplugged, permission denied, bus error)."""

class NotReady(ReadFailure):
    """Conversion still in progress; try again on the next tick."""

class MalformedData(ReadFailure):
    """Sensor output does not follow the w1_slave format."""
    def __init__(self, message: str, line_count: int | None = None):
        super().__init__(message)
        self.line_count = line_count

class DiscoveryError(Exception):
    """No usable sensor, or more sensors than the host supports."""

class ConfigError(Exception):
    """Config file exists but could not be parsed or validated."""
