class LineupPrepError(Exception):
    pass

class InputError(LineupPrepError):
    """The CSV or schedule JSON could not be read or has no usable content."""

class ConfigError(LineupPrepError):
    """A configuration value is missing, unknown or out of range."""

class TimezoneError(ConfigError):
    """The named timezone is not in the IANA database."""

class OutputError(LineupPrepError):
    """The generated JSON could not be written."""
