class ConfigError(ValueError):
    """Raised when a cursor configuration value is out of range or malformed."""
