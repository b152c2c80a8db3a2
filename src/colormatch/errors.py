class ConfigurationError(ValueError):
    """Raised when a session is constructed with unusable input."""
