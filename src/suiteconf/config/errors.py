"""Configuration errors."""


class ConfigurationError(Exception):
    """Raised when project, suite, or param configuration can't be resolved."""
