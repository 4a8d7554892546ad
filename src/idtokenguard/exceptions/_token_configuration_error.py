class TokenConfigurationError(Exception):
    """Raised when validator settings or token requirements are invalid."""
