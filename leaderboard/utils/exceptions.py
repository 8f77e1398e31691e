# leaderboard/utils/exceptions.py


class DataValidationError(Exception):
    """Raised when a history payload or snapshot has the wrong shape."""

    pass


class ConfigError(Exception):
    """Raised for missing or invalid configuration values."""

    pass
