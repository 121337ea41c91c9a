"""Custom exceptions for multicomplete."""


class SettingsError(ValueError):
    """Raised when a completion setting is assigned an invalid value."""
