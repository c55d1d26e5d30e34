"""
Exception types shared across the service.
"""


class OpenCalendarError(Exception):
    """Base class for errors raised by this service."""


class ConfigError(OpenCalendarError):
    """Required configuration is missing or malformed. Fatal at startup."""


class CredentialError(OpenCalendarError):
    """The OAuth token could not be loaded or obtained."""


class ProviderError(OpenCalendarError):
    """A Google Calendar call failed. The message is the provider's own."""
