class ImpersonateError(Exception):
    """Base class for every failure that aborts an impersonation run."""


class ConfigError(ImpersonateError):
    """A required environment variable or argument is missing or invalid."""


class NetworkError(ImpersonateError):
    """The request could not be sent, timed out, or Auth0 answered with an error status."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ImpersonateError):
    """The token endpoint returned a body that is not the expected JSON."""
