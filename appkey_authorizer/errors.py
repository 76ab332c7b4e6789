# appkey_authorizer/errors.py
"""Exception hierarchy for the authorizer."""


class AuthorizationError(Exception):
    """A terminal failure of one authorization request."""

    kind = "AuthorizationError"

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class MissingCredentials(AuthorizationError):
    kind = "MissingCredentials"


class EncodingError(AuthorizationError):
    kind = "EncodingError"


class DecryptError(AuthorizationError):
    kind = "DecryptError"


class ConfigurationError(Exception):
    """Raised at cold start when required settings are missing or malformed."""


class AuthorizationFailed(Exception):
    """The formatted error signal handed back to the Lambda runtime."""
