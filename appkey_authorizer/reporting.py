# appkey_authorizer/reporting.py
"""Turns a failed request into the error signal the Lambda runtime returns."""
import logging
import traceback

from .errors import AuthorizationFailed

logger = logging.getLogger(__name__)


def format_trace(cause) -> str:
    if cause is None:
        return ""
    return "".join(traceback.format_exception(type(cause), cause, cause.__traceback__)).rstrip()


def format_error(message: str, cause=None) -> str:
    return f"Error: {message} {format_trace(cause)}".rstrip()


def report(message: str, cause=None):
    """Signal failure to the invoking runtime.

    Raising out of the handler is how a Python Lambda reports an invocation
    error, so this never returns.
    """
    formatted = format_error(message, cause)
    logger.error("%s", formatted)
    raise AuthorizationFailed(formatted)


def report_error(error):
    """Report an :class:`AuthorizationError`, keeping its message and cause."""
    report(error.message, error.cause)
