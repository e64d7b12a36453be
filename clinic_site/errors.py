"""
Application Errors

Raised by the service layer and translated into response envelopes by the
route handlers.
"""


class ValidationError(Exception):
    """Client supplied missing or malformed data (HTTP 400)."""


class NotFoundError(Exception):
    """The requested row does not exist (HTTP 404)."""
