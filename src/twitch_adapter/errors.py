"""
Error taxonomy for the Twitch API adapter
"""

from typing import Optional


class TwitchError(Exception):
    """Base class for all errors raised by the adapter"""
    pass


class InvalidArgumentError(TwitchError, ValueError):
    """Raised when a required argument is missing or empty"""
    pass


class ResponseError(TwitchError):
    """
    Raised when a request to the Twitch API produced an unusable response

    Carries the request URL, the HTTP status and the raw response body so
    callers can decide how to handle the failure.
    """

    def __init__(self, message: str, url: str, status: Optional[int], body: str):
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class FormatError(ResponseError):
    """Raised when the response body is not valid JSON"""
    pass


class ClientError(ResponseError):
    """Raised for HTTP 4xx responses"""
    pass


class ServerError(ResponseError):
    """Raised for HTTP 5xx responses"""
    pass
