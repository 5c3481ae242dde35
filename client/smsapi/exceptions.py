"""
Exceptions raised by the SMS API client.

Upstream rejections (non-2xx responses) are not exceptions; they come back as
an ApiResponse with ok=False. Only problems that stop a request from being
sent, or from getting any response at all, are raised.
"""

from typing import Optional


class SmsApiError(Exception):
    """Base class for all client errors"""


class ConfigurationError(SmsApiError):
    """Missing or invalid credentials / client settings"""


class ValidationError(SmsApiError):
    """A caller-supplied field is missing or malformed"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class TransportError(SmsApiError):
    """No response was received from the API (DNS, refused connection, timeout)"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
