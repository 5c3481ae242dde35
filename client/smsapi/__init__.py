"""
SMS API Client

A Python client library for the SMS API (contacts, tags, messages and
shortlinks) with HMAC-SHA1 request signing.
"""

import logging

from .api_caller import ApiCaller, ApiResponse
from .client import SmsApi
from .config import SmsApiConfig
from .exceptions import ConfigurationError, SmsApiError, TransportError, ValidationError
from .logging_config import setup_logging
from .resources import BulkSendResult, RecipientOutcome
from .signing import Signer

__all__ = [
    'SmsApi',
    'SmsApiConfig',
    'ApiCaller',
    'ApiResponse',
    'BulkSendResult',
    'RecipientOutcome',
    'Signer',
    'SmsApiError',
    'ConfigurationError',
    'ValidationError',
    'TransportError',
    'setup_logging',
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
