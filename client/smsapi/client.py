"""
SmsApi: entry point of the client library

    api = SmsApi("key", "secret", "https://api.example.com")
    result = api.contacts.list_contacts(limit=10, status="SUBSCRIBED")
    if result.ok:
        print(result.data)
"""

from datetime import date
from typing import Dict, Optional

import requests

from .api_caller import ApiCaller
from .config import DEFAULT_TIMEOUT, SmsApiConfig
from .exceptions import SmsApiError
from .logging_config import get_logger
from .resources import Contacts, Messages, Shortlinks, Tags

logger = get_logger(__name__)


class SmsApi:
    """Client for the SMS API, exposing one attribute per resource"""

    def __init__(self, api_key: str, api_secret: str, base_url: str,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.config = SmsApiConfig(api_key, api_secret, base_url, timeout)
        self.caller = ApiCaller(self.config, session=session)
        self.contacts = Contacts(self.caller)
        self.messages = Messages(self.caller)
        self.tags = Tags(self.caller)
        self.shortlinks = Shortlinks(self.caller)
        logger.debug(f"SmsApi client created for {self.config.base_url}")

    @classmethod
    def from_config(cls, config: SmsApiConfig,
                    session: Optional[requests.Session] = None) -> "SmsApi":
        return cls(config.api_key, config.api_secret, config.base_url,
                   timeout=config.timeout, session=session)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None,
                 session: Optional[requests.Session] = None) -> "SmsApi":
        """Client built from API_KEY / API_SECRET / URL (optionally loaded from a .env file)"""
        return cls.from_config(SmsApiConfig.from_env(env_file), session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.caller.close()

    def test_connection(self) -> Dict:
        """
        Check that the API is reachable and accepts our credentials

        Returns:
            Dict: {"success": bool, "message": str, "data" or "error": ...}
        """
        try:
            response = self.contacts.list_contacts(limit=1)
        except SmsApiError as e:
            logger.warning(f"API connection test failed: {e}")
            return {
                "success": False,
                "message": "API connection failed",
                "error": str(e),
            }

        if not response.ok:
            return {
                "success": False,
                "message": "API connection failed",
                "error": response.error,
                "data": response.to_dict(),
            }

        return {
            "success": True,
            "message": "API connection successful",
            "data": response.to_dict(),
        }

    def get_stats(self) -> Dict:
        """
        One small request per resource: contacts, today's messages and tags

        Returns:
            Dict: {"success": bool, "data": {"contacts": ..., "messages": ..., "tags": ...}}
        """
        today = date.today()
        try:
            contacts = self.contacts.list_contacts(limit=1)
            messages = self.messages.list_messages(start_date=today, end_date=today, limit=1)
            tags = self.tags.list_tags(limit=1)
        except SmsApiError as e:
            logger.warning(f"Failed to get API statistics: {e}")
            return {
                "success": False,
                "message": "Failed to get API statistics",
                "error": str(e),
            }

        return {
            "success": contacts.ok and messages.ok and tags.ok,
            "data": {
                "contacts": contacts.to_dict(),
                "messages": messages.to_dict(),
                "tags": tags.to_dict(),
            },
        }
