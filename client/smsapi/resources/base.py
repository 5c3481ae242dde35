from typing import Any, Dict
from urllib.parse import quote

from ..api_caller import ApiCaller
from ..logging_config import get_logger


class Resource:
    """Common plumbing for the resource method tables"""

    def __init__(self, caller: ApiCaller):
        self._caller = caller
        self.logger = get_logger(f"smsapi.resources.{type(self).__name__.lower()}")

    @staticmethod
    def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
        """Drop unset (None) entries, keeping insertion order"""
        return {key: value for key, value in values.items() if value is not None}

    @staticmethod
    def _segment(value: Any) -> str:
        """Quote a value for use as one URL path segment"""
        return quote(str(value).strip(), safe="")
