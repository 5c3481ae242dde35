"""
Request signing

Every API request carries two headers computed here:

    Date:           RFC 7231 HTTP-date, generated once per request
    Authorization:  IM <api_key>:<base64(HMAC-SHA1(api_secret, canonical))>

The canonical string is api_key + Date + sorted query string + JSON body.
The query string and body produced here are also what goes on the wire, so
the signature always covers the exact bytes sent.
"""

import base64
import json
from datetime import datetime
from email.utils import formatdate
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from cryptography.hazmat.primitives import hashes, hmac

from .exceptions import ConfigurationError

AUTH_SCHEME = "IM"

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~"
_SAFE_CHARS = "!*'()"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(v) for v in value)
    return str(value)


def encode_value(value: Any) -> str:
    """Percent-encode a query value with spaces rendered as '+'"""
    return quote(_format_value(value), safe=_SAFE_CHARS).replace("%20", "+")


def encode_params(params: Optional[Mapping[str, Any]]) -> str:
    """
    Render query parameters in canonical form

    Keys are sorted, None values dropped, and pairs joined with '&'. The
    upstream rejects signatures built from unsorted parameters.
    """
    if not params:
        return ""
    return "&".join(
        f"{key}={encode_value(params[key])}"
        for key in sorted(params)
        if params[key] is not None
    )


def serialize_body(body: Any) -> str:
    """Compact JSON serialization of a request body ("" when there is none)"""
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def http_date(now: Union[datetime, float, None] = None) -> str:
    """Format a timestamp as an HTTP-date, e.g. 'Thu, 16 Oct 2026 12:00:00 GMT'"""
    if isinstance(now, datetime):
        now = now.timestamp()
    return formatdate(now, usegmt=True)


class Signer:
    """Computes the Date and Authorization headers for one set of credentials"""

    def __init__(self, api_key: str, api_secret: str):
        if not api_key or not api_secret:
            raise ConfigurationError("API key and API secret are required")
        self.api_key = api_key
        self._api_secret = api_secret.encode("utf-8")

    @classmethod
    def from_config(cls, config) -> "Signer":
        return cls(config.api_key, config.api_secret)

    def canonical_string(self, date: str, params: Optional[Mapping[str, Any]] = None,
                         body: Any = None) -> str:
        return f"{self.api_key}{date}{encode_params(params)}{serialize_body(body)}"

    def signature(self, canonical: str) -> str:
        """Base64-encoded HMAC-SHA1 of the canonical string"""
        mac = hmac.HMAC(self._api_secret, hashes.SHA1())
        mac.update(canonical.encode("utf-8"))
        return base64.b64encode(mac.finalize()).decode("ascii")

    def sign(self, params: Optional[Mapping[str, Any]] = None, body: Any = None,
             date: Optional[str] = None) -> Dict[str, str]:
        """
        Build the authentication headers for a request

        Args:
            params: Query parameters, in any order
            body: JSON-serializable request body
            date: HTTP-date to sign; the current time when omitted

        Returns:
            Dict: {"Date": ..., "Authorization": ...}
        """
        if date is None:
            date = http_date()

        canonical = self.canonical_string(date, params, body)
        return {
            "Date": date,
            "Authorization": f"{AUTH_SCHEME} {self.api_key}:{self.signature(canonical)}",
        }
