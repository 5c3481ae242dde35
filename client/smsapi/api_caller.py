"""
SMS API Caller Module

This module sends signed requests to the SMS API and normalizes every
response into an ApiResponse envelope.

- 2xx responses come back with ok=True
- non-2xx responses come back with ok=False and the parsed error body
- requests that get no response at all raise TransportError
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests

from .config import SmsApiConfig
from .exceptions import TransportError, ValidationError
from .logging_config import get_logger, log_request_event
from .signing import Signer, encode_params, serialize_body

logger = get_logger(__name__)

CLIENT_ORIGIN = "IM_SDK_PYTHON_V4"
CONTENT_TYPE = "application/json; charset=utf-8"
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass(frozen=True)
class ApiResponse:
    """Uniform result of one API call"""

    code: int
    status: str
    ok: bool
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiResponse":
        ok = 200 <= response.status_code < 300
        return cls(
            code=response.status_code,
            status=response.reason or "",
            ok=ok,
            data=_parse_body(response),
            headers=dict(response.headers),
            error=None if ok else f"Request failed with status code {response.status_code}",
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "code": self.code,
            "status": self.status,
            "ok": self.ok,
            "data": self.data,
            "headers": dict(self.headers),
        }
        if self.error is not None:
            result["error"] = self.error
        return result


def _parse_body(response: requests.Response) -> Any:
    """JSON body if there is one, raw text otherwise"""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiCaller:
    """Signs and sends requests for one set of credentials"""

    def __init__(self, config: SmsApiConfig, session: Optional[requests.Session] = None,
                 origin: str = CLIENT_ORIGIN):
        self.config = config
        self.origin = origin
        self._signer = Signer.from_config(config)
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP session if this caller created it"""
        if self._owns_session:
            self._session.close()

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        url = f"{self.config.base_url}{endpoint.lstrip('/')}"
        query = encode_params(params)
        if query:
            url = f"{url}?{query}"
        return url

    def request(self, method: str, endpoint: str, params: Optional[Mapping[str, Any]] = None,
                body: Any = None) -> ApiResponse:
        """
        Send one signed request

        Args:
            method: HTTP verb (GET, POST, PUT or DELETE)
            endpoint: Path relative to the base URL, e.g. "contacts"
            params: Optional query parameters
            body: Optional JSON-serializable body

        Returns:
            ApiResponse: Normalized response, ok=False for upstream rejections

        Raises:
            ValidationError: Unknown verb or empty endpoint
            TransportError: No response was received
        """
        method = (method or "").upper()
        if method not in HTTP_METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method or None}", field="method")
        if not endpoint:
            raise ValidationError("Endpoint is required", field="endpoint")

        auth = self._signer.sign(params=params, body=body)
        url = self.build_url(endpoint, params)
        payload = serialize_body(body)

        headers = {
            "Content-Type": CONTENT_TYPE,
            "Date": auth["Date"],
            "Authorization": auth["Authorization"],
            "X-IM-ORIGIN": self.origin,
        }

        logger.debug(f"{method} {url}")

        try:
            response = self._session.request(
                method,
                url,
                data=payload.encode("utf-8") if payload else None,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            log_request_event("request_failed", method=method, endpoint=endpoint,
                              success=False, error=str(e))
            raise TransportError(f"Request failed: {e}", cause=e) from e

        result = ApiResponse.from_response(response)
        if result.ok:
            log_request_event("request_ok", method=method, endpoint=endpoint, code=result.code)
        else:
            log_request_event("request_rejected", method=method, endpoint=endpoint,
                              code=result.code, success=False, error=result.error)
        return result

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, params: Optional[Mapping[str, Any]] = None,
             body: Any = None) -> ApiResponse:
        return self.request("POST", endpoint, params=params, body=body)

    def put(self, endpoint: str, params: Optional[Mapping[str, Any]] = None,
            body: Any = None) -> ApiResponse:
        return self.request("PUT", endpoint, params=params, body=body)

    def delete(self, endpoint: str, params: Optional[Mapping[str, Any]] = None,
               body: Any = None) -> ApiResponse:
        return self.request("DELETE", endpoint, params=params, body=body)
