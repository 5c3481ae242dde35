"""
Shortlinks resource

URL shortening, independent of contacts and messages.
"""

from typing import Any, Optional

from ..api_caller import ApiResponse
from ..exceptions import ValidationError
from ..validators import require, validate_date, validate_integer, validate_shortlink_status
from .base import Resource

MAX_NAME_LENGTH = 50
MAX_ALIAS_LENGTH = 30


def _normalize_name(name: Any) -> Optional[str]:
    if name is None:
        return None
    if not isinstance(name, str):
        raise ValidationError("name must be a string", field="name")
    name = name.strip()
    if not name:
        return None
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"name must be {MAX_NAME_LENGTH} characters or fewer", field="name")
    return name


def _normalize_alias(alias: Any) -> Optional[str]:
    if alias is None:
        return None
    if not isinstance(alias, str):
        raise ValidationError("alias must be a string", field="alias")
    alias = alias.strip()
    if not alias:
        raise ValidationError("alias cannot be empty", field="alias")
    if len(alias) > MAX_ALIAS_LENGTH:
        raise ValidationError(f"alias must be {MAX_ALIAS_LENGTH} characters or fewer", field="alias")
    if any(ch.isspace() for ch in alias):
        raise ValidationError("alias cannot contain spaces", field="alias")
    return alias


class Shortlinks(Resource):
    """Shortlink management (short_link)"""

    def list_shortlinks(self, id: Optional[str] = None, start_date=None, end_date=None,
                        limit: Optional[int] = None, offset: Optional[int] = None) -> ApiResponse:
        """
        List shortlinks, optionally filtered

        When id is given, every other filter is ignored and only that
        shortlink is requested.

        Args:
            id: Specific shortlink ID
            start_date: Start date
            end_date: End date
            limit: Number of results to return
            offset: Timezone offset in hours (may be negative)
        """
        if id:
            return self._caller.get("short_link/", params={"id": id})

        params = self._compact({
            "start_date": validate_date(start_date, "start_date"),
            "end_date": validate_date(end_date, "end_date"),
            "limit": validate_integer(limit, "limit") or None,
            "offset": validate_integer(offset, "offset"),
        })
        return self._caller.get("short_link/", params=params or None)

    def get_shortlink_by_id(self, id: str) -> ApiResponse:
        require(id, "id")
        return self._caller.get("short_link/", params={"id": id})

    def create_shortlink(self, long_url: str, name: Optional[str] = None,
                         alias: Optional[str] = None, status: Optional[str] = "ACTIVE") -> ApiResponse:
        """
        Create a shortlink

        Args:
            long_url: Original long URL
            name: Optional name, at most 50 characters. A blank name is sent as null.
            alias: Optional alias, at most 30 characters, no whitespace
            status: ACTIVE (default) or INACTIVE

        Returns:
            ApiResponse: data holds url_id, short_url, long_url, status, ...
        """
        require(long_url, "long_url")
        status = validate_shortlink_status(status or "ACTIVE")
        normalized_name = _normalize_name(name)
        normalized_alias = _normalize_alias(alias)

        body = {
            "long_url": long_url,
            "status": status,
        }
        if normalized_name is not None:
            body["name"] = normalized_name
        elif name is not None:
            body["name"] = None
        if normalized_alias is not None:
            body["alias"] = normalized_alias

        return self._caller.post("short_link", body=body)

    def create_shortlink_with_alias(self, long_url: str, alias: str, name: Optional[str] = None,
                                    status: Optional[str] = "ACTIVE") -> ApiResponse:
        """Create a shortlink that must use the given custom alias"""
        if alias is None:
            raise ValidationError("alias is required", field="alias")
        return self.create_shortlink(long_url, name=name, alias=alias, status=status)

    def update_shortlink_status(self, id: str, status: str) -> ApiResponse:
        """
        Change a shortlink's status

        The upstream does not reactivate links, so ACTIVE requests are sent but
        expected to be rejected.
        """
        require(id, "id")
        if status not in ("ACTIVE", "INACTIVE"):
            raise ValidationError("Status is required and must be ACTIVE or INACTIVE", field="status")

        if status == "ACTIVE":
            self.logger.warning("Shortlinks cannot be reactivated; the API will reject ACTIVE requests")

        return self._caller.put(
            f"short_link/{self._segment(id)}/status",
            params={"id": id},
            body={"status": status},
        )
