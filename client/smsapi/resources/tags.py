"""
Tags resource

Tags are addressed by their short name. Endpoints that carry the short name
in the path also send it as the tag_name query parameter.
"""

from typing import List, Optional

from ..api_caller import ApiResponse
from ..validators import require, validate_contact_status, validate_integer, validate_list
from .base import Resource


class Tags(Resource):
    """Tag management (tags, tags/{short_name}, tags/{short_name}/contacts)"""

    @staticmethod
    def _short_name(short_name: str) -> str:
        return str(require(short_name, "short_name")).strip()

    def _path(self, short_name: str, *parts: str) -> str:
        return "/".join(["tags", self._segment(short_name)] + list(parts))

    def list_tags(self, query: Optional[str] = None, limit: Optional[int] = None,
                  start: Optional[int] = None, short_results: Optional[int] = None) -> ApiResponse:
        """
        List tags with optional filtering

        Args:
            query: Search query
            limit: Number of results to return
            start: Starting offset
            short_results: Return short results (0 or 1)
        """
        params = self._compact({
            "query": query,
            "limit": validate_integer(limit, "limit"),
            "start": validate_integer(start, "start"),
            "shortResults": validate_integer(short_results, "short_results", is_boolean=True),
        })
        return self._caller.get("tags", params=params or None)

    def get_tag(self, short_name: str) -> ApiResponse:
        short_name = self._short_name(short_name)
        path = self._path(short_name)
        return self._caller.get(path, params={"tag_name": short_name})

    def get_tag_contacts(self, short_name: str, limit: Optional[int] = None,
                         start: Optional[int] = None, status: Optional[str] = None,
                         short_results: Optional[int] = None) -> ApiResponse:
        """
        Contacts that belong to a tag

        Args:
            short_name: Tag's short name
            limit: Number of results to return
            start: Starting offset
            status: Contact status filter
            short_results: Return short results (0 or 1)
        """
        short_name = self._short_name(short_name)
        path = self._path(short_name, "contacts")
        params = self._compact({
            "limit": validate_integer(limit, "limit"),
            "start": validate_integer(start, "start"),
            "status": validate_contact_status(status),
            "shortResults": validate_integer(short_results, "short_results", is_boolean=True),
            "tag_name": short_name,
        })
        return self._caller.get(path, params=params)

    def create_tag(self, name: str, short_name: Optional[str] = None,
                   description: Optional[str] = None) -> ApiResponse:
        require(name, "name")
        body = self._compact({
            "name": name,
            "short_name": short_name,
            "description": description,
        })
        return self._caller.post("tags", body=body)

    def update_tag(self, short_name: str, name: Optional[str] = None,
                   description: Optional[str] = None) -> ApiResponse:
        short_name = self._short_name(short_name)
        path = self._path(short_name)
        body = self._compact({
            "name": name,
            "description": description,
        })
        return self._caller.put(path, params={"tag_name": short_name}, body=body)

    def delete_tag(self, short_name: str) -> ApiResponse:
        short_name = self._short_name(short_name)
        path = self._path(short_name)
        return self._caller.delete(path, params={"tag_name": short_name})

    def add_contacts_to_tag(self, short_name: str, msisdns: List[str]) -> ApiResponse:
        """Add several contacts (by MSISDN) to a tag in one call"""
        short_name = self._short_name(short_name)
        path = self._path(short_name, "contacts")
        msisdns = validate_list(msisdns, "msisdns", required=True)
        return self._caller.post(path, params={"tag_name": short_name}, body={"msisdns": msisdns})

    def remove_contacts_from_tag(self, short_name: str, msisdns: List[str]) -> ApiResponse:
        """Remove several contacts (by MSISDN) from a tag in one call"""
        short_name = self._short_name(short_name)
        path = self._path(short_name, "contacts")
        msisdns = validate_list(msisdns, "msisdns", required=True)
        return self._caller.delete(path, params={"tag_name": short_name}, body={"msisdns": msisdns})
