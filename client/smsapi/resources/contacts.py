"""
Contacts resource

Contacts are keyed by MSISDN (country code + local number, digits only).
"""

from typing import Any, Optional

from ..api_caller import ApiResponse
from ..exceptions import ValidationError
from ..validators import build_msisdn, require, validate_contact_status, validate_integer
from .base import Resource

CUSTOM_FIELDS = tuple(f"custom_field_{i}" for i in range(1, 6))
UPDATABLE_FIELDS = ("first_name", "last_name", "email", "status") + CUSTOM_FIELDS


class Contacts(Resource):
    """Contact management (contacts, contacts/{msisdn}/groups, contacts/{msisdn}/tags)"""

    def _path(self, msisdn: Any, *parts: Any) -> str:
        require(msisdn, "msisdn")
        segments = [self._segment(msisdn)] + [self._segment(p) for p in parts]
        return "contacts/" + "/".join(segments)

    def list_contacts(self, limit: Optional[int] = None, start: Optional[int] = None,
                      status: Optional[str] = None, query: Optional[str] = None,
                      short_results: Optional[int] = None) -> ApiResponse:
        """
        List contacts

        Args:
            limit: Number of results to return
            start: Starting offset
            status: SUBSCRIBED, INVITED, CONFIRMED or CANCELLED
            query: Free text search
            short_results: 1 for the abbreviated contact representation

        Returns:
            ApiResponse: data is the list of contacts
        """
        params = self._compact({
            "limit": validate_integer(limit, "limit"),
            "start": validate_integer(start, "start"),
            "status": validate_contact_status(status),
            "query": query,
            "shortResults": validate_integer(short_results, "short_results", is_boolean=True),
        })
        return self._caller.get("contacts", params=params or None)

    def get_contact(self, msisdn: str) -> ApiResponse:
        return self._caller.get(self._path(msisdn))

    def create_contact(self, phone_number: str, country_code: str,
                       first_name: Optional[str] = None, last_name: Optional[str] = None,
                       email: Optional[str] = None, status: Optional[str] = None,
                       **custom_fields: Any) -> ApiResponse:
        """
        Create a contact

        The subscriber id is built from country_code and phone_number, e.g.
        ("502", "12345678") -> "50212345678", and the contact is created at
        contacts/50212345678.

        Args:
            phone_number: Local number without the country code
            country_code: Country calling code, e.g. "502"
            first_name: Optional first name
            last_name: Optional last name
            email: Optional email address
            status: Optional initial status
            **custom_fields: custom_field_1 .. custom_field_5

        Returns:
            ApiResponse: data is the created contact
        """
        msisdn = build_msisdn(country_code, phone_number)
        self._check_custom_fields(custom_fields)

        body = {
            "msisdn": msisdn,
            "country_code": _digits(country_code),
            "phone_number": _digits(phone_number),
        }
        body.update(self._compact({
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "status": validate_contact_status(status),
        }))
        body.update(self._compact({name: custom_fields.get(name) for name in CUSTOM_FIELDS}))

        self.logger.debug(f"Creating contact {msisdn}")
        return self._caller.post(self._path(msisdn), body=body)

    def update_contact(self, msisdn: str, **fields: Any) -> ApiResponse:
        """
        Update a contact

        Only the given fields are sent. Accepted fields: first_name,
        last_name, email, status and custom_field_1 .. custom_field_5.
        """
        path = self._path(msisdn)

        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown contact field(s): {', '.join(unknown)}", field=unknown[0])

        body = self._compact({name: fields.get(name) for name in UPDATABLE_FIELDS})
        if not body:
            raise ValidationError("At least one field to update is required", field="fields")
        validate_contact_status(body.get("status"))

        return self._caller.put(path, body=body)

    def delete_contact(self, msisdn: str) -> ApiResponse:
        return self._caller.delete(self._path(msisdn))

    def get_contact_groups(self, msisdn: str) -> ApiResponse:
        """Tags/groups the contact belongs to"""
        return self._caller.get(self._path(msisdn, "groups"))

    def add_tag_to_contact(self, msisdn: str, tag: str) -> ApiResponse:
        require(tag, "tag")
        return self._caller.post(self._path(msisdn, "tags", tag))

    def remove_tag_from_contact(self, msisdn: str, tag: str) -> ApiResponse:
        require(tag, "tag")
        return self._caller.delete(self._path(msisdn, "tags", tag))

    @staticmethod
    def _check_custom_fields(custom_fields):
        unknown = sorted(set(custom_fields) - set(CUSTOM_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown contact field(s): {', '.join(unknown)}", field=unknown[0])


def _digits(value: Any) -> str:
    return "".join(ch for ch in str(value) if ch.isdigit())
