"""
Pydantic schemas for the Google People API.

ContactCreate turns the flat field set a workflow user fills in into the
nested `people:createContact` body. Nothing is added for fields the user
left out.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from flownodes.utils.dates import split_date

# Every personFields mask the connections endpoint accepts; selected by "*".
ALL_PERSON_FIELDS: tuple[str, ...] = (
    "addresses",
    "biographies",
    "birthdays",
    "coverPhotos",
    "emailAddresses",
    "events",
    "genders",
    "imClients",
    "interests",
    "locales",
    "memberships",
    "metadata",
    "names",
    "nicknames",
    "occupations",
    "organizations",
    "phoneNumbers",
    "photos",
    "relations",
    "residences",
    "sipAddresses",
    "skills",
    "urls",
    "userDefined",
)


class SortOrder(str, Enum):
    """Sort orders for people.connections.list."""

    LAST_MODIFIED_ASCENDING = "LAST_MODIFIED_ASCENDING"
    LAST_MODIFIED_DESCENDING = "LAST_MODIFIED_DESCENDING"
    FIRST_NAME_ASCENDING = "FIRST_NAME_ASCENDING"
    LAST_NAME_ASCENDING = "LAST_NAME_ASCENDING"


def person_fields_mask(fields: list[str] | tuple[str, ...] | str) -> str:
    """
    Build the comma-separated personFields mask.

    "*" anywhere in the selection expands to ALL_PERSON_FIELDS.
    """
    if isinstance(fields, str):
        fields = [field.strip() for field in fields.split(",") if field.strip()]
    if "*" in fields:
        return ",".join(ALL_PERSON_FIELDS)
    return ",".join(fields)


class ContactEvent(BaseModel):
    """A dated event (anniversary, etc.) on a contact."""

    date: str | dt.date
    type: str | None = None

    def to_api_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"date": split_date(self.date)}
        if self.type:
            data["type"] = self.type
        return data


class ContactCreate(BaseModel):
    """
    Schema for creating a contact.

    The list fields (organizations, phone_numbers, ...) carry the People
    API's own objects, e.g. {"type": "work", "value": "+1 555 0100"}, and
    are forwarded as given.
    """

    family_name: str
    given_name: str
    middle_name: str | None = None
    organizations: list[dict[str, Any]] | None = None
    phone_numbers: list[dict[str, Any]] | None = None
    addresses: list[dict[str, Any]] | None = None
    relations: list[dict[str, Any]] | None = None
    events: list[ContactEvent] | None = None
    birthday: str | dt.date | None = None
    email_addresses: list[dict[str, Any]] | None = None
    biography: str | None = None
    user_defined: list[dict[str, Any]] | None = Field(None, description="Custom key/value fields")
    groups: list[str] | None = Field(None, description="Contact group resource names")

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to the createContact body, excluding absent values."""
        name: dict[str, Any] = {
            "familyName": self.family_name,
            "givenName": self.given_name,
        }
        if self.middle_name:
            name["middleName"] = self.middle_name

        body: dict[str, Any] = {"names": [name]}

        if self.organizations:
            body["organizations"] = [dict(value) for value in self.organizations]
        if self.phone_numbers:
            body["phoneNumbers"] = [dict(value) for value in self.phone_numbers]
        if self.addresses:
            body["addresses"] = [dict(value) for value in self.addresses]
        if self.relations:
            body["relations"] = [dict(value) for value in self.relations]
        if self.events:
            body["events"] = [event.to_api_dict() for event in self.events]
        if self.birthday:
            body["birthdays"] = [{"date": split_date(self.birthday)}]
        if self.email_addresses:
            body["emailAddresses"] = [dict(value) for value in self.email_addresses]
        if self.biography:
            body["biographies"] = [
                {
                    "value": self.biography,
                    "contentType": "TEXT_PLAIN",
                }
            ]
        if self.user_defined:
            body["userDefined"] = [dict(value) for value in self.user_defined]
        if self.groups:
            body["memberships"] = [
                {"contactGroupMembership": {"contactGroupResourceName": group_id}}
                for group_id in self.groups
            ]
        return body
