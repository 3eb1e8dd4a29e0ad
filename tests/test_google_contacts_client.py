"""
Tests for the Google Contacts client.

Tests cover:
- personFields masks
- ContactCreate body building
- Connection listing (single page and nextPageToken walk)
- Contact group listing
"""

import pytest

from flownodes.integrations.google_contacts import (
    ALL_PERSON_FIELDS,
    PAGE_SIZE,
    ContactCreate,
    ContactEvent,
    GoogleContactsClient,
    GoogleContactsConfig,
    SortOrder,
    person_fields_mask,
)


@pytest.fixture
def client(fake_api):
    return GoogleContactsClient(
        GoogleContactsConfig(access_token="ya29.test"),
        transport=fake_api.transport,
    )


# =============================================================================
# Field Masks
# =============================================================================


class TestPersonFieldsMask:
    """Tests for person_fields_mask."""

    def test_joins_fields(self):
        assert person_fields_mask(["names", "emailAddresses"]) == "names,emailAddresses"

    def test_star_selects_every_field(self):
        mask = person_fields_mask(["names", "*"])
        assert mask.split(",") == list(ALL_PERSON_FIELDS)

    def test_accepts_comma_separated_string(self):
        assert person_fields_mask("names, phoneNumbers") == "names,phoneNumbers"
        assert person_fields_mask("*") == ",".join(ALL_PERSON_FIELDS)


# =============================================================================
# ContactCreate
# =============================================================================


class TestContactCreate:
    """Tests for the createContact body."""

    def test_minimal_body(self):
        body = ContactCreate(family_name="Lovelace", given_name="Ada").to_api_dict()
        assert body == {"names": [{"familyName": "Lovelace", "givenName": "Ada"}]}

    def test_full_body(self):
        contact = ContactCreate(
            family_name="Lovelace",
            given_name="Ada",
            middle_name="King",
            phone_numbers=[{"type": "mobile", "value": "+44 20 7946 0000"}],
            email_addresses=[{"type": "work", "value": "ada@example.com"}],
            events=[ContactEvent(date="2020-12-10", type="anniversary")],
            birthday="12/10/1815",
            biography="Analyst",
            user_defined=[{"key": "team", "value": "engines"}],
            groups=["contactGroups/friends"],
        )

        body = contact.to_api_dict()

        assert body["names"] == [
            {"familyName": "Lovelace", "givenName": "Ada", "middleName": "King"}
        ]
        assert body["phoneNumbers"] == [{"type": "mobile", "value": "+44 20 7946 0000"}]
        assert body["events"] == [
            {"date": {"day": "10", "month": "12", "year": "2020"}, "type": "anniversary"}
        ]
        assert body["birthdays"] == [{"date": {"day": "10", "month": "12", "year": "1815"}}]
        assert body["biographies"] == [{"value": "Analyst", "contentType": "TEXT_PLAIN"}]
        assert body["userDefined"] == [{"key": "team", "value": "engines"}]
        assert body["memberships"] == [
            {"contactGroupMembership": {"contactGroupResourceName": "contactGroups/friends"}}
        ]
        assert "organizations" not in body
        assert "addresses" not in body

    def test_inputs_are_not_mutated(self):
        phones = [{"type": "home", "value": "1"}]
        body = ContactCreate(family_name="A", given_name="B", phone_numbers=phones).to_api_dict()

        body["phoneNumbers"][0]["value"] = "2"

        assert phones == [{"type": "home", "value": "1"}]


# =============================================================================
# Contacts
# =============================================================================


class TestContacts:
    """Tests for contact operations."""

    @pytest.mark.asyncio
    async def test_create_contact(self, client, fake_api, sample_person):
        fake_api.add("POST", "/v1/people:createContact", json_body=sample_person)

        person = await client.create_contact(ContactCreate(family_name="Lovelace", given_name="Ada"))

        assert person == sample_person
        assert fake_api.body(fake_api.last_request) == {
            "names": [{"familyName": "Lovelace", "givenName": "Ada"}]
        }
        assert fake_api.last_request.headers["Authorization"] == "Bearer ya29.test"

    @pytest.mark.asyncio
    async def test_get_contact(self, client, fake_api, sample_person):
        fake_api.add("GET", "/v1/people/c8080", json_body=sample_person)

        person = await client.get_contact("c8080", ["names", "emailAddresses"])

        assert person == sample_person
        assert fake_api.last_request.url.params["personFields"] == "names,emailAddresses"

    @pytest.mark.asyncio
    async def test_delete_contact(self, client, fake_api):
        fake_api.add("DELETE", "/v1/people/c8080:deleteContact", json_body={})

        assert await client.delete_contact("c8080") is True

    @pytest.mark.asyncio
    async def test_list_contacts_single_page(self, client, fake_api, sample_person):
        fake_api.add(
            "GET",
            "/v1/people/me/connections",
            json_body={"connections": [sample_person], "nextPageToken": "next"},
        )

        page = await client.list_contacts(
            ["names"], page_size=10, sort_order=SortOrder.FIRST_NAME_ASCENDING
        )

        assert page["connections"] == [sample_person]
        assert len(fake_api.requests) == 1
        params = fake_api.last_request.url.params
        assert params["pageSize"] == "10"
        assert params["sortOrder"] == "FIRST_NAME_ASCENDING"

    @pytest.mark.asyncio
    async def test_list_all_contacts_follows_page_tokens(self, client, fake_api):
        path = "/v1/people/me/connections"
        fake_api.add("GET", path, json_body={"connections": [{"id": 1}], "nextPageToken": "t2"})
        fake_api.add("GET", path, json_body={"connections": [{"id": 2}], "nextPageToken": "t3"})
        fake_api.add("GET", path, json_body={"connections": [{"id": 3}]})

        contacts = await client.list_all_contacts(["names"])

        assert [contact["id"] for contact in contacts] == [1, 2, 3]
        first, second, third = fake_api.requests
        assert first.url.params["pageSize"] == str(PAGE_SIZE)
        assert "pageToken" not in first.url.params
        assert second.url.params["pageToken"] == "t2"
        assert third.url.params["pageToken"] == "t3"
        assert "sortOrder" not in third.url.params

    @pytest.mark.asyncio
    async def test_list_all_contacts_without_connections(self, client, fake_api):
        fake_api.add("GET", "/v1/people/me/connections", json_body={"totalPeople": 0})

        assert await client.list_all_contacts(["names"]) == []


# =============================================================================
# Contact Groups
# =============================================================================


class TestContactGroups:
    """Tests for contact group listing."""

    @pytest.mark.asyncio
    async def test_list_contact_groups(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/contactGroups",
            json_body={
                "contactGroups": [
                    {"resourceName": "contactGroups/myContacts", "name": "myContacts"},
                    {"resourceName": "contactGroups/friends", "name": "Friends"},
                ]
            },
        )

        groups = await client.list_contact_groups()

        assert [group["name"] for group in groups] == ["myContacts", "Friends"]

    @pytest.mark.asyncio
    async def test_health_check(self, client, fake_api):
        fake_api.add("GET", "/v1/contactGroups", json_body={"contactGroups": []})

        assert await client.health_check() is True
        assert fake_api.last_request.url.params["pageSize"] == "1"
