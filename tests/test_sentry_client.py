"""
Tests for the Sentry client.

Tests cover:
- Link header parsing
- Cursor pagination (including the limit stop)
- Request schemas omitting absent fields
- Endpoint paths, verbs and payloads per operation
"""

import pytest
from unittest.mock import AsyncMock, patch

from flownodes.integrations.sentry import (
    IssueQuery,
    IssueUpdate,
    OrganizationCreate,
    SentryClient,
    SentryConfig,
    TeamCreate,
    parse_link_header,
)


def link(cursor_next, has_next, path="/api/0/projects/acme/web/issues/"):
    return (
        f'<https://sentry.io{path}?&cursor=0:0:1>; rel="previous"; results="false"; '
        f'cursor="0:0:1", '
        f'<https://sentry.io{path}?&cursor={cursor_next}>; rel="next"; '
        f'results="{"true" if has_next else "false"}"; cursor="{cursor_next}"'
    )


@pytest.fixture
def client(fake_api):
    return SentryClient(SentryConfig(access_token="sntrys_test"), transport=fake_api.transport)


# =============================================================================
# Link Header
# =============================================================================


class TestParseLinkHeader:
    """Tests for parse_link_header."""

    def test_parses_both_relations(self):
        links = parse_link_header(link("0:100:0", True))

        assert set(links) == {"previous", "next"}
        assert links["next"]["results"] == "true"
        assert links["next"]["cursor"] == "0:100:0"
        assert links["next"]["url"].endswith("cursor=0:100:0")
        assert links["previous"]["results"] == "false"

    def test_empty_header(self):
        assert parse_link_header(None) == {}
        assert parse_link_header("") == {}


# =============================================================================
# Schemas
# =============================================================================


class TestSchemas:
    """Tests for request schemas."""

    def test_issue_query_omits_absent_fields(self):
        assert IssueQuery().to_params() == {}
        assert IssueQuery(query="", stats_period=None).to_params() == {}

    def test_issue_query_uses_api_names(self):
        params = IssueQuery(stats_period="24h", short_id_lookup=True, limit=5).to_params()
        assert params == {"statsPeriod": "24h", "shortIdLookup": True, "limit": 5}

    def test_issue_update_keeps_false_flags(self):
        body = IssueUpdate(status="resolved", has_seen=False).to_api_dict()
        assert body == {"status": "resolved", "hasSeen": False}

    def test_organization_create(self):
        body = OrganizationCreate(name="Acme", agree_terms=True).to_api_dict()
        assert body == {"name": "Acme", "agreeTerms": True}

    def test_team_create_empty(self):
        assert TeamCreate().to_api_dict() == {}


# =============================================================================
# Pagination
# =============================================================================


class TestPagination:
    """Tests for request_all_items."""

    @pytest.mark.asyncio
    async def test_follows_cursor_until_no_results(self, client, fake_api):
        path = "/api/0/projects/acme/web/issues/"
        fake_api.add("GET", path, json_body=[{"id": "1"}, {"id": "2"}],
                     headers={"Link": link("0:2:0", True)})
        fake_api.add("GET", path, json_body=[{"id": "3"}],
                     headers={"Link": link("0:3:0", False)})

        items = await client.request_all_items("GET", path, params={"query": "is:unresolved"})

        assert [item["id"] for item in items] == ["1", "2", "3"]
        assert len(fake_api.requests) == 2
        second = fake_api.requests[1]
        assert second.url.params["cursor"] == "0:2:0"
        assert second.url.params["query"] == "is:unresolved"

    @pytest.mark.asyncio
    async def test_stops_once_limit_reached(self, client, fake_api):
        path = "/api/0/projects/"
        fake_api.add("GET", path, json_body=[{"id": "1"}, {"id": "2"}, {"id": "3"}],
                     headers={"Link": link("0:3:0", True, path)})
        fake_api.add("GET", path, json_body=[{"id": "4"}])

        items = await client.request_all_items("GET", path, params={"limit": 2})

        # the page is not trimmed here
        assert len(items) == 3
        assert len(fake_api.requests) == 1
        assert fake_api.last_request.url.params["limit"] == "2"

    @pytest.mark.asyncio
    async def test_single_page_without_link(self, client, fake_api):
        fake_api.add("GET", "/api/0/organizations/", json_body=[{"slug": "acme"}])

        items = await client.request_all_items("GET", "/api/0/organizations/")

        assert items == [{"slug": "acme"}]

    @pytest.mark.asyncio
    async def test_empty_listing(self, client, fake_api):
        fake_api.add("GET", "/api/0/organizations/", json_body=[])

        assert await client.request_all_items("GET", "/api/0/organizations/") == []


# =============================================================================
# Operations
# =============================================================================


class TestOperations:
    """Tests for per-resource client methods."""

    @pytest.mark.asyncio
    async def test_get_issue(self, client, fake_api, sample_issue):
        fake_api.add("GET", "/api/0/issues/1234/", json_body=sample_issue)

        assert await client.get_issue("1234") == sample_issue

    @pytest.mark.asyncio
    async def test_update_issue_sends_put_body(self, client, fake_api, sample_issue):
        fake_api.add("PUT", "/api/0/issues/1234/", json_body=sample_issue)

        await client.update_issue("1234", status="ignored", is_bookmarked=True)

        request = fake_api.last_request
        assert request.method == "PUT"
        assert fake_api.body(request) == {"status": "ignored", "isBookmarked": True}

    @pytest.mark.asyncio
    async def test_delete_issue(self, client, fake_api):
        fake_api.add("DELETE", "/api/0/issues/1234/", status=202)

        assert await client.delete_issue("1234") is True
        assert fake_api.last_request.method == "DELETE"

    @pytest.mark.asyncio
    async def test_list_events_sends_full_flag(self, client, fake_api):
        fake_api.add("GET", "/api/0/projects/acme/web/events/", json_body=[{"eventID": "e1"}])

        events = await client.list_events("acme", "web", full=True, limit=10)

        assert events == [{"eventID": "e1"}]
        params = fake_api.last_request.url.params
        assert params["full"] == "true"
        assert params["limit"] == "10"

    @pytest.mark.asyncio
    async def test_list_issues_without_filters_sends_no_query(self, client, fake_api):
        fake_api.add("GET", "/api/0/projects/acme/web/issues/", json_body=[])

        await client.list_issues("acme", "web")

        assert dict(fake_api.last_request.url.params) == {}

    @pytest.mark.asyncio
    async def test_create_organization(self, client, fake_api):
        fake_api.add("POST", "/api/0/organizations/", json_body={"slug": "acme", "name": "Acme"})

        organization = await client.create_organization("Acme", agree_terms=True, slug="acme")

        assert organization["slug"] == "acme"
        assert fake_api.body(fake_api.last_request) == {
            "name": "Acme",
            "agreeTerms": True,
            "slug": "acme",
        }

    @pytest.mark.asyncio
    async def test_create_team(self, client, fake_api):
        fake_api.add("POST", "/api/0/organizations/acme/teams/", json_body={"slug": "ops"})

        await client.create_team("acme", name="Ops")

        assert fake_api.body(fake_api.last_request) == {"name": "Ops"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name,args,path",
        [
            ("get_event", ("acme", "web", "abc"), "/api/0/projects/acme/web/events/abc/"),
            ("get_organization", ("acme",), "/api/0/organizations/acme/"),
            ("get_project", ("acme", "web"), "/api/0/projects/acme/web/"),
            ("get_release", ("acme", "1.0.0"), "/api/0/organizations/acme/releases/1.0.0/"),
            ("get_team", ("acme", "ops"), "/api/0/teams/acme/ops/"),
        ],
    )
    async def test_get_paths(self, client, fake_api, method_name, args, path):
        fake_api.add("GET", path, json_body={"ok": True})

        result = await getattr(client, method_name)(*args)

        assert result == {"ok": True}
        assert fake_api.last_request.url.path == path

    @pytest.mark.asyncio
    async def test_list_releases_forwards_query(self, client):
        with patch.object(client, "request_all_items", new_callable=AsyncMock) as mock_all:
            mock_all.return_value = []

            await client.list_releases("acme", query="1.", limit=5)

            mock_all.assert_awaited_once_with(
                "GET",
                "/api/0/organizations/acme/releases/",
                params={"query": "1.", "limit": 5},
            )

    @pytest.mark.asyncio
    async def test_health_check(self, client, fake_api):
        fake_api.add("GET", "/api/0/", json_body={"version": "0"})
        assert await client.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_failure(self, client, fake_api):
        fake_api.add("GET", "/api/0/", status=401)
        assert await client.health_check() is False
