"""
Pytest configuration and fixtures for flownodes tests.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from flownodes.nodes import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from flownodes.config import NodeSettings  # noqa: E402


class FakeAPI:
    """
    Canned HTTP API behind an httpx.MockTransport.

    Responses are registered per (method, path). Registering several for
    the same route serves them in order (pagination); the last one repeats.
    Every request is recorded.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method, path, *, json_body=None, status=200, headers=None):
        if json_body is None:
            response = httpx.Response(status, headers=headers)
        else:
            response = httpx.Response(status, json=json_body, headers=headers)
        self.routes.setdefault((method, path), []).append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responses = self.routes.get((request.method, request.url.path))
        if not responses:
            return httpx.Response(404, json={"detail": "The requested resource does not exist"})
        if len(responses) > 1:
            return responses.pop(0)
        return responses[0]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content) if request.content else None


@pytest.fixture
def fake_api():
    """Fresh canned API per test."""
    return FakeAPI()


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return NodeSettings()


@pytest.fixture
def sample_issue():
    """Sentry issue as returned by GET /api/0/issues/{id}/."""
    return {
        "id": "1234",
        "shortId": "BACKEND-1A",
        "title": "ZeroDivisionError: division by zero",
        "status": "unresolved",
        "count": "42",
        "project": {"id": "2", "slug": "backend", "name": "Backend"},
    }


@pytest.fixture
def sample_person():
    """Google People API person resource."""
    return {
        "resourceName": "people/c8080",
        "etag": "%EgUBAj0DNy4aBAECBQciDE1hdGhQb3R0ZXI=",
        "names": [{"displayName": "Ada Lovelace", "familyName": "Lovelace", "givenName": "Ada"}],
        "emailAddresses": [{"value": "ada@example.com", "type": "work"}],
    }
