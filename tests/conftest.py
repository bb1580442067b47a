"""Pytest configuration for Alfen Eve tests.

Registers the integration directory as the package ``alfen_eve`` without
running its Home Assistant entry module, so the embedded ``alfen`` client
library can be tested without Home Assistant installed.
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

INTEGRATION_DIR = Path(__file__).resolve().parent.parent / "custom_components" / "alfen_eve"

if "alfen_eve" not in sys.modules:
    spec = importlib.util.spec_from_file_location(
        "alfen_eve",
        INTEGRATION_DIR / "__init__.py",
        submodule_search_locations=[str(INTEGRATION_DIR)],
    )
    sys.modules["alfen_eve"] = importlib.util.module_from_spec(spec)

from alfen_eve.alfen.models import DeviceSettings, PropertyRecord  # noqa: E402


# ---------------------------------------------------------------------------
# Fake aiohttp session
# ---------------------------------------------------------------------------

class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside ``async with``."""

    def __init__(self, status=200, body="", content_type="alfen/json", headers=None):
        self.status = status
        self.content_type = content_type
        if isinstance(body, bytes):
            self._body = body
        elif isinstance(body, str):
            self._body = body.encode("utf-8")
        else:
            self._body = json.dumps(body).encode("utf-8")
        self.headers = {"Content-Type": content_type, **(headers or {})}
        self.read_count = 0

    async def read(self):
        self.read_count += 1
        return self._body


class _RequestContext:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Records requests and answers them from a per-endpoint table.

    Keys of ``responses`` are the first path segment after ``/api/``
    (``login``, ``prop``, ``logout``). Values are a FakeResponse or an
    exception to raise when the request is entered.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requests = []
        self.closed = False

    def request(self, method, url, data=None, headers=None, ssl=None):
        self.requests.append(
            {"method": method, "url": url, "data": data, "headers": headers, "ssl": ssl}
        )
        endpoint = url.split("/api/", 1)[1].split("?", 1)[0]
        return _RequestContext(self.responses.get(endpoint, FakeResponse(404)))

    async def close(self):
        self.closed = True


# ---------------------------------------------------------------------------
# Fake session client for poller tests
# ---------------------------------------------------------------------------

class FakeClient:
    """Mimics AlfenApiClient and logs the calls made on it."""

    def __init__(self, settings, calls, logger=None, records=(), login_error=None,
                 fetch_error=None, logout_error=None, gate=None):
        self.settings = settings
        self.logger = logger
        self.calls = calls
        self.records = list(records)
        self.login_error = login_error
        self.fetch_error = fetch_error
        self.logout_error = logout_error
        self.gate = gate

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.calls.append("close")

    async def login(self):
        self.calls.append("login")
        if self.gate is not None:
            await self.gate.wait()
        if self.login_error:
            raise self.login_error

    async def fetch_properties(self, ids=()):
        self.calls.append("fetch")
        if self.fetch_error:
            raise self.fetch_error
        return self.records

    async def logout(self):
        self.calls.append("logout")
        if self.logout_error:
            raise self.logout_error


class FakeClientFactory:
    """Hands out one FakeClient per poll cycle.

    ``plans`` is a list of keyword dicts, consumed one per cycle; the last
    plan repeats once the list runs out.
    """

    def __init__(self, *plans):
        self.plans = list(plans) or [{}]
        self.calls = []
        self.clients = []

    def __call__(self, settings, logger=None):
        plan = self.plans.pop(0) if len(self.plans) > 1 else self.plans[0]
        client = FakeClient(settings, self.calls, logger=logger, **plan)
        self.clients.append(client)
        return client


def make_records(values):
    """Build property records from an ``{id: value}`` dict."""
    return [PropertyRecord(id=prop_id, value=value) for prop_id, value in values.items()]


@pytest.fixture
def settings():
    return DeviceSettings(address="192.168.1.50", username="admin", password="secret")
