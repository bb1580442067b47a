"""Tests for the Alfen Eve session client.

HTTP is answered by a FakeSession; no charger or network is needed.
"""

import asyncio
import dataclasses
import json

import aiohttp
import pytest

from alfen_eve.alfen.api_client import AlfenApiClient
from alfen_eve.alfen.const import API_HEADER, PROPERTY_IDS
from alfen_eve.alfen.exceptions import AuthError, RequestError
from alfen_eve.alfen.models import JsonBody, PropertyRecord, TextBody

from conftest import FakeResponse, FakeSession

PROPERTIES_BODY = {
    "version": 2,
    "properties": [
        {"id": "2221_16", "access": 1, "type": 8, "len": 0, "cat": "meter1", "value": 7360.04},
        {"id": "2201_0", "access": 1, "type": 8, "len": 0, "cat": "temp", "value": 30.25},
    ],
}


def run(coro):
    return asyncio.run(coro)


def make_client(settings, **responses):
    session = FakeSession(responses)
    return AlfenApiClient(settings, session=session), session


# ---------------------------------------------------------------------------
# login
# ---------------------------------------------------------------------------

class TestLogin:
    def test_posts_credentials_as_json(self, settings):
        client, session = make_client(settings, login=FakeResponse(body={}))
        run(client.login())

        request = session.requests[0]
        assert request["method"] == "POST"
        assert request["url"] == "https://192.168.1.50/api/login"
        assert request["headers"] == {"Content-Type": API_HEADER}
        assert json.loads(request["data"]) == {"username": "admin", "password": "secret"}

    def test_certificate_validation_is_off_by_default(self, settings):
        client, session = make_client(settings, login=FakeResponse(body={}))
        run(client.login())
        assert session.requests[0]["ssl"] is False

    def test_certificate_validation_can_be_enabled(self, settings):
        strict = dataclasses.replace(settings, verify_ssl=True)
        client, session = make_client(strict, login=FakeResponse(body={}))
        run(client.login())
        assert session.requests[0]["ssl"] is True

    def test_non_200_raises_auth_error(self, settings):
        client, _ = make_client(settings, login=FakeResponse(status=401))
        with pytest.raises(AuthError, match="401"):
            run(client.login())

    def test_rejection_with_undecodable_body_raises_auth_error(self, settings):
        rejected = FakeResponse(status=401, body=b"\xff\xfe denied", content_type="text/plain")
        client, _ = make_client(settings, login=rejected)
        with pytest.raises(AuthError, match="401"):
            run(client.login())
        assert rejected.read_count == 0

    def test_bad_json_raises_auth_error(self, settings):
        client, _ = make_client(settings, login=FakeResponse(body="{not json"))
        with pytest.raises(AuthError, match="parsing JSON"):
            run(client.login())

    def test_transport_error_raises_auth_error(self, settings):
        client, _ = make_client(
            settings, login=aiohttp.ClientConnectionError("connection refused")
        )
        with pytest.raises(AuthError) as excinfo:
            run(client.login())
        assert isinstance(excinfo.value.__cause__, aiohttp.ClientConnectionError)


# ---------------------------------------------------------------------------
# fetch_properties
# ---------------------------------------------------------------------------

class TestFetchProperties:
    def test_requests_fixed_id_list(self, settings):
        client, session = make_client(settings, prop=FakeResponse(body=PROPERTIES_BODY))
        run(client.fetch_properties())

        request = session.requests[0]
        assert request["method"] == "GET"
        assert request["data"] is None
        assert request["url"] == (
            "https://192.168.1.50/api/prop?ids="
            "2060_0,2056_0,2221_3,2221_4,2221_5,2221_A,2221_B,2221_C,"
            "2221_16,2201_0,2501_2,2221_22,2129_0,2126_0"
        )
        assert len(PROPERTY_IDS) == 14

    def test_parses_property_records(self, settings):
        client, _ = make_client(settings, prop=FakeResponse(body=PROPERTIES_BODY))
        records = run(client.fetch_properties())
        assert records == [
            PropertyRecord(id="2221_16", access=1, type=8, len=0, cat="meter1", value=7360.04),
            PropertyRecord(id="2201_0", access=1, type=8, len=0, cat="temp", value=30.25),
        ]

    def test_json_without_json_content_type_is_accepted(self, settings):
        client, _ = make_client(
            settings, prop=FakeResponse(body=PROPERTIES_BODY, content_type="text/html")
        )
        assert len(run(client.fetch_properties())) == 2

    def test_non_200_raises_request_error(self, settings):
        client, _ = make_client(settings, prop=FakeResponse(status=500))
        with pytest.raises(RequestError, match="500"):
            run(client.fetch_properties())

    def test_text_body_raises_request_error(self, settings):
        client, _ = make_client(
            settings, prop=FakeResponse(body="Unauthorized", content_type="text/plain")
        )
        with pytest.raises(RequestError, match="Unexpected properties response"):
            run(client.fetch_properties())

    def test_invalid_utf8_in_text_body_is_replaced(self, settings):
        client, _ = make_client(
            settings, prop=FakeResponse(body=b"busy \xff", content_type="text/plain")
        )
        with pytest.raises(RequestError, match="busy \ufffd"):
            run(client.fetch_properties())

    def test_missing_property_list_raises_request_error(self, settings):
        client, _ = make_client(settings, prop=FakeResponse(body={"version": 2}))
        with pytest.raises(RequestError, match="no property list"):
            run(client.fetch_properties())

    def test_timeout_raises_request_error(self, settings):
        client, _ = make_client(settings, prop=asyncio.TimeoutError())
        with pytest.raises(RequestError):
            run(client.fetch_properties())


# ---------------------------------------------------------------------------
# logout / decode / close
# ---------------------------------------------------------------------------

class TestLogout:
    def test_posts_without_body(self, settings):
        client, session = make_client(settings, logout=FakeResponse(body={}))
        run(client.logout())
        assert session.requests[0]["method"] == "POST"
        assert session.requests[0]["url"] == "https://192.168.1.50/api/logout"
        assert session.requests[0]["data"] is None

    def test_non_200_raises_request_error(self, settings):
        client, _ = make_client(settings, logout=FakeResponse(status=503))
        with pytest.raises(RequestError):
            run(client.logout())


class TestDecode:
    def test_strict_for_json_content_types(self):
        with pytest.raises(RequestError):
            AlfenApiClient._decode("application/json", "oops", RequestError)

    def test_falls_back_to_text(self):
        assert AlfenApiClient._decode("text/plain", "ok", RequestError) == TextBody("ok")

    def test_json_body(self):
        assert AlfenApiClient._decode("alfen/json", '{"a": 1}', AuthError) == JsonBody({"a": 1})


def test_session_sequence_shares_one_session(settings):
    client, session = make_client(
        settings,
        login=FakeResponse(body={}),
        prop=FakeResponse(body=PROPERTIES_BODY),
        logout=FakeResponse(body={}),
    )

    async def cycle():
        async with client:
            await client.login()
            await client.fetch_properties()
            await client.logout()

    run(cycle())
    assert [r["url"].split("/api/")[1].split("?")[0] for r in session.requests] == [
        "login", "prop", "logout",
    ]
    # a session passed in by the caller is left open
    assert session.closed is False


def test_settings_are_immutable(settings):
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.address = "10.0.0.1"
