"""Tests for the transport wrapper's error mapping."""

import httpx
import pytest

from adapters.http_client import ApiTransport
from core.domain.errors import InvalidCredentials, NotFound, TransportFailure

from conftest import LOCAL, run

URL = f"{LOCAL}/status"
HEADERS = {"X-ZT1-Auth": "tok"}


@pytest.fixture
def api(settings, fake_api) -> ApiTransport:
    return ApiTransport(settings, transport=fake_api.transport)


class TestSuccess:
    def test_get_decodes_json_and_sends_headers(self, api, fake_api):
        fake_api.add("GET", URL, {"address": "abcdef0123"})

        assert run(api.get(URL, HEADERS)) == {"address": "abcdef0123"}
        assert fake_api.requests[0].headers["X-ZT1-Auth"] == "tok"

    def test_post_sends_json_body(self, api, fake_api):
        fake_api.add("POST", URL, {"ok": True})

        run(api.post(URL, HEADERS, {"name": "lab"}))

        assert fake_api.body() == {"name": "lab"}

    def test_delete_returns_status_only(self, api, fake_api):
        fake_api.add("DELETE", URL, None, status=204)

        assert run(api.delete(URL, HEADERS)) == 204

    def test_empty_body_decodes_to_none(self, api, fake_api):
        fake_api.add("GET", URL, None)

        assert run(api.get(URL, HEADERS)) is None


class TestErrorMapping:
    @pytest.mark.parametrize("method", ["GET", "POST", "DELETE"])
    def test_401_is_invalid_credentials(self, api, fake_api, method):
        fake_api.add(method, URL, {"error": "unauthorized"}, status=401)
        call = {
            "GET": lambda: api.get(URL, HEADERS),
            "POST": lambda: api.post(URL, HEADERS, {}),
            "DELETE": lambda: api.delete(URL, HEADERS),
        }[method]

        with pytest.raises(InvalidCredentials) as exc_info:
            run(call())

        assert exc_info.value.status_code == 401
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    def test_404_is_not_found(self, api):
        with pytest.raises(NotFound) as exc_info:
            run(api.get(f"{LOCAL}/nope", HEADERS))

        assert exc_info.value.status_code == 404

    def test_other_status_is_transport_failure(self, api, fake_api):
        fake_api.add("GET", URL, {"error": "boom"}, status=500)

        with pytest.raises(TransportFailure) as exc_info:
            run(api.get(URL, HEADERS))

        assert exc_info.value.status_code == 500
        assert URL in str(exc_info.value)

    def test_network_failure_keeps_original_cause(self, api, fake_api):
        fake_api.add("GET", URL, httpx.ConnectError("connection refused"))

        with pytest.raises(TransportFailure) as exc_info:
            run(api.get(URL, HEADERS))

        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert exc_info.value.status_code is None
