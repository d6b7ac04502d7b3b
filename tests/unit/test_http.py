"""Tests for JsonClient status, transport and decoding behavior."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from policy_scout.errors import BadStatusError, ResponseParseError, TransportError
from policy_scout.http import JsonClient

URL = "https://svc.test/thing"


class TestGetJson:
    """JsonClient.get_json maps every outcome onto a result or a fetch error."""

    @pytest.mark.unit
    def test_returns_decoded_body(self, make_transport: Callable[..., httpx.MockTransport]) -> None:
        """A 2xx JSON response is decoded."""
        transport = make_transport({"/thing": (200, {"ok": True})})

        with JsonClient(transport=transport) as client:
            assert client.get_json(URL, stage="directory") == {"ok": True}

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [201, 203, 299])
    def test_any_2xx_is_success(
        self, status: int, make_transport: Callable[..., httpx.MockTransport]
    ) -> None:
        """The whole 200-299 range counts as success."""
        transport = make_transport({"/thing": (status, [1, 2])})

        with JsonClient(transport=transport) as client:
            assert client.get_json(URL, stage="directory") == [1, 2]

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [300, 403, 404, 429, 500, 503])
    def test_non_2xx_raises_bad_status(
        self, status: int, make_transport: Callable[..., httpx.MockTransport]
    ) -> None:
        """Statuses outside 200-299 raise BadStatusError with the observed code."""
        transport = make_transport({"/thing": (status, {"message": "nope"})})

        with JsonClient(transport=transport) as client:
            with pytest.raises(BadStatusError) as exc_info:
                client.get_json(URL, stage="enumerate")

        assert exc_info.value.status_code == status
        assert exc_info.value.stage == "enumerate"
        assert exc_info.value.url == URL

    @pytest.mark.unit
    def test_invalid_json_raises_parse_error(
        self, make_transport: Callable[..., httpx.MockTransport]
    ) -> None:
        """A 2xx body that is not JSON raises ResponseParseError."""
        transport = make_transport({"/thing": (200, "<html>maintenance</html>")})

        with JsonClient(transport=transport) as client:
            with pytest.raises(ResponseParseError) as exc_info:
                client.get_json(URL, stage="directory")

        assert "invalid JSON" in exc_info.value.reason

    @pytest.mark.unit
    def test_connection_failure_raises_transport_error(self) -> None:
        """httpx request errors become TransportError."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with JsonClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(TransportError) as exc_info:
                client.get_json(URL, stage="metadata")

        assert exc_info.value.reason == "connection refused"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.unit
    def test_timeout_raises_transport_error(self) -> None:
        """Timeouts are transport failures too."""

        def hang(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with JsonClient(transport=httpx.MockTransport(hang), timeout=0.1) as client:
            with pytest.raises(TransportError):
                client.get_json(URL, stage="metadata")

    @pytest.mark.unit
    def test_sends_params_and_headers(
        self, make_transport: Callable[..., httpx.MockTransport]
    ) -> None:
        """Query params, per-request headers and default headers are sent."""
        seen: list[httpx.Request] = []
        transport = make_transport({"/thing": (200, [])}, seen)

        with JsonClient(transport=transport) as client:
            client.get_json(URL, stage="enumerate", params={"page": 2}, headers={"project_id": "k"})

        request = seen[0]
        assert request.url.params["page"] == "2"
        assert request.headers["project_id"] == "k"
        assert request.headers["accept"] == "application/json"
        assert request.headers["user-agent"].startswith("policy-scout/")

    @pytest.mark.unit
    def test_close_is_idempotent(self) -> None:
        """close() can be called before any request and more than once."""
        client = JsonClient()
        client.close()
        client.close()
