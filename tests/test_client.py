"""Tests for the HTTP client."""

import pytest
import requests

from client import ApiError, NodeSimClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Records requests and returns queued responses."""

    def __init__(self, *responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def _client(*responses):
    session = FakeSession(*responses)
    return NodeSimClient("http://localhost:4000/", session=session), session


class TestRequests:
    """Test URLs, headers and payloads."""

    def test_headers_are_installed(self):
        """Test that the common headers are set on the session."""
        _, session = _client()

        assert session.headers["Content-Type"] == "application/json"
        assert session.headers["Accept"] == "application/json"

    def test_connect(self):
        """Test GET /connect."""
        api, session = _client(FakeResponse(payload={"status": "Connected successfully"}))

        assert api.connect()["status"] == "Connected successfully"
        assert session.calls[0][:2] == ("GET", "http://localhost:4000/connect")

    def test_list_nodes(self):
        """Test GET /dump/<nodeType>."""
        api, session = _client(FakeResponse(payload={"nodes": ["imsi-1"]}))

        assert api.list_nodes("ue") == ["imsi-1"]
        assert session.calls[0][1] == "http://localhost:4000/dump/ue"

    def test_list_commands(self):
        """Test GET /commands/<nodeType>."""
        commands = [{"name": "info", "help": "h", "defaultUsage": "u"}]
        api, _ = _client(FakeResponse(payload={"commands": commands}))

        assert api.list_commands("gnb") == commands

    def test_list_commands_null(self):
        """Test that a null command list is empty."""
        api, _ = _client(FakeResponse(payload={"commands": None}))

        assert api.list_commands("gnb") == []

    def test_check_node_exists(self):
        """Test GET /check/<nodeType>/<nodeName>."""
        api, session = _client(FakeResponse(payload={"exists": False}))

        assert api.check_node_exists("ue", "imsi-unknown") is False
        assert session.calls[0][1] == "http://localhost:4000/check/ue/imsi-unknown"

    def test_run_command(self):
        """Test POST /command payload and response."""
        api, session = _client(FakeResponse(payload={"response": "ok"}))

        assert api.run_command("info status", "ue", "imsi-1 imsi-2") == "ok"
        method, url, kwargs = session.calls[0]
        assert (method, url) == ("POST", "http://localhost:4000/command")
        assert kwargs["json"] == {"command": "info status", "nodeType": "ue", "nodeName": "imsi-1 imsi-2"}
        assert kwargs["timeout"] == api.timeout


class TestErrors:
    """Test error handling."""

    def test_server_error_raises(self):
        """Test that an error payload raises ApiError with its text."""
        api, _ = _client(FakeResponse(400, {"error": "Invalid node type"}))

        with pytest.raises(ApiError, match="Invalid node type"):
            api.list_nodes("amf")

    def test_connection_error_raises(self):
        """Test that transport failures raise ApiError."""
        api, _ = _client(requests.ConnectionError("refused"))

        with pytest.raises(ApiError, match="refused"):
            api.connect()

    def test_not_json_raises(self):
        """Test that a non-JSON body raises ApiError."""
        api, _ = _client(FakeResponse(502, text="Bad Gateway"))

        with pytest.raises(ApiError, match="Error decoding response"):
            api.connect()

    def test_http_error_without_message(self):
        """Test that an error status without a message still raises."""
        api, _ = _client(FakeResponse(500, {}))

        with pytest.raises(ApiError, match="HTTP 500"):
            api.connect()

    def test_run_command_returns_error_text(self):
        """Test that run_command returns the error as its response."""
        api, _ = _client(FakeResponse(400, {"error": "Invalid node type"}))

        assert api.run_command("info", "amf", "x") == "Invalid node type"
