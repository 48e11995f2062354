"""HTTP client for the NodeSim server."""

from typing import Any, Dict, List, Optional

import requests

from endpoints import (
    check_endpoint,
    command_endpoint,
    commands_endpoint,
    connect_endpoint,
    dump_endpoint,
)
from http_headers import get_common_headers


DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """The server could not be reached or answered with an error."""


class NodeSimClient:
    """Thin wrapper over the server's JSON API."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(get_common_headers())

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"Error: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            raise ApiError(f"Error decoding response: HTTP {resp.status_code}")

        if not isinstance(data, dict):
            raise ApiError(f"Error decoding response: unexpected payload {data!r}")
        if data.get("error"):
            raise ApiError(str(data["error"]))
        if resp.status_code >= 400:
            raise ApiError(f"HTTP {resp.status_code}")
        return data

    def connect(self) -> Dict[str, Any]:
        return self._request("GET", connect_endpoint(self.base_url))

    def dump(self) -> Dict[str, List[str]]:
        """Return all node identities keyed by node type."""
        return self._request("GET", dump_endpoint(self.base_url))

    def list_nodes(self, node_type: str) -> List[str]:
        return list(self._request("GET", dump_endpoint(self.base_url, node_type)).get("nodes") or [])

    def list_commands(self, node_type: str) -> List[Dict[str, str]]:
        return list(self._request("GET", commands_endpoint(self.base_url, node_type)).get("commands") or [])

    def check_node_exists(self, node_type: str, node_name: str) -> bool:
        data = self._request("GET", check_endpoint(self.base_url, node_type, node_name))
        return bool(data.get("exists"))

    def run_command(self, command: str, node_type: str, node_name: str) -> str:
        """Send a command line for one or more nodes and return the response text.

        ``node_name`` may list several identities separated by spaces. Errors
        are returned as the response text, the way the shell displays them.
        """
        payload = {"command": command, "nodeType": node_type, "nodeName": node_name}
        try:
            data = self._request("POST", command_endpoint(self.base_url), json=payload)
        except ApiError as exc:
            return str(exc)
        return str(data.get("response", ""))


__all__ = ["ApiError", "NodeSimClient", "DEFAULT_TIMEOUT"]
