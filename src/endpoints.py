"""Endpoint helpers for the NodeSim shell.

This module centralizes how the shell finds the server and builds API
endpoints.

The base URL is resolved in this order:
- an explicit URL passed by the caller (e.g. built from ``--port``),
- the environment variable NODESIM_API_URL, e.g. http://localhost:4000,
- the port saved by a previous ``-p <port>`` run in the `.port` file,
  as http://localhost:<port>.
"""
from typing import Optional
from urllib.parse import quote
import os


ENV_BASE_URL_NAME = "NODESIM_API_URL"
PORT_FILE = ".port"


def save_port(port: int, path: str = PORT_FILE) -> None:
    """Remember ``port`` for later shell runs."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(str(port))


def load_port(path: str = PORT_FILE) -> int:
    """Return the saved port, or 0 if none was saved or it is unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return int(f.read().strip())
    except (OSError, ValueError):
        return 0


def local_url(port: int) -> str:
    return f"http://localhost:{port}"


def get_api_base_url(url: Optional[str] = None, port_file: str = PORT_FILE) -> str:
    """Return the base API URL.

    Args:
        url: Optional explicit base URL.
        port_file: Where a previously saved port is looked up.

    Raises:
        ValueError: if no URL can be found, or if it doesn't look like an
            http(s) URL.
    """
    if url is None:
        url = os.getenv(ENV_BASE_URL_NAME)

    if not url:
        port = load_port(port_file)
        if port > 0:
            url = local_url(port)

    if not url:
        raise ValueError(
            "Not connected to any port. Please use -p <port> first "
            f"or set the environment variable {ENV_BASE_URL_NAME}."
        )

    if not (url.startswith("http://") or url.startswith("https://")):
        raise ValueError(
            "Base API URL must start with http:// or https://; got: " + url
        )

    return url.rstrip("/")


def connect_endpoint(base_url: str) -> str:
    return f"{base_url}/connect"


def dump_endpoint(base_url: str, node_type: Optional[str] = None) -> str:
    if node_type is None:
        return f"{base_url}/dump"
    return f"{base_url}/dump/{quote(node_type, safe='')}"


def commands_endpoint(base_url: str, node_type: str) -> str:
    return f"{base_url}/commands/{quote(node_type, safe='')}"


def check_endpoint(base_url: str, node_type: str, node_name: str) -> str:
    return f"{base_url}/check/{quote(node_type, safe='')}/{quote(node_name, safe='')}"


def command_endpoint(base_url: str) -> str:
    return f"{base_url}/command"


__all__ = [
    "ENV_BASE_URL_NAME",
    "PORT_FILE",
    "save_port",
    "load_port",
    "local_url",
    "get_api_base_url",
    "connect_endpoint",
    "dump_endpoint",
    "commands_endpoint",
    "check_endpoint",
    "command_endpoint",
]
