"""HTTP header helpers for the NodeSim shell.

Every request to the server carries:

- Content-Type: application/json
- Accept: application/json
- User-Agent: nodesim-shell/<version>

The server has no authentication, so no Authorization header is sent.
"""
from typing import Dict, Optional


CLIENT_NAME = "nodesim-shell"
CLIENT_VERSION = "0.1.0"


def get_common_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    """Return the common headers used for HTTP requests.

    Args:
        user_agent: Optional User-Agent override.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": user_agent or f"{CLIENT_NAME}/{CLIENT_VERSION}",
    }


__all__ = ["get_common_headers", "CLIENT_NAME", "CLIENT_VERSION"]
