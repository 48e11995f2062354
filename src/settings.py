"""Server settings resolved from the environment.

Variables (a `.env` file is honored through python-dotenv at startup):
- NODESIM_HOST: interface to bind, default 0.0.0.0
- NODESIM_PORT: port to listen on, default 4000
- NODESIM_COMMANDS_FILE: command configuration JSON, default command.json
- NODESIM_REGISTER_MAX_WAIT_MS: cap for the timed registration wait
- NODESIM_BROADCAST_WORKERS: optional ceiling on worker threads per broadcast;
  unset means one worker per target
- NODESIM_UE_NODES / NODESIM_GNB_NODES: whitespace-separated seed identities
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import os

from dispatch.directory import SEED_NODES
from dispatch.spec import NodeType
from dispatch.specialized import DEFAULT_MAX_WAIT_MS


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4000
DEFAULT_COMMANDS_FILE = "command.json"


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val


def _parse_int_env(name: str, default: Optional[int]) -> Optional[int]:
    val = _get_env(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer; got: {val}")


def _parse_nodes_env(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    val = _get_env(name)
    if val is None:
        return default
    return tuple(val.split())


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    commands_file: str = DEFAULT_COMMANDS_FILE
    register_max_wait_ms: int = DEFAULT_MAX_WAIT_MS
    broadcast_workers: Optional[int] = None
    nodes: Dict[NodeType, Tuple[str, ...]] = field(default_factory=lambda: dict(SEED_NODES))


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Raises:
        ValueError: if a numeric variable is not an integer or is below 1.
    """
    settings = Settings(
        host=_get_env("NODESIM_HOST", DEFAULT_HOST),  # type: ignore[arg-type]
        port=_parse_int_env("NODESIM_PORT", DEFAULT_PORT),
        commands_file=_get_env("NODESIM_COMMANDS_FILE", DEFAULT_COMMANDS_FILE),  # type: ignore[arg-type]
        register_max_wait_ms=_parse_int_env("NODESIM_REGISTER_MAX_WAIT_MS", DEFAULT_MAX_WAIT_MS),
        broadcast_workers=_parse_int_env("NODESIM_BROADCAST_WORKERS", None),
        nodes={
            NodeType.UE: _parse_nodes_env("NODESIM_UE_NODES", SEED_NODES[NodeType.UE]),
            NodeType.GNB: _parse_nodes_env("NODESIM_GNB_NODES", SEED_NODES[NodeType.GNB]),
        },
    )
    if settings.register_max_wait_ms < 1:
        raise ValueError("NODESIM_REGISTER_MAX_WAIT_MS must be at least 1")
    if settings.broadcast_workers is not None and settings.broadcast_workers < 1:
        raise ValueError("NODESIM_BROADCAST_WORKERS must be at least 1")
    return settings


__all__ = ["Settings", "load_settings", "DEFAULT_HOST", "DEFAULT_PORT", "DEFAULT_COMMANDS_FILE"]
