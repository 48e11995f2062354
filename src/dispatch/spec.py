"""Command definitions loaded from the configuration source.

The configuration is a JSON document shaped like::

    {
      "ue":  {"commands": [...]},
      "gnb": {"commands": [...]}
    }

where each command is ``{name, help, defaultUsage, subcommands}`` and each
subcommand is ``{name, help, response}``. Everything here is immutable once
built; a changed file means building a new CommandConfig.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from .errors import ConfigError, UnknownNodeType


DEFAULT_SUBCOMMAND = "default"


class NodeType(Enum):
    UE = "ue"
    GNB = "gnb"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "NodeType | str") -> "NodeType":
        """Return the NodeType for ``value`` or raise UnknownNodeType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownNodeType(str(value)) from None


_LABELS = {NodeType.UE: "User Equipment", NodeType.GNB: "gNodeB"}


@dataclass(frozen=True)
class SubcommandSpec:
    name: str
    help: str
    response: str

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_SUBCOMMAND


@dataclass(frozen=True)
class CommandSpec:
    name: str
    help: str
    default_usage: str
    subcommands: Tuple[SubcommandSpec, ...] = ()

    def summary(self) -> Dict[str, str]:
        """Wire form used by the command listing."""
        return {"name": self.name, "help": self.help, "defaultUsage": self.default_usage}


@dataclass(frozen=True)
class CommandConfig:
    ue: Tuple[CommandSpec, ...] = ()
    gnb: Tuple[CommandSpec, ...] = ()

    def commands_for(self, node_type: NodeType) -> Tuple[CommandSpec, ...]:
        return self.ue if node_type is NodeType.UE else self.gnb


def _string_field(raw: Mapping[str, Any], key: str, where: str) -> str:
    value = raw.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{where}: field '{key}' must be a string")
    return value


def _parse_subcommand(raw: Any, where: str) -> SubcommandSpec:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}: subcommand must be an object")
    return SubcommandSpec(
        name=_string_field(raw, "name", where),
        help=_string_field(raw, "help", where),
        response=_string_field(raw, "response", where),
    )


def _parse_command(raw: Any, where: str) -> CommandSpec:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}: command must be an object")
    name = _string_field(raw, "name", where)
    if not name.strip():
        raise ConfigError(f"{where}: command name must not be empty")
    where = f"{where} '{name}'"

    raw_subs = raw.get("subcommands") or []
    if not isinstance(raw_subs, list):
        raise ConfigError(f"{where}: 'subcommands' must be a list")
    subs = tuple(_parse_subcommand(s, where) for s in raw_subs)
    if sum(1 for s in subs if s.is_default) > 1:
        raise ConfigError(f"{where}: more than one '{DEFAULT_SUBCOMMAND}' subcommand")

    return CommandSpec(
        name=name,
        help=_string_field(raw, "help", where),
        default_usage=_string_field(raw, "defaultUsage", where),
        subcommands=subs,
    )


def _parse_section(data: Mapping[str, Any], node_type: NodeType) -> Tuple[CommandSpec, ...]:
    section = data.get(node_type.value)
    if section is None:
        return ()
    if not isinstance(section, Mapping):
        raise ConfigError(f"section '{node_type.value}' must be an object")
    raw_commands = section.get("commands") or []
    if not isinstance(raw_commands, list):
        raise ConfigError(f"section '{node_type.value}': 'commands' must be a list")

    commands = []
    seen = set()
    for i, raw in enumerate(raw_commands):
        cmd = _parse_command(raw, f"{node_type.value} command #{i + 1}")
        if cmd.name in seen:
            raise ConfigError(f"duplicate command '{cmd.name}' for node type '{node_type.value}'")
        seen.add(cmd.name)
        commands.append(cmd)
    return tuple(commands)


def parse_command_config(data: Any) -> CommandConfig:
    """Validate decoded configuration data and build a CommandConfig.

    Raises:
        ConfigError: if the data does not have the expected shape, a command
            name is empty or duplicated within a node type, or a command
            declares more than one ``default`` subcommand.
    """
    if not isinstance(data, Mapping):
        raise ConfigError("command configuration must be a JSON object")
    return CommandConfig(
        ue=_parse_section(data, NodeType.UE),
        gnb=_parse_section(data, NodeType.GNB),
    )


def load_command_config(path: str) -> CommandConfig:
    """Read and parse the command configuration file at ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigError(f"error reading config file: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"error parsing config file: {exc}") from exc
    return parse_command_config(data)


__all__ = [
    "DEFAULT_SUBCOMMAND",
    "NodeType",
    "SubcommandSpec",
    "CommandSpec",
    "CommandConfig",
    "parse_command_config",
    "load_command_config",
]
