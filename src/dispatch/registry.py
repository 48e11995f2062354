"""Validated, indexed command definitions per node type."""
from __future__ import annotations

import logging
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .spec import CommandConfig, CommandSpec, NodeType, parse_command_config


log = logging.getLogger(__name__)


class _State(NamedTuple):
    config: CommandConfig
    index: Dict[NodeType, Dict[str, CommandSpec]]


def _build_state(config: CommandConfig) -> _State:
    index = {nt: {cmd.name: cmd for cmd in config.commands_for(nt)} for nt in NodeType}
    return _State(config, index)


class CommandRegistry:
    """Index of CommandSpec by node type and name.

    ``load`` builds the new index first and then replaces the previous one in
    a single assignment, so readers see either the old or the new content and
    a failed load leaves the registry untouched.
    """

    def __init__(self, config: Optional[CommandConfig] = None):
        self._state = _build_state(config or CommandConfig())

    @classmethod
    def from_data(cls, data: Any) -> "CommandRegistry":
        """Build a registry from decoded JSON data."""
        return cls(parse_command_config(data))

    def load(self, config: CommandConfig) -> None:
        """Replace the registry content with ``config``."""
        self._state = _build_state(config)
        log.debug("Registry loaded: %s", self.counts())

    @property
    def config(self) -> CommandConfig:
        return self._state.config

    def commands_for(self, node_type: NodeType | str) -> Tuple[CommandSpec, ...]:
        """Return the ordered command definitions for ``node_type``."""
        return self._state.config.commands_for(NodeType.parse(node_type))

    def lookup(self, node_type: NodeType | str, name: str) -> Optional[CommandSpec]:
        """Return the named command for ``node_type``, or None."""
        return self._state.index[NodeType.parse(node_type)].get(name)

    def counts(self) -> Dict[str, int]:
        config = self._state.config
        return {nt.value: len(config.commands_for(nt)) for nt in NodeType}


__all__ = ["CommandRegistry"]
