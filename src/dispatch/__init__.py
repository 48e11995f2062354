"""Command dispatch engine.

Resolves a typed command line against the declarative command definitions of
a node type and renders the canned response for one or many target nodes:

- spec: command definitions and their loading from JSON
- render: ``${nodeName}`` / ``${argN}`` substitution
- registry: validated index of definitions per node type
- tree: resolution of ``[command, *args]`` to an outcome
- specialized: hooks for commands with their own behavior (timed register)
- directory: known node identities
- broadcast: concurrent fan-out with caller-ordered aggregation
- context: the per-process dispatch context and its atomic reload
"""

from .broadcast import BroadcastExecutor
from .context import ContextHolder, DispatchContext, build_context
from .directory import NodeDirectory, StaticNodeDirectory
from .errors import ConfigError, DispatchError, UnknownNodeType
from .registry import CommandRegistry
from .render import render_response
from .spec import (
    CommandConfig,
    CommandSpec,
    NodeType,
    SubcommandSpec,
    load_command_config,
    parse_command_config,
)
from .specialized import SpecializedCommand, TimedRegistration
from .tree import CommandTree, Outcome, Resolution, ResolvedInvocation

__all__ = [
    "BroadcastExecutor",
    "ContextHolder",
    "DispatchContext",
    "build_context",
    "NodeDirectory",
    "StaticNodeDirectory",
    "ConfigError",
    "DispatchError",
    "UnknownNodeType",
    "CommandRegistry",
    "render_response",
    "CommandConfig",
    "CommandSpec",
    "NodeType",
    "SubcommandSpec",
    "load_command_config",
    "parse_command_config",
    "SpecializedCommand",
    "TimedRegistration",
    "CommandTree",
    "Outcome",
    "Resolution",
    "ResolvedInvocation",
]
