"""Dispatch context: everything a request needs, built once and never mutated.

Reloading builds a new DispatchContext and swaps it into the ContextHolder;
in-flight requests keep using the snapshot they started with.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from .broadcast import BroadcastExecutor
from .directory import NodeDirectory, StaticNodeDirectory
from .registry import CommandRegistry
from .spec import CommandConfig, NodeType, load_command_config
from .specialized import SpecializedCommand, default_specialized_commands
from .tree import CommandTree


log = logging.getLogger(__name__)

CONNECT_STATUS = "Connected successfully"


class DispatchContext:
    """Command registry, node directory and per-type command trees."""

    def __init__(
        self,
        registry: CommandRegistry,
        directory: Optional[NodeDirectory] = None,
        specialized: Optional[Iterable[SpecializedCommand]] = None,
        executor: Optional[BroadcastExecutor] = None,
    ):
        self.registry = registry
        self.directory = directory or StaticNodeDirectory()
        self.executor = executor or BroadcastExecutor()
        hooks = list(default_specialized_commands() if specialized is None else specialized)
        self._trees: Dict[NodeType, CommandTree] = {
            nt: CommandTree(nt, registry.commands_for(nt), hooks) for nt in NodeType
        }

    @classmethod
    def from_config(cls, config: CommandConfig, **kwargs: Any) -> "DispatchContext":
        return cls(CommandRegistry(config), **kwargs)

    def tree(self, node_type: NodeType | str) -> CommandTree:
        return self._trees[NodeType.parse(node_type)]

    def connect(self) -> Dict[str, Any]:
        return {
            "status": CONNECT_STATUS,
            "objects": {nt.value: nt.label for nt in NodeType},
        }

    def list_nodes(self, node_type: NodeType | str) -> List[str]:
        return list(self.directory.list_all(node_type))

    def list_commands(self, node_type: NodeType | str) -> List[Dict[str, str]]:
        return [cmd.summary() for cmd in self.registry.commands_for(node_type)]

    def check_node_exists(self, node_type: NodeType | str, identity: str) -> bool:
        return self.directory.exists(node_type, identity)

    def run_command(self, command: str, node_type: NodeType | str, node_name: str) -> str:
        """Resolve ``command`` for ``node_type`` and render it for the targets.

        ``node_name`` may be a whitespace-separated list of identities; more
        than one identity broadcasts the command.

        Raises:
            UnknownNodeType: if ``node_type`` is neither ``ue`` nor ``gnb``.
        """
        tree = self.tree(node_type)
        resolution = tree.resolve_line(command)
        targets = node_name.split()
        log.debug(
            "run %r on %s %s -> %s",
            command,
            tree.node_type.value,
            targets,
            resolution.outcome.value,
        )
        if not targets:
            return resolution.for_target("").render()
        return self.executor.run(resolution, targets)


class ContextHolder:
    """Holds the live DispatchContext; ``swap`` replaces it atomically."""

    def __init__(self, context: DispatchContext):
        self._lock = threading.Lock()
        self._context = context

    @property
    def current(self) -> DispatchContext:
        with self._lock:
            return self._context

    def swap(self, context: DispatchContext) -> DispatchContext:
        """Install ``context`` and return the one it replaced."""
        with self._lock:
            previous, self._context = self._context, context
        return previous

    def reload(self, build: Callable[[], DispatchContext]) -> DispatchContext:
        """Build a new context and install it.

        If ``build`` raises, the current context stays in place.
        """
        context = build()
        self.swap(context)
        log.info("Dispatch context reloaded: %s", context.registry.counts())
        return context


def build_context(
    config_path: str,
    directory: Optional[NodeDirectory] = None,
    max_wait_ms: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> DispatchContext:
    """Load ``config_path`` and build a context around it."""
    config = load_command_config(config_path)
    specialized = None
    if max_wait_ms is not None:
        specialized = default_specialized_commands(max_wait_ms)
    executor = BroadcastExecutor(max_workers) if max_workers is not None else None
    return DispatchContext.from_config(
        config,
        directory=directory,
        specialized=specialized,
        executor=executor,
    )


__all__ = ["CONNECT_STATUS", "DispatchContext", "ContextHolder", "build_context"]
