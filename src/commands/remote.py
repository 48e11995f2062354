"""Shell commands that forward to the server for a set of target nodes.

One RemoteNodeCommand is registered per command definition of the node type.
The command line is sent once with all targets; the server fans it out and
returns the aggregated text.
"""

import sys
from typing import Iterable, List, Mapping, Sequence

from client import NodeSimClient
from commands.base import BaseCommand, ShellRegistry


class RemoteNodeCommand(BaseCommand):
    def __init__(self, name: str, help_text: str, node_type: str, targets: Sequence[str]):
        self._name = name
        self._help_text = help_text
        self.node_type = node_type
        self.targets = tuple(targets)

    @property
    def name(self) -> str:
        return self._name

    @property
    def help_text(self) -> str:
        return self._help_text

    def command_line(self, args: List[str]) -> str:
        return " ".join([self._name, *args])

    def execute(self, api: NodeSimClient, args: List[str]) -> None:
        if not self.targets:
            print(f"No target nodes; cannot run {self._name}.", file=sys.stderr)
            return
        response = api.run_command(self.command_line(args), self.node_type, " ".join(self.targets))
        print(response.rstrip("\n"))


def remote_command(summary: Mapping[str, str], node_type: str, targets: Sequence[str]) -> RemoteNodeCommand:
    """Build the shell command for one ``{name, help, defaultUsage}`` entry."""
    return RemoteNodeCommand(
        name=summary["name"],
        help_text=summary.get("help") or "",
        node_type=node_type,
        targets=targets,
    )


def build_shell_registry(
    summaries: Iterable[Mapping[str, str]],
    node_type: str,
    targets: Sequence[str],
) -> ShellRegistry:
    registry = ShellRegistry()
    for summary in summaries:
        registry.register(remote_command(summary, node_type, targets))
    return registry


__all__ = ["RemoteNodeCommand", "remote_command", "build_shell_registry"]
