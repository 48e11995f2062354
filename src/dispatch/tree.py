"""Resolution of a command line against one node type's command definitions.

``CommandTree.resolve(args)`` turns ``[commandName, *rest]`` into a
Resolution. A Resolution does not depend on the target node, so it is
resolved once and then bound to each target with ``for_target``; the
resulting ResolvedInvocation renders the final text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .render import render_response
from .spec import DEFAULT_SUBCOMMAND, CommandSpec, NodeType, SubcommandSpec
from .specialized import SpecializedCommand


EMPTY_COMMAND = "Empty command"


class Outcome(Enum):
    EMPTY = "empty"
    UNKNOWN = "unknown"
    USAGE = "usage"
    LITERAL = "literal"
    DEFAULT = "default"
    INVALID = "invalid"
    SPECIALIZED = "specialized"


@dataclass(frozen=True)
class ResolvedInvocation:
    """A resolution bound to one target node."""

    resolution: "Resolution"
    target: str

    @property
    def template(self) -> Optional[str]:
        sub = self.resolution.subcommand
        return sub.response if sub is not None else None

    @property
    def args(self) -> Tuple[str, ...]:
        return self.resolution.render_args

    def render(self) -> str:
        res = self.resolution
        if res.outcome is Outcome.SPECIALIZED:
            return res.handler.execute(self.target, res.args)  # type: ignore[union-attr]
        template = self.template
        if template is not None:
            return render_response(template, self.target, self.args)
        return res.text


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a command line, independent of the target.

    ``args`` are the arguments after the command name, so ``args[0]`` is the
    subcommand token.
    """

    outcome: Outcome
    command: str = ""
    args: Tuple[str, ...] = ()
    text: str = ""
    subcommand: Optional[SubcommandSpec] = None
    handler: Optional[SpecializedCommand] = field(default=None, compare=False)

    @property
    def render_args(self) -> Tuple[str, ...]:
        """Argument list handed to the renderer.

        Index 0 is always the matched subcommand name. A literal match already
        has it as the first token; a ``default`` match gets it prepended, so
        ``${arg1}`` is the first token the caller typed.
        """
        if self.outcome is Outcome.DEFAULT:
            return (DEFAULT_SUBCOMMAND,) + self.args
        return self.args

    def for_target(self, target: str) -> ResolvedInvocation:
        return ResolvedInvocation(self, target)


_Handler = Callable[[Tuple[str, ...]], Resolution]


def _command_handler(spec: CommandSpec) -> _Handler:
    """Build the resolver for one command; it closes over its own ``spec``."""
    default = next((s for s in spec.subcommands if s.is_default), None)

    def handle(args: Tuple[str, ...]) -> Resolution:
        # without a usage string a bare command falls through to ``default``
        if not args and spec.default_usage:
            return Resolution(Outcome.USAGE, spec.name, args, text=spec.default_usage)
        for sub in spec.subcommands:
            if args and sub.name == args[0]:
                return Resolution(Outcome.LITERAL, spec.name, args, subcommand=sub)
        if default is not None:
            return Resolution(Outcome.DEFAULT, spec.name, args, subcommand=default)
        return Resolution(Outcome.INVALID, spec.name, args, text=f"Invalid subcommand for {spec.name}")

    return handle


def _specialized_handler(hook: SpecializedCommand, fallback: Optional[_Handler]) -> _Handler:
    def handle(args: Tuple[str, ...]) -> Resolution:
        if hook.accepts(args):
            return Resolution(Outcome.SPECIALIZED, hook.name, args, handler=hook)
        if fallback is None:
            return Resolution(Outcome.UNKNOWN, hook.name, args, text=f"Unknown command: {hook.name}")
        return fallback(args)

    return handle


class CommandTree:
    """Invocable commands for one node type."""

    def __init__(
        self,
        node_type: NodeType,
        commands: Iterable[CommandSpec],
        specialized: Iterable[SpecializedCommand] = (),
    ):
        self.node_type = node_type
        self._handlers: Dict[str, _Handler] = {}
        for spec in commands:
            self._handlers[spec.name] = _command_handler(spec)
        for hook in specialized:
            if hook.node_type is node_type:
                self._handlers[hook.name] = _specialized_handler(hook, self._handlers.get(hook.name))

    def names(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def resolve(self, argv: Sequence[str]) -> Resolution:
        """Resolve ``[commandName, *rest]``.

        Never raises for user input: empty lines, unknown commands and invalid
        subcommands all resolve to a textual outcome.
        """
        if not argv:
            return Resolution(Outcome.EMPTY, text=EMPTY_COMMAND)
        name, rest = argv[0], tuple(argv[1:])
        handler = self._handlers.get(name)
        if handler is None:
            return Resolution(Outcome.UNKNOWN, name, rest, text=f"Unknown command: {name}")
        return handler(rest)

    def resolve_line(self, line: str) -> Resolution:
        return self.resolve(line.split())


__all__ = [
    "EMPTY_COMMAND",
    "Outcome",
    "Resolution",
    "ResolvedInvocation",
    "CommandTree",
]
