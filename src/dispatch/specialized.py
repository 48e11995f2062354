"""Specialized commands: behaviors that bypass subcommand/template resolution.

A specialized command is attached to a command name of one node type. The
command tree asks it first; if ``accepts`` returns True the generic
subcommand lookup is skipped and ``execute`` produces the response.
"""
from __future__ import annotations

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

from .spec import NodeType


log = logging.getLogger(__name__)

DEFAULT_MAX_WAIT_MS = 10000

_INTEGER = re.compile(r"[+-]?[0-9]+")


class SpecializedCommand(ABC):
    """Base class for all specialized commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name this behavior is attached to."""
        pass

    @property
    @abstractmethod
    def node_type(self) -> NodeType:
        """Node type the command belongs to."""
        pass

    @abstractmethod
    def accepts(self, args: Sequence[str]) -> bool:
        """Return True if this behavior handles ``args``.

        Args:
            args: Arguments after the command name.
        """
        pass

    @abstractmethod
    def execute(self, node_name: str, args: Sequence[str]) -> str:
        """Run the command for one node and return the response text."""
        pass


def _parse_register_args(args: Sequence[str]) -> Tuple[int, List[str]]:
    """Return (wait_ms, amfs) from ``-h <ms>`` and repeated ``--amf <name>``.

    A ``-h`` value that is not a plain ASCII integer (optional sign, digits
    only) is ignored.
    """
    wait_ms = 0
    amfs: List[str] = []
    i = 0
    while i < len(args):
        token = args[i]
        if token == "-h" and i + 1 < len(args):
            if _INTEGER.fullmatch(args[i + 1]):
                wait_ms = int(args[i + 1])
                i += 1
        elif token == "--amf" and i + 1 < len(args):
            amfs.append(args[i + 1])
            i += 1
        i += 1
    return wait_ms, amfs


class TimedRegistration(SpecializedCommand):
    """``register -h <ms> --amf <name> [--amf <name> ...]`` for UEs.

    Sleeps for the requested time, capped at ``max_wait_ms``, then reports
    the registration.
    """

    def __init__(
        self,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.max_wait_ms = max_wait_ms
        self._sleep = sleep or time.sleep

    @property
    def name(self) -> str:
        return "register"

    @property
    def node_type(self) -> NodeType:
        return NodeType.UE

    def accepts(self, args: Sequence[str]) -> bool:
        if len(args) < 2:
            return False
        wait_ms, amfs = _parse_register_args(args)
        return wait_ms > 0 and bool(amfs)

    def execute(self, node_name: str, args: Sequence[str]) -> str:
        wait_ms, amfs = _parse_register_args(args)
        lines = [f"Waiting ... {wait_ms} mili seconds"]

        actual_ms = wait_ms
        if actual_ms > self.max_wait_ms:
            actual_ms = self.max_wait_ms
            lines.append(f"Note: Wait time limited to {self.max_wait_ms} ms for API safety")
            log.info("Registration wait for %s clamped from %d ms to %d ms", node_name, wait_ms, actual_ms)

        self._sleep(actual_ms / 1000.0)

        lines.append(f"Done registration for UE {node_name} to {' '.join(amfs)}")
        return "\n".join(lines)


def default_specialized_commands(max_wait_ms: int = DEFAULT_MAX_WAIT_MS) -> List[SpecializedCommand]:
    return [TimedRegistration(max_wait_ms=max_wait_ms)]


__all__ = [
    "DEFAULT_MAX_WAIT_MS",
    "SpecializedCommand",
    "TimedRegistration",
    "default_specialized_commands",
]
