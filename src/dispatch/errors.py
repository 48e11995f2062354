"""Error types raised by the dispatch engine.

Only configuration and node-type problems are exceptions. Command resolution
problems (unknown command, invalid subcommand) are plain response text.
"""


class DispatchError(Exception):
    """Base class for dispatch engine errors."""


class ConfigError(ValueError, DispatchError):
    """The command configuration could not be read, parsed or validated."""


class UnknownNodeType(DispatchError):
    """A node type other than ``ue`` or ``gnb`` was requested."""

    def __init__(self, value: str):
        super().__init__("Invalid node type")
        self.value = value


__all__ = ["DispatchError", "ConfigError", "UnknownNodeType"]
