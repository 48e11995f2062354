"""Base shell command class and registry."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from client import NodeSimClient


class BaseCommand(ABC):
    """Base class for all shell commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name as typed in the shell (e.g., 'register')."""
        pass

    @property
    @abstractmethod
    def help_text(self) -> str:
        """Brief help text for the command."""
        pass

    @abstractmethod
    def execute(self, api: NodeSimClient, args: List[str]) -> None:
        """Execute the command.

        Args:
            api: NodeSimClient instance
            args: List of command arguments (not including command name)
        """
        pass


class ShellRegistry:
    """Registry for the commands available in one shell session."""

    def __init__(self):
        self._commands: Dict[str, BaseCommand] = {}

    def register(self, command: BaseCommand) -> None:
        """Register a command; a later command with the same name wins."""
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[BaseCommand]:
        """Get a command by name."""
        return self._commands.get(name)

    def list_commands(self) -> List[str]:
        """Get list of all command names, in registration order."""
        return list(self._commands.keys())

    def get_help(self) -> str:
        """Get help text for all commands."""
        lines = ["Commands:"]
        for name in self.list_commands():
            cmd = self._commands[name]
            lines.append(f"  {name} - {cmd.help_text}")
        if "help" not in self._commands:
            lines.append("  help - Display help")
        lines.append("  exit - Exit the program")
        return "\n".join(lines)
