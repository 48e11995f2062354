"""Shell command system for the NodeSim shell.

Each command is a class that inherits from BaseCommand and implements:
- name: command name (e.g., "register")
- help_text: brief description
- execute(api, args): run the command logic

Node commands are not written by hand: one RemoteNodeCommand is built per
command definition the server (or a local configuration file) declares.
"""

from .base import BaseCommand, ShellRegistry
from .remote import RemoteNodeCommand, build_shell_registry, remote_command

__all__ = ["BaseCommand", "ShellRegistry", "RemoteNodeCommand", "build_shell_registry", "remote_command"]
