"""Tests for the shell front-end: command registry and REPL handling."""

import pytest

import main as shell_main
from client import ApiError
from commands import RemoteNodeCommand, ShellRegistry, build_shell_registry
from console import make_completer


class FakeApi:
    """Records run_command calls and answers with canned text."""

    def __init__(self, response="ok", known=("imsi-1", "imsi-2"), commands=()):
        self.response = response
        self.known = set(known)
        self.commands = list(commands)
        self.calls = []

    def run_command(self, command, node_type, node_name):
        self.calls.append((command, node_type, node_name))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def check_node_exists(self, node_type, node_name):
        return node_name in self.known

    def list_commands(self, node_type):
        return self.commands


SUMMARIES = [
    {"name": "info", "help": "Show UE information", "defaultUsage": "Usage: info"},
    {"name": "register", "help": "Register the UE", "defaultUsage": "Usage: register"},
]


@pytest.fixture
def registry():
    return build_shell_registry(SUMMARIES, "ue", ["imsi-1", "imsi-2"])


class TestShellRegistry:
    """Test command registration from definitions."""

    def test_one_command_per_definition(self, registry):
        """Test that each definition becomes a command."""
        assert registry.list_commands() == ["info", "register"]
        assert isinstance(registry.get("info"), RemoteNodeCommand)

    def test_commands_keep_their_own_definition(self, registry):
        """Test that each command carries its own name and help."""
        assert registry.get("info").help_text == "Show UE information"
        assert registry.get("register").help_text == "Register the UE"

    def test_help(self, registry):
        """Test the help listing."""
        text = registry.get_help()

        assert "  info - Show UE information" in text
        assert "  exit - Exit the program" in text

    def test_unknown(self, registry):
        """Test that lookups are exact."""
        assert registry.get("INFO") is None
        assert ShellRegistry().list_commands() == []


class TestRemoteNodeCommand:
    """Test forwarding to the server."""

    def test_forwards_args_and_targets(self, registry, capsys):
        """Test that one request carries the whole line and all targets."""
        api = FakeApi(response="Node imsi-1: a\nNode imsi-2: b\n")

        registry.get("info").execute(api, ["pdu", "internet"])

        assert api.calls == [("info pdu internet", "ue", "imsi-1 imsi-2")]
        assert capsys.readouterr().out == "Node imsi-1: a\nNode imsi-2: b\n"

    def test_bare_command(self, registry):
        """Test that a command without arguments sends its name only."""
        api = FakeApi()

        registry.get("register").execute(api, [])

        assert api.calls[0][0] == "register"

    def test_no_targets(self, capsys):
        """Test that nothing is sent without targets."""
        api = FakeApi()

        RemoteNodeCommand("info", "", "ue", []).execute(api, [])

        assert api.calls == []
        assert "No target nodes" in capsys.readouterr().err


class TestHandleCommand:
    """Test the REPL line handler."""

    def test_blank_line(self, registry):
        """Test that blank lines continue."""
        assert shell_main._handle_command(registry, FakeApi(), "   ") is True

    @pytest.mark.parametrize("line", ["exit", "quit", "q", "EXIT"])
    def test_exit(self, registry, line):
        """Test the exit words."""
        assert shell_main._handle_command(registry, FakeApi(), line) is False

    def test_dispatch(self, registry, capsys):
        """Test that a known command is executed."""
        api = FakeApi(response="Registered imsi-1 with args foo")

        assert shell_main._handle_command(registry, api, "register foo") is True
        assert api.calls == [("register foo", "ue", "imsi-1 imsi-2")]
        assert capsys.readouterr().out.strip() == "Registered imsi-1 with args foo"

    def test_help(self, registry, capsys):
        """Test the help built-in."""
        shell_main._handle_command(registry, FakeApi(), "help")

        assert "Commands:" in capsys.readouterr().out

    def test_configured_help_command(self, capsys):
        """Test that a configured command named help is forwarded, not shadowed."""
        summaries = SUMMARIES + [{"name": "help", "help": "Ask the node for help", "defaultUsage": ""}]
        registry = build_shell_registry(summaries, "ue", ["imsi-1"])
        api = FakeApi(response="node help text")

        assert shell_main._handle_command(registry, api, "help") is True
        assert api.calls == [("help", "ue", "imsi-1")]
        assert capsys.readouterr().out.strip() == "node help text"
        assert registry.get_help().count("  help - ") == 1

    def test_unknown(self, registry, capsys):
        """Test that unknown commands print a diagnostic and the help."""
        assert shell_main._handle_command(registry, FakeApi(), "reboot now") is True

        captured = capsys.readouterr()
        assert "Unknown command: reboot" in captured.err
        assert "Commands:" in captured.out

    def test_api_error(self, registry, capsys):
        """Test that client errors are reported and the loop continues."""
        api = FakeApi(response=ApiError("Error: refused"))

        assert shell_main._handle_command(registry, api, "info") is True
        assert "Error executing info: Error: refused" in capsys.readouterr().err

    def test_no_api(self, registry, capsys):
        """Test the uninitialized API guard."""
        assert shell_main._handle_command(registry, None, "info") is True
        assert "API is not initialized" in capsys.readouterr().err


class TestStartupHelpers:
    """Test target validation and command discovery."""

    def test_known_targets(self, capsys):
        """Test that unknown identities are dropped with a warning."""
        api = FakeApi(known=("imsi-1",))

        assert shell_main._known_targets(api, "ue", ["imsi-1", "imsi-unknown"]) == ["imsi-1"]
        assert "Unknown ue node: imsi-unknown" in capsys.readouterr().err

    def test_summaries_from_server(self):
        """Test that commands come from the server by default."""
        api = FakeApi(commands=SUMMARIES)

        assert shell_main._command_summaries(api, "ue", "") == SUMMARIES

    def test_summaries_from_file(self, config_file):
        """Test that a local file overrides the server."""
        summaries = shell_main._command_summaries(FakeApi(), "gnb", str(config_file))

        assert [s["name"] for s in summaries] == ["status", "cells"]


class TestCompleter:
    """Test readline completion."""

    def test_completes_prefix(self):
        """Test that matches are returned one state at a time."""
        complete = make_completer(["register", "reset", "info"])

        assert complete("re", 0) == "register"
        assert complete("re", 1) == "reset"
        assert complete("re", 2) is None
        assert complete("x", 0) is None
