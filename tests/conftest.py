"""Pytest configuration and fixtures for NodeSim tests."""

import json
import pytest
import tempfile
from pathlib import Path

from dispatch import CommandRegistry, DispatchContext, StaticNodeDirectory, parse_command_config
from dispatch.spec import NodeType
from dispatch.specialized import TimedRegistration


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_data():
    """Command configuration as decoded JSON."""
    return {
        "ue": {
            "commands": [
                {
                    "name": "register",
                    "help": "Register the UE",
                    "defaultUsage": "Usage: register <args>",
                    "subcommands": [
                        {"name": "default", "help": "any", "response": "Registered ${nodeName} with args ${arg1}"},
                    ],
                },
                {
                    "name": "info",
                    "help": "Show UE information",
                    "defaultUsage": "Usage: info <status|pdu>",
                    "subcommands": [
                        {"name": "status", "help": "status", "response": "UE ${nodeName} is up"},
                        {"name": "pdu", "help": "pdu", "response": "PDU ${arg1} on ${nodeName} (${arg2})"},
                    ],
                },
            ]
        },
        "gnb": {
            "commands": [
                {
                    "name": "status",
                    "help": "Show gNodeB status",
                    "defaultUsage": "",
                    "subcommands": [],
                },
                {
                    "name": "cells",
                    "help": "Served cells",
                    "defaultUsage": "Usage: cells <list>",
                    "subcommands": [
                        {"name": "list", "help": "list", "response": "${nodeName}: cell-1"},
                    ],
                },
            ]
        },
    }


@pytest.fixture
def config(config_data):
    return parse_command_config(config_data)


@pytest.fixture
def config_file(temp_dir, config_data):
    """Write the sample configuration to a JSON file."""
    path = temp_dir / "command.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_data, f, indent=2)
    return path


class RecordingSleep:
    """Stand-in for time.sleep that records requested durations."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def directory():
    return StaticNodeDirectory(
        {
            NodeType.UE: ["imsi-1", "imsi-2"],
            NodeType.GNB: ["gnb-A", "gnb-B", "gnb-C"],
        }
    )


@pytest.fixture
def context(config, directory, fake_sleep):
    """Dispatch context whose timed registration does not really sleep."""
    return DispatchContext(
        CommandRegistry(config),
        directory=directory,
        specialized=[TimedRegistration(max_wait_ms=10000, sleep=fake_sleep)],
    )
