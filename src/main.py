#!/usr/bin/env python3
"""NodeSim shell - Main entry point."""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

from client import ApiError, NodeSimClient
from commands import ShellRegistry, build_shell_registry
from console import init_readline, read_command
from dispatch import ConfigError, NodeType, load_command_config
from endpoints import get_api_base_url, local_url, save_port


PROMPT = ">>> "
NODE_LABELS = {"ue": "UE(s)", "gnb": "gNodeB(s)"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive shell for simulated UE and gNodeB nodes")
    parser.add_argument("-p", "--port", type=int, default=0, help="connect to the server on this port and remember it")
    parser.add_argument("--dump", action="store_true", help="list all UEs and gNodeBs")
    parser.add_argument("-ue", dest="ue", default="", help="connect to UE node(s), space-separated")
    parser.add_argument("-gnb", dest="gnb", default="", help="connect to gNodeB node(s), space-separated")
    parser.add_argument("-c", "--config", default="", help="load commands from a JSON configuration file")
    return parser


def _connect(port: int) -> int:
    """Check the server on ``port`` and remember it. Returns an exit status."""
    api = NodeSimClient(local_url(port))
    try:
        api.connect()
    except ApiError as exc:
        print(f"Error connecting to server: {exc}", file=sys.stderr)
        return 1
    try:
        save_port(port)
    except OSError as exc:
        print(f"Error saving port: {exc}", file=sys.stderr)
        return 1
    print(f"Connected to port {port} successfully")
    return 0


def _print_dump(api: NodeSimClient) -> int:
    try:
        nodes = api.dump()
    except ApiError as exc:
        print(exc, file=sys.stderr)
        return 1
    for node_type in ("ue", "gnb"):
        print(f"{NODE_LABELS[node_type]}:")
        for name in nodes.get(node_type, []):
            print(f"  {name}")
    return 0


def _command_summaries(api: NodeSimClient, node_type: str, config_path: str) -> List[dict]:
    """Command definitions from the local file when given, else from the server."""
    if config_path:
        config = load_command_config(config_path)
        return [cmd.summary() for cmd in config.commands_for(NodeType(node_type))]
    return api.list_commands(node_type)


def _known_targets(api: NodeSimClient, node_type: str, names: List[str]) -> List[str]:
    known = []
    for name in names:
        if api.check_node_exists(node_type, name):
            known.append(name)
        else:
            print(f"Unknown {node_type} node: {name}", file=sys.stderr)
    return known


def _handle_command(registry: ShellRegistry, api: Optional[NodeSimClient], line: str) -> bool:
    """Handle a command line input.

    Returns:
        False to exit the loop, True to continue.
    """
    line = line.strip()
    if not line:
        return True

    if line.lower() in {"exit", "quit", "q"}:
        return False

    parts = line.split()
    cmd_name = parts[0]
    args = parts[1:]

    command = registry.get(cmd_name)
    if command is None and cmd_name == "help":
        print(registry.get_help())
        return True

    if command:
        if api is None:
            print(f"API is not initialized; cannot run {cmd_name}.", file=sys.stderr)
            return True
        try:
            command.execute(api, args)
        except ApiError as exc:
            print(f"Error executing {cmd_name}: {exc}", file=sys.stderr)
        return True

    print(f"Unknown command: {cmd_name}", file=sys.stderr)
    print(registry.get_help())
    return True


def run_shell(registry: ShellRegistry, api: NodeSimClient) -> None:
    """Read and dispatch command lines until exit or EOF."""
    init_readline(commands=registry.list_commands() + ["help", "exit"])
    print("Type 'help' for available commands")

    while True:
        try:
            line = read_command(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting...")
            break
        if not _handle_command(registry, api, line):
            break


def main(argv=None):
    """Main application entry point."""
    load_dotenv()
    args = _build_parser().parse_args(argv)

    if args.port > 0:
        sys.exit(_connect(args.port))

    try:
        api = NodeSimClient(get_api_base_url())
    except ValueError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    if args.dump:
        sys.exit(_print_dump(api))

    if args.ue:
        node_type, requested = "ue", args.ue.split()
    elif args.gnb:
        node_type, requested = "gnb", args.gnb.split()
    else:
        print("Usage: main.py -ue <ue-name> or main.py -gnb <gnb-name>", file=sys.stderr)
        sys.exit(1)

    try:
        targets = _known_targets(api, node_type, requested)
        summaries = _command_summaries(api, node_type, args.config)
    except (ApiError, ConfigError) as exc:
        print(f"Error loading commands: {exc}", file=sys.stderr)
        sys.exit(1)

    if not targets:
        print("No known nodes to connect to; exiting...", file=sys.stderr)
        sys.exit(1)

    registry = build_shell_registry(summaries, node_type, targets)
    print(f"Connected to {NODE_LABELS[node_type]}: {', '.join(targets)}")
    run_shell(registry, api)


if __name__ == "__main__":
    main()
