#!/usr/bin/env python3
"""NodeSim server - HTTP front of the dispatch engine."""

import argparse
import logging
import sys
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from dispatch import ConfigError, ContextHolder, DispatchContext, StaticNodeDirectory, UnknownNodeType, build_context
from settings import Settings, load_settings


log = logging.getLogger(__name__)

COMMAND_FIELDS = ("command", "nodeType", "nodeName")


def _parse_command_request(body) -> dict:
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    for name in COMMAND_FIELDS:
        value = body.get(name)
        if not isinstance(value, str) or not value:
            raise ValueError(f"field '{name}' is required")
    return {name: body[name] for name in COMMAND_FIELDS}


def create_app(holder: ContextHolder, reload: Optional[Callable[[], DispatchContext]] = None) -> Flask:
    """Build the Flask app serving ``holder``'s current context.

    Args:
        holder: Live dispatch context.
        reload: Builds a fresh context for POST /reload. The route answers 404
            when omitted.
    """
    app = Flask(__name__)

    @app.errorhandler(UnknownNodeType)
    def _unknown_node_type(exc):
        return jsonify({"error": str(exc)}), 400

    @app.route("/connect")
    def connect():
        return jsonify(holder.current.connect())

    @app.route("/dump")
    def dump_all():
        ctx = holder.current
        return jsonify({nt: ctx.list_nodes(nt) for nt in ("ue", "gnb")})

    @app.route("/dump/<node_type>")
    def dump(node_type):
        return jsonify({"nodes": holder.current.list_nodes(node_type)})

    @app.route("/commands/<node_type>")
    def commands(node_type):
        return jsonify({"commands": holder.current.list_commands(node_type)})

    @app.route("/check/<node_type>/<node_name>")
    def check(node_type, node_name):
        return jsonify({"exists": holder.current.check_node_exists(node_type, node_name)})

    @app.route("/command", methods=["POST"])
    def command():
        try:
            req = _parse_command_request(request.get_json(silent=True))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        response = holder.current.run_command(req["command"], req["nodeType"], req["nodeName"])
        return jsonify({"response": response})

    @app.route("/reload", methods=["POST"])
    def reload_commands():
        if reload is None:
            return jsonify({"error": "reload is not enabled"}), 404
        try:
            ctx = holder.reload(reload)
        except ConfigError as exc:
            log.error("Reload failed, keeping previous commands: %s", exc)
            return jsonify({"error": str(exc)}), 500
        return jsonify({"status": "Reloaded", "commands": ctx.registry.counts()})

    return app


def _context_builder(settings: Settings, config_path: str) -> Callable[[], DispatchContext]:
    def build() -> DispatchContext:
        return build_context(
            config_path,
            directory=StaticNodeDirectory(settings.nodes),
            max_wait_ms=settings.register_max_wait_ms,
            max_workers=settings.broadcast_workers,
        )

    return build


def main(argv=None):
    """Server entry point."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings()
    except ValueError as exc:
        log.error("%s", exc)
        sys.exit(1)

    parser = argparse.ArgumentParser(description="NodeSim command server")
    parser.add_argument("-c", "--config", default=settings.commands_file, help="Path to the configuration file")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    build = _context_builder(settings, args.config)
    try:
        holder = ContextHolder(build())
    except ConfigError as exc:
        log.error("Failed to load commands config: %s", exc)
        sys.exit(1)

    log.info("Commands loaded successfully from %s: %s", args.config, holder.current.registry.counts())

    app = create_app(holder, reload=build)
    log.info("Server starting on port %d...", args.port)
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
