"""
Uvicorn server entrypoint for the Blocker plugin API.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from blocker.lib.config import load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blocker-plugin", description="Blocker Docker volume plugin server")
    parser.add_argument("--host", default=None, help="Bind host (default: from config or 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: from config or 8080)")
    parser.add_argument(
        "--socket",
        default=None,
        help="Listen on a unix socket instead (e.g. /run/docker/plugins/blocker.sock)",
    )
    parser.add_argument("--log-level", default="info", help="Log level (default: info)")
    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.socket:
        uvicorn.run("blocker.api.main:app", uds=args.socket, log_level=args.log_level)
        return 0
    host = args.host or cfg.api_host
    port = args.port or cfg.api_port
    uvicorn.run("blocker.api.main:app", host=host, port=port, log_level=args.log_level)
    return 0
