"""Command line entry point: ``awall-api -c /etc/awall/private/base.json``."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional, Tuple

import uvicorn

from firewall_api.main import create_app
from firewall_api.settings import Settings
from firewall_api.telemetry.logging import configure_logging

log = logging.getLogger(__name__)


def parse_listen(arg: str) -> Tuple[str, int]:
    if ":" not in arg:
        raise argparse.ArgumentTypeError("Expected HOST:PORT")

    host, port_str = arg.rsplit(":", 1)
    host = host.strip("[]")

    try:
        port = int(port_str)
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid port")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError("Invalid port")

    return host, port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="awall-api",
        description="Web API to configure the Awall firewall",
    )
    parser.add_argument("-c", "--config", required=True, help="The awall config file")
    parser.add_argument(
        "--listen",
        type=parse_listen,
        default=None,
        help="Address and port to listen on (HOST:PORT, default 127.0.0.1:7878)",
    )
    parser.add_argument("--log-level", default=None, help="Root log level (default INFO)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {"config_file": args.config}
    if args.listen is not None:
        overrides["host"], overrides["port"] = args.listen
    if args.log_level:
        overrides["log_level"] = args.log_level
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)

    configure_logging(settings.log_level, json_format=settings.log_json)
    log.info("Using config file: %s", settings.config_file)
    log.info("Listening for requests at http://%s:%d", settings.host, settings.port)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
