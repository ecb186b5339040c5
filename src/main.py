"""Command line entrypoint."""

import argparse
import asyncio
import logging
import os
import sys

import aiohttp
from aiohttp import ClientResponse

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.metrics.http_metrics import Metrics
from src.core.errors import PlatformClientError
from src.core.platform_client import PlatformClient
from src.ports.callback import CallbackRegistration
from src.ports.downlink import DownlinkMessage

__all__ = ["build_parser", "dispatch", "main", "parse_args", "run"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per platform operation."""
    parser = argparse.ArgumentParser(
        prog="platform-client",
        description="Talk to the IoT platform REST API.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("nodes", help="List nodes.")

    latest = sub.add_parser("latest", help="Show the latest uplink payload of a node.")
    latest.add_argument("deveui")

    payloads = sub.add_parser("payloads", help="List uplink payloads of a node.")
    payloads.add_argument("deveui")

    send = sub.add_parser("send", help="Queue a downlink message.")
    send.add_argument("deveui")
    send.add_argument("payload")
    send.add_argument("--port", type=int, default=None)
    send.add_argument("--fcnt", default=None)
    confirmed = send.add_mutually_exclusive_group()
    confirmed.add_argument("--confirmed", dest="confirmed", action="store_true", default=None)
    confirmed.add_argument("--unconfirmed", dest="confirmed", action="store_false", default=None)

    register = sub.add_parser(
        "register",
        help="Register the push callback; without --host the configured default is used.",
    )
    register.add_argument("--host", default=None)
    register.add_argument("--port", type=int, default=None)
    register.add_argument("--path-prefix", default=None)
    register.add_argument("--auth-string", default=None)
    register.add_argument("--retry-policy", type=int, choices=(0, 1), default=None)

    sub.add_parser("unregister", help="Stop all push callbacks.")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line, rejecting callback options given without --host.

    Args:
        argv: Arguments without program name; defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "register" and args.host is None:
        given = [
            flag
            for flag, value in (
                ("--port", args.port),
                ("--path-prefix", args.path_prefix),
                ("--auth-string", args.auth_string),
                ("--retry-policy", args.retry_policy),
            )
            if value is not None
        ]
        if given:
            parser.error(", ".join(given) + " require --host")
    return args


async def dispatch(client: PlatformClient, args: argparse.Namespace) -> ClientResponse:
    """Run the facade operation selected on the command line.

    Args:
        client: Platform facade.
        args: Parsed arguments.

    Returns:
        Transport response.
    """
    command = args.command
    if command == "nodes":
        return await client.list_nodes()
    if command == "latest":
        return await client.get_latest_payload(args.deveui)
    if command == "payloads":
        return await client.list_payloads(args.deveui)
    if command == "send":
        return await client.send_data(
            DownlinkMessage(
                deveui=args.deveui,
                payload=args.payload,
                port=args.port,
                fcnt=args.fcnt,
                confirmed=args.confirmed,
            )
        )
    if command == "register":
        callback = None
        if args.host is not None:
            callback = CallbackRegistration(
                host=args.host,
                port=args.port,
                path_prefix=args.path_prefix,
                auth_string=args.auth_string,
                retry_policy=args.retry_policy,
            )
        return await client.register_callback(callback)
    if command == "unregister":
        return await client.unregister_callbacks()
    raise ValueError(f"Unknown command: {command}")


async def main(argv: list[str] | None = None) -> int:
    """Run one platform operation and print the response.

    Startup sequence:
    1. Parse arguments and configure logging.
    2. Load and validate configuration.
    3. Send the request inside an HTTP session.
    4. Print status and body.

    Args:
        argv: Arguments without program name; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    configure_logs(os.getenv("LOG_LEVEL", "INFO"))

    try:
        settings = load_settings().to_port()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PLATFORM_BASE_URL, PLATFORM_USERNAME and PLATFORM_PASSWORD.",
            exc,
        )
        return EXIT_USAGE

    async with HttpClient(settings, metrics=Metrics()) as http:
        client = PlatformClient(settings, http)
        try:
            resp = await dispatch(client, args)
            body = await resp.text(errors="replace")
        except PlatformClientError as exc:
            logger.error(f"Invalid request: {exc}")
            return EXIT_USAGE
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error(f"Request failed: {exc!r}")
            return EXIT_REQUEST_FAILED

    print(f"HTTP {resp.status}")
    if body:
        print(body)
    return EXIT_OK if 200 <= resp.status < 300 else EXIT_REQUEST_FAILED


def run() -> int:
    """Console script wrapper around ``main``."""
    try:
        return asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user (Ctrl+C).")
        return EXIT_REQUEST_FAILED


if __name__ == "__main__":
    sys.exit(run())
