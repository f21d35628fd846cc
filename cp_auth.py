"""Command line interface for Chaum-Pedersen password authentication."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys

import uvicorn

from cpauth.auth import authenticate, register_user
from cpauth.client import RemoteVerifier
from cpauth.config import DEFAULT_CONFIG, Settings, load_settings
from cpauth.params import GroupParameters
from cpauth.server import create_app
from cpauth.service import VerifierService

logger = logging.getLogger("cp_auth")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"INI settings file (default: {DEFAULT_CONFIG}, optional)",
    )
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the verifier HTTP service")
    serve_parser.add_argument("--host", help="Bind address (default from settings)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default from settings)")

    for name, help_text in (
        ("register", "Register a username with a password"),
        ("login", "Prove knowledge of the password and obtain a session id"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("username", help="Name to register or log in as")
        sub.add_argument(
            "--password",
            help="Password. If omitted it is read from the terminal without echo.",
        )
        sub.add_argument("--url", help="Verifier base URL (default from settings)")

    demo_parser = subparsers.add_parser(
        "demo",
        help="Register and log in against an in-process verifier",
    )
    demo_parser.add_argument("--username", default="alice")
    demo_parser.add_argument("--password", default="correct horse battery staple")
    demo_parser.add_argument("--wrong-password", default="Tr0ub4dor&3")

    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def read_password(namespace: argparse.Namespace) -> str:
    if namespace.password:
        return namespace.password
    return getpass.getpass(f"[{namespace.command}] Password for {namespace.username}: ")


def run_serve(namespace: argparse.Namespace, settings: Settings) -> int:
    service = VerifierService(
        GroupParameters.default(),
        identifier_length=settings.identifier_length,
    )
    host = namespace.host or settings.host
    port = namespace.port or settings.port
    logger.info("Verifier listening on http://%s:%d", host, port)
    uvicorn.run(create_app(service), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def run_demo(namespace: argparse.Namespace, settings: Settings) -> int:
    params = GroupParameters.default()
    service = VerifierService(params, identifier_length=settings.identifier_length)
    registered = register_user(service, params, namespace.username, namespace.password)
    accepted = authenticate(service, params, namespace.username, namespace.password)
    rejected = authenticate(service, params, namespace.username, namespace.wrong_password)
    print(json.dumps({"register": registered, "login": accepted, "wrong_password": rejected}, indent=2))
    return 0 if accepted["success"] and not rejected["success"] else 1


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings(namespace.config)
    configure_logging(namespace.log_level or settings.log_level)

    if namespace.command == "serve":
        return run_serve(namespace, settings)

    if namespace.command == "demo":
        return run_demo(namespace, settings)

    params = GroupParameters.default()
    verifier = RemoteVerifier(namespace.url or settings.server_url)
    verifier.check_parameters(params)
    password = read_password(namespace)

    if namespace.command == "register":
        payload = register_user(verifier, params, namespace.username, password)
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "login":
        result = authenticate(verifier, params, namespace.username, password)
        print(json.dumps(result, indent=2))
        return 0 if result["success"] else 1

    raise RuntimeError("Unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
