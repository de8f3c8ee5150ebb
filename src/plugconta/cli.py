"""
Command-line interface for exercising the PlugConta API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

from .api import create_client
from .core.client import PlugContaClient
from .core.errors import ApiError, ConfigError, PlugContaError
from .core.response import ApiResponse


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugconta",
        description="Query payers, accounts and statements on the PlugConta API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PLUGCONTA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--staging",
        action="store_true",
        help="Talk to the staging API instead of production",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    payer = commands.add_parser("payer", help="Show a payer")
    payer.add_argument("cpfcnpj")

    accounts = commands.add_parser("accounts", help="List the bank accounts of a payer")
    accounts.add_argument("cpfcnpj")

    account = commands.add_parser("account", help="Show one bank account")
    account.add_argument("cpfcnpj")
    account.add_argument("hash")

    statements = commands.add_parser("statements", help="List statements in a date range")
    statements.add_argument("cpfcnpj")
    statements.add_argument("date_start", metavar="START")
    statements.add_argument("date_end", metavar="END")

    parse_result = commands.add_parser("parse-result", help="Show a statement parse result")
    parse_result.add_argument("cpfcnpj")
    parse_result.add_argument("id")

    upload = commands.add_parser("upload", help="Upload a statement file for parsing")
    upload.add_argument("cpfcnpj")
    upload.add_argument("file", type=Path)

    download = commands.add_parser("download", help="Download an uploaded statement file")
    download.add_argument("cpfcnpj")
    download.add_argument("id")
    download.add_argument("--output", "-o", type=Path, required=True)

    return parser


def _dispatch(client: PlugContaClient, args: argparse.Namespace) -> ApiResponse:
    if args.command == "payer":
        return client.get_payer(args.cpfcnpj)
    if args.command == "accounts":
        return client.list_accounts(args.cpfcnpj)
    if args.command == "account":
        return client.get_account(args.hash, args.cpfcnpj)
    if args.command == "statements":
        return client.get_statements_by_period(args.cpfcnpj, args.date_start, args.date_end)
    if args.command == "parse-result":
        return client.get_statement_parse_result(args.id, args.cpfcnpj)
    if args.command == "upload":
        return client.upload_statement(args.cpfcnpj, args.file)
    if args.command == "download":
        return client.download_statement(args.id, args.cpfcnpj)
    raise ValueError(f"Unknown command {args.command!r}")


def _emit(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        client = create_client(
            env_file=args.env_file,
            overrides=overrides,
            production=False if args.staging else None,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with client:
        try:
            response = _dispatch(client, args)
        except ApiError as exc:
            logging.error("API rejected the request (%s): %s", exc.status_code, exc)
            return 1
        except (PlugContaError, ValueError, OSError) as exc:
            logging.error("Request failed: %s", exc)
            return 1

    if args.command == "download":
        args.output.write_bytes(response.body)
        logging.info("Statement saved to %s", args.output)
        return 0

    _emit(response.body)
    return 0


def main() -> None:
    sys.exit(run_cli())
