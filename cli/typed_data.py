"""Typed-data CLI — inspect what a wallet would be asked to sign.

Usage:
    python3 -m cli.typed_data allowlist [--format yaml]
    python3 -m cli.typed_data sign-doc tx.json
    python3 -m cli.typed_data typed-data tx.json --chain-id 2222 [--fee-payer kava1...]
    python3 -m cli.typed_data typed-data tx.json --allowlist allowlist.yaml

``tx.json`` holds an ``UnsignedTx``: chain_id, account_number, sequence,
fee, memo and msgs (``{"@type": ..., "type": ..., "value": ...}``).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from config.settings import settings
from core.errors import EIP712Error, InternalFault
from core.logger import setup_logging
from eip712.registry import MessageSchemaRegistry
from eip712.service import TypedDataService
from legacytx.tx import UnsignedTx
from migrations.v2 import NEW_ALLOWED_MSGS
from params.authority import RegistryAuthority

logger = structlog.get_logger("cli.typed_data")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INTERNAL = 2


def _load_registry(path: str | None) -> MessageSchemaRegistry:
    path = path or settings.EIP712_ALLOWLIST_PATH
    if path:
        return MessageSchemaRegistry.from_file(path)
    return MessageSchemaRegistry.load(NEW_ALLOWED_MSGS)


def _load_tx(path: str) -> UnsignedTx:
    return UnsignedTx.model_validate_json(Path(path).read_text(encoding="utf-8"))


def cmd_allowlist(args: argparse.Namespace) -> int:
    """Print the allow-list in use."""
    entries = _load_registry(args.allowlist).to_wire()
    if args.format == "yaml":
        sys.stdout.write(yaml.safe_dump(entries, sort_keys=False))
    else:
        print(json.dumps(entries, indent=2))
    return EXIT_OK


def cmd_sign_doc(args: argparse.Namespace) -> int:
    """Print the canonical legacy sign document."""
    service = TypedDataService(RegistryAuthority(), args.chain_id)
    sys.stdout.write(service.sign_doc(_load_tx(args.tx)).decode("utf-8") + "\n")
    return EXIT_OK


def cmd_typed_data(args: argparse.Namespace) -> int:
    """Print typed data and its signing digest."""
    authority = RegistryAuthority(_load_registry(args.allowlist))
    service = TypedDataService(authority, args.chain_id)
    request = service.prepare(_load_tx(args.tx), fee_payer=args.fee_payer)
    out = {
        "typedData": request.typed_data.to_dict(),
        "domainSeparator": "0x" + request.digest.domain_separator.hex(),
        "digest": request.digest.digest_hex,
    }
    print(json.dumps(out, indent=2))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cosmos-eip712",
        description="EIP-712 typed data for Cosmos SDK transactions",
    )
    parser.add_argument(
        "--allowlist",
        default=None,
        help="YAML/JSON allow-list file (default: EIP712_ALLOWLIST_PATH or the v2 list)",
    )
    parser.add_argument(
        "--chain-id",
        type=int,
        default=settings.EIP712_CHAIN_ID,
        help="EIP-155 chain id for the domain",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_allow = sub.add_parser("allowlist", help="Print the allow-list")
    p_allow.add_argument("--format", choices=["json", "yaml"], default="json")
    p_allow.set_defaults(func=cmd_allowlist)

    p_doc = sub.add_parser("sign-doc", help="Print the canonical legacy sign document")
    p_doc.add_argument("tx", help="Path to an unsigned tx JSON file")
    p_doc.set_defaults(func=cmd_sign_doc)

    p_typed = sub.add_parser("typed-data", help="Print typed data and digest")
    p_typed.add_argument("tx", help="Path to an unsigned tx JSON file")
    p_typed.add_argument("--fee-payer", default=None, help="Fee payer address for fee delegation")
    p_typed.set_defaults(func=cmd_typed_data)

    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except InternalFault:
        logger.error("cli.internal_fault", command=args.command, exc_info=True)
        return EXIT_INTERNAL
    except (EIP712Error, ValidationError, OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
