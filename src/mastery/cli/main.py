#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""
Mastery CLI - run verification scenarios against an in-memory ledger.

Commands:
  mastery replay <scenario.json>   Replay operations and print every response
  mastery config                   Show effective settings
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ..core.config import get_config
from ..core.exceptions import MasteryException, NotFoundError, ValidationException
from ..core.ledger import TxContext, VerificationLedger
from ..core.ledger.validators import is_int
from ..core.logging import configure_logging
from .output import output_error, output_result

logger = logging.getLogger(__name__)


# Operations a scenario may contain, with their positional argument names
MUTATIONS: dict[str, tuple[str, ...]] = {
    "set_oracle": ("oracle",),
    "set_reward_collaborator": ("address",),
    "set_nft_collaborator": ("address",),
    "set_fee": ("fee",),
    "set_max_verifications": ("max_verifications",),
    "submit_verification": (
        "course_id",
        "score",
        "threshold",
        "proof_hash",
        "verification_type",
        "difficulty",
        "expiry",
        "metadata",
    ),
    "update_verification": ("verification_id", "new_score", "new_threshold"),
}

QUERIES: dict[str, tuple[str, ...]] = {
    "get_verification": ("verification_id",),
    "get_verification_count": (),
    "check_verification_status": ("user", "course_id"),
    "get_verification_update": ("verification_id",),
    "get_certificate": ("verification_id",),
    "get_reward_payout": ("verification_id",),
}


def load_scenario(path: Path) -> dict[str, Any]:
    """Load and minimally check a scenario file."""
    if not path.is_file():
        raise NotFoundError("Scenario", str(path))
    try:
        scenario = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValidationException(f"Scenario is not valid JSON: {e}") from e

    if not isinstance(scenario, dict):
        raise ValidationException("Scenario must be a JSON object")
    if not scenario.get("admin"):
        raise ValidationException("Scenario must name an admin principal", "admin")
    if not isinstance(scenario.get("operations", []), list):
        raise ValidationException("operations must be a list", "operations")
    return scenario


def _decode_args(op: str, args: dict[str, Any]) -> dict[str, Any]:
    decoded = dict(args)
    if op == "submit_verification" and isinstance(decoded.get("proof_hash"), str):
        try:
            decoded["proof_hash"] = bytes.fromhex(decoded["proof_hash"])
        except ValueError as e:
            raise ValidationException("proof_hash must be hex", "proof_hash", decoded["proof_hash"]) from e
    return decoded


def run_operation(
    ledger: VerificationLedger,
    step: dict[str, Any],
    default_caller: str,
) -> dict[str, Any]:
    """Execute one scenario step and return a JSON-safe result."""
    op = step.get("op")
    if op not in MUTATIONS and op not in QUERIES:
        raise ValidationException(f"Unknown operation: {op}", "op", op)

    args = _decode_args(op, step.get("args", {}))
    expected = MUTATIONS.get(op) or QUERIES.get(op, ())
    missing = [name for name in expected if name not in args]
    if missing:
        raise ValidationException(f"{op} is missing arguments: {', '.join(missing)}", missing[0])

    if op in MUTATIONS:
        block_height = step.get("block_height", 0)
        if not is_int(block_height) or block_height < 0:
            raise ValidationException("block_height must be a non-negative integer", "block_height", block_height)
        caller = step.get("caller", default_caller)
        if not isinstance(caller, str) or not caller:
            raise ValidationException("caller must be a principal string", "caller", caller)
        ctx = TxContext(caller=caller, block_height=block_height)
        response = getattr(ledger, op)(ctx, *(args[name] for name in MUTATIONS[op]))
        return {"op": op, "caller": ctx.caller, **response.to_dict()}

    result = getattr(ledger, op)(*(args[name] for name in QUERIES[op]))
    if hasattr(result, "to_dict"):
        result = result.to_dict()
    return {"op": op, "result": result}


def cmd_replay(args: argparse.Namespace) -> int:
    """Replay a scenario file against a fresh ledger."""
    try:
        scenario = load_scenario(Path(args.scenario))
    except (OSError, MasteryException) as e:
        output_error(str(e))
        return 1

    admin = scenario["admin"]
    try:
        ledger = VerificationLedger(
            admin,
            verification_fee=scenario.get("verification_fee"),
            max_verifications=scenario.get("max_verifications"),
        )
        results = [run_operation(ledger, step, admin) for step in scenario.get("operations", [])]
    except MasteryException as e:
        output_error(e.message)
        return 1

    payload: dict[str, Any] = {"results": results}
    if not args.no_snapshot:
        payload["snapshot"] = ledger.snapshot()
    output_result(payload, args.output)

    failures = sum(1 for r in results if r.get("success") is False)
    if failures:
        logger.info(f"{failures} operation(s) were rejected")
    return 2 if args.strict and failures else 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show effective settings."""
    output_result(get_config().model_dump(), args.output)
    return 0


def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mastery",
        description="Credential verification ledger for course mastery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mastery replay scenario.json            Replay a scenario
  mastery replay scenario.json --strict   Exit 2 if any operation is rejected
  mastery config                          Show effective settings
        """,
    )
    parser.add_argument("--log-level", default=None, help="Override MASTERY_LOG_LEVEL")
    parser.add_argument("--output", "-o", choices=["json", "text"], default="json", help="Output format")

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser("replay", help="Replay a JSON scenario")
    replay_parser.add_argument("scenario", help="Path to scenario JSON file")
    replay_parser.add_argument("--strict", action="store_true", help="Non-zero exit on rejected operations")
    replay_parser.add_argument("--no-snapshot", action="store_true", help="Omit the final ledger snapshot")

    subparsers.add_parser("config", help="Show effective settings")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = app()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)

    commands = {
        "replay": cmd_replay,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
