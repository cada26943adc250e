#!/usr/bin/env python3
"""
statemachine.cli.run_blocks — run a scenario of blocks against a fresh runtime.

This CLI:
  1) Builds a Runtime from the environment config
  2) Seeds genesis balances (administrative, not extrinsics)
  3) Executes each block in order, stopping at the first rejected block
  4) Prints the final state (debug text or JSON) and, on request, the state root

Scenario files are YAML or JSON:

    genesis:
      balances: {alice: 100}
    blocks:
      - header: {block_number: 1}
        extrinsics:
          - caller: alice
            call: {pallet: balances, call: transfer, args: {to: bob, amount: 20}}

Usage:
    python -m statemachine.cli.run_blocks --demo
    python -m statemachine.cli.run_blocks --scenario blocks.yaml --format json

Exit codes: 0 ok, 1 a block was rejected, 2 bad input.
"""

from __future__ import annotations

import argparse
import functools
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from smcore import logging as slog
from smcore.errors import StateMachineError
from smcore.types.block import Block, Extrinsic

from ..config import get_config
from ..pallets.balances import Transfer
from ..pallets.proof_of_existence import CreateClaim
from ..runtime.bindings import DEFAULT, RuntimeConfig
from ..runtime.dispatcher import RuntimeCall
from ..runtime.runtime import Runtime

log = slog.get_logger("statemachine.cli.run_blocks")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2


# --- Scenario loading ----------------------------------------------------------------------------


def demo_scenario() -> Tuple[Dict[Any, int], List[Block]]:
    """Two-block demo: alice pays bob 20, then claims "Hello, World!"."""
    alice, bob = "alice", "bob"
    blocks = [
        Block.build(1, [Extrinsic(alice, RuntimeCall.balances(Transfer(to=bob, amount=20)))]),
        Block.build(
            2,
            [Extrinsic(alice, RuntimeCall.proof_of_existence(CreateClaim("Hello, World!")))],
        ),
    ]
    return {alice: 100}, blocks


def load_scenario_file(path: Path) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        # YAML is a superset of JSON; anything not .json goes through the YAML loader.
        data = yaml.safe_load(text)
    if not isinstance(data, Mapping):
        raise ValueError(f"scenario root must be a mapping: {path}")
    return data


def parse_scenario(
    data: Mapping[str, Any], config: RuntimeConfig = DEFAULT
) -> Tuple[Dict[Any, int], List[Block]]:
    """Decode genesis and blocks; calls and callers are checked against `config`."""
    genesis = data.get("genesis") or {}
    if not isinstance(genesis, Mapping):
        raise ValueError("genesis must be a mapping")
    balances = genesis.get("balances") or {}
    if not isinstance(balances, Mapping):
        raise ValueError("genesis.balances must be a mapping")
    raw_blocks = data.get("blocks") or []
    if not isinstance(raw_blocks, list):
        raise ValueError("blocks must be a list")
    decode_call = functools.partial(RuntimeCall.from_obj, config=config)
    blocks = []
    for i, raw in enumerate(raw_blocks):
        try:
            blocks.append(Block.from_obj(raw, decode_call, caller_type=config.account_id))
        except StateMachineError as e:
            raise e.with_context(block_index=i) from e
    return dict(balances), blocks


# --- Execution -----------------------------------------------------------------------------------


def run(
    runtime: Runtime, blocks: Sequence[Block]
) -> Tuple[int, Optional[Dict[str, Any]]]:
    """Execute blocks in order. Returns (blocks applied, rejection or None)."""
    for i, block in enumerate(blocks):
        res = runtime.execute_block(block)
        if res.is_err:
            return i, {"block_index": i, **res.to_dict()}
    return len(blocks), None


def _report(runtime: Runtime, applied: int, rejection: Optional[Dict[str, Any]], fmt: str, show_root: bool) -> str:
    if fmt == "json":
        out: Dict[str, Any] = {
            "applied_blocks": applied,
            "rejected": rejection,
            "state": runtime.snapshot(),
            "failures": [f.to_dict() for f in runtime.failures],
        }
        if show_root:
            out["state_root"] = "0x" + runtime.state_root().hex()
        return json.dumps(out, indent=2, sort_keys=True)

    lines = [runtime.render()]
    for f in runtime.failures:
        lines.append(str(f))
    if rejection is not None:
        lines.append(f"Block rejected: index={rejection['block_index']} error={rejection['error']}")
    if show_root:
        lines.append(f"state_root: 0x{runtime.state_root().hex()}")
    return "\n".join(lines)


# --- Entry point ---------------------------------------------------------------------------------


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="statemachine-run",
        description="Execute blocks of extrinsics against a fresh pallet runtime.",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--demo", action="store_true", help="Run the built-in two-block demo")
    src.add_argument("--scenario", type=Path, help="YAML/JSON scenario file")
    p.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    p.add_argument("--state-root", action="store_true", help="Also print the state root")
    p.add_argument(
        "--log",
        type=str,
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Log level",
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    slog.setup_logging(level=args.log.upper(), fmt="text", stream=sys.stderr)

    try:
        settings = get_config()
        config = RuntimeConfig.from_settings(settings)
        if args.demo:
            genesis, blocks = demo_scenario()
        else:
            genesis, blocks = parse_scenario(load_scenario_file(args.scenario), config)
        runtime = Runtime.with_balances(genesis, config=config, settings=settings)
    except (OSError, ValueError, yaml.YAMLError, StateMachineError) as e:
        log.error("cannot load scenario", extra={"reason": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        applied, rejection = run(runtime, blocks)
    except StateMachineError as e:
        log.error("runtime invariant violated", extra={"reason": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print(_report(runtime, applied, rejection, args.format, args.state_root))
    return EXIT_REJECTED if rejection is not None else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
