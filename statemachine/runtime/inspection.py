"""
statemachine.runtime.inspection — deterministic views of runtime state.

- snapshot(runtime)   : plain dict (block number, nonces, balances, claims),
                        every mapping sorted by key
- render(runtime)     : indented debug text of the same data
- state_root(runtime) : sha3-256 over the canonical CBOR of the snapshot

Two runtimes that went through the same blocks render identically and share
a state root, independent of the order in which accounts were first touched.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from smcore.utils.hash import canonical_digest

INDENT = "    "


def snapshot(runtime: Any) -> Dict[str, Any]:
    return {
        "block_number": runtime.system.block_number(),
        "nonces": runtime.system.nonces(),
        "balances": runtime.balances.balances(),
        "claims": runtime.proof_of_existence.claims(),
    }


def _render_map(name: str, m: Mapping[Any, Any], depth: int) -> List[str]:
    pad = INDENT * depth
    if not m:
        return [f"{pad}{name}: {{}},"]
    lines = [f"{pad}{name}: {{"]
    for k, v in m.items():
        lines.append(f"{pad}{INDENT}{k!r}: {v!r},")
    lines.append(f"{pad}}},")
    return lines


def _render_struct(name: str, fields: List[List[str]], depth: int) -> List[str]:
    pad = INDENT * depth
    lines = [f"{pad}{name}: {{"]
    for f in fields:
        lines.extend(f)
    lines.append(f"{pad}}},")
    return lines


def render(runtime: Any) -> str:
    snap = snapshot(runtime)
    body: List[str] = []
    body += _render_struct(
        "system",
        [
            [f"{INDENT * 2}block_number: {snap['block_number']},"],
            _render_map("nonces", snap["nonces"], 2),
        ],
        1,
    )
    body += _render_struct("balances", [_render_map("balances", snap["balances"], 2)], 1)
    body += _render_struct(
        "proof_of_existence", [_render_map("claims", snap["claims"], 2)], 1
    )
    return "\n".join(["Runtime {", *body, "}"])


def state_root(runtime: Any) -> bytes:
    return canonical_digest(snapshot(runtime))


__all__ = ["snapshot", "render", "state_root"]
