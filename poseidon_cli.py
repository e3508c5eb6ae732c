#!/usr/bin/env python3
"""
Command line interface for the Poseidon BLS12-381 hash.

Usage:
    poseidon-bls hash 1 2                 # hash_2(1, 2)
    poseidon-bls hash --width 5 1 2 3 4 5 # variable-length sponge
    poseidon-bls permute --width 3 0 1 2
    poseidon-bls params --width 5 --output primitives/tables/poseidon_t5.json
    poseidon-bls unroll --width 3 --lang yul --output Poseidon2Yul.sol
    poseidon-bls vectors
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from codegen.render import render_python, render_yul
from codegen.unroll import build_program
from hashing.permutation import permutation
from hashing.sponge import hash_1, hash_2, hash_4, poseidon_hash
from primitives.errors import PoseidonError
from primitives.params import PermutationConfig, PoseidonParams, get_params, supported_widths
from reference_vectors import check_vectors

logger = logging.getLogger("poseidon_cli")


def parse_int(text: str) -> int:
    """Decimal or 0x-prefixed hex integer."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")


def _format(value: int, as_hex: bool) -> str:
    return hex(value) if as_hex else str(value)


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        f.write(text)
    print(f"Written to {output}")


def _load_params(args) -> PoseidonParams:
    if getattr(args, "params_file", None) is not None:
        return PoseidonParams.from_json(args.params_file)
    return get_params(args.width)


# --- Commands ---

def cmd_hash(args) -> int:
    inputs: List[int] = args.inputs
    if args.width is None and len(inputs) == 1:
        digest = hash_1(inputs[0])
    elif args.width is None and len(inputs) == 2:
        digest = hash_2(*inputs)
    elif args.width is None and len(inputs) == 4:
        digest = hash_4(*inputs)
    else:
        digest = poseidon_hash(inputs, width=args.width or 3)
    print(_format(digest, args.hex))
    return 0


def cmd_permute(args) -> int:
    if len(args.state) != args.width:
        print(f"Error: expected {args.width} state elements, got {len(args.state)}", file=sys.stderr)
        return 1
    for value in permutation(args.state):
        print(_format(value, args.hex))
    return 0


def cmd_params(args) -> int:
    # rebuilt from the Grain LFSR, not read back from the shipped tables
    params = PoseidonParams.generate(PermutationConfig.for_width(args.width))
    _write_output(json.dumps(params.to_dict(), indent=2), args.output)
    return 0


def cmd_unroll(args) -> int:
    params = _load_params(args)
    program = build_program(params)
    logger.info(
        "Unrolled t=%d: %d instructions %s",
        params.config.width, len(program), program.op_counts(),
    )
    if args.lang == "yul":
        text = render_yul(program, contract_name=args.contract_name)
    else:
        text = render_python(program)
    _write_output(text, args.output)
    return 0


def cmd_vectors(args) -> int:
    failures = 0
    for name, inputs, expected, actual in check_vectors():
        match = expected == actual
        failures += 0 if match else 1
        print(f"{name}({list(inputs)}) = {actual} [{'OK' if match else 'MISMATCH'}]")
        if not match:
            print(f"  expected {expected}")
    print(f"\n{failures} mismatches")
    return 1 if failures else 0


# --- Entry Point ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poseidon-bls",
        description="Poseidon hash over the BLS12-381 scalar field",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)
    widths = list(supported_widths())

    p_hash = sub.add_parser("hash", help="Hash field elements")
    p_hash.add_argument("inputs", nargs="+", type=parse_int, help="Input elements (decimal or 0x hex)")
    p_hash.add_argument(
        "--width", type=int, choices=widths, default=None,
        help="Force the variable-length sponge with this permutation width",
    )
    p_hash.add_argument("--hex", action="store_true", help="Print the digest in hex")
    p_hash.set_defaults(func=cmd_hash)

    p_perm = sub.add_parser("permute", help="Apply the raw permutation to a state")
    p_perm.add_argument("state", nargs="+", type=parse_int, help="State elements")
    p_perm.add_argument("--width", type=int, choices=widths, required=True, help="State width t")
    p_perm.add_argument("--hex", action="store_true", help="Print elements in hex")
    p_perm.set_defaults(func=cmd_permute)

    p_params = sub.add_parser("params", help="Regenerate round constants and MDS matrix as JSON")
    p_params.add_argument("--width", type=int, choices=widths, required=True, help="State width t")
    p_params.add_argument("--output", type=Path, default=None, help="Output JSON path (default: stdout)")
    p_params.set_defaults(func=cmd_params)

    p_unroll = sub.add_parser("unroll", help="Emit the unrolled permutation")
    p_unroll.add_argument("--width", type=int, choices=widths, default=3, help="State width t")
    p_unroll.add_argument("--params-file", type=Path, default=None, help="Load tables from JSON instead")
    p_unroll.add_argument("--lang", choices=["yul", "python"], default="yul", help="Target language")
    p_unroll.add_argument("--contract-name", default=None, help="Solidity contract name (yul only)")
    p_unroll.add_argument("--output", type=Path, default=None, help="Output path (default: stdout)")
    p_unroll.set_defaults(func=cmd_unroll)

    p_vectors = sub.add_parser("vectors", help="Check the pinned reference vectors")
    p_vectors.set_defaults(func=cmd_vectors)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except PoseidonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
