"""Render an UnrolledProgram as source code.

render_yul() emits a Solidity contract whose fallback runs the unrolled
permutation in inline assembly: it reads t - 1 calldata words into
state1..state{t-1} (state0 is the capacity element, 0), runs every round and
returns state0. render_python() emits a module defining permutation(state).

Both renderers print the program one instruction per line, so the emitted
code performs exactly the operations of the program and has no loops or
branches.
"""

import logging
from typing import Callable, List, Optional

from codegen.unroll import ADD, MOV, MUL, Instruction, Operand, UnrolledProgram

logger = logging.getLogger(__name__)


def _round_comment(full: bool, index: int) -> str:
    return f"{'Full' if full else 'Partial'} round {index}"


# --- Yul ---

def _yul_register(name: str) -> str:
    # state registers keep the contract's historical names
    if name.startswith("s"):
        return f"state{name[1:]}"
    return name


def _yul_operand(operand: Operand) -> str:
    return str(operand) if isinstance(operand, int) else _yul_register(operand)


def _yul_instruction(ins: Instruction) -> str:
    dst = _yul_register(ins.dst)
    if ins.op == ADD:
        return f"{dst} := addmod({_yul_operand(ins.lhs)}, {_yul_operand(ins.rhs)}, PRIME)"
    if ins.op == MUL:
        return f"{dst} := mulmod({_yul_operand(ins.lhs)}, {_yul_operand(ins.rhs)}, PRIME)"
    if ins.op == MOV:
        return f"{dst} := {_yul_operand(ins.lhs)}"
    raise ValueError(f"unknown opcode {ins.op!r}")


def render_yul(program: UnrolledProgram, contract_name: Optional[str] = None) -> str:
    """Solidity contract with the unrolled permutation as a Yul fallback.

    Calldata: (t - 1) 32-byte words, the hash inputs. Returns one word, the
    digest. Inputs are reduced by the first addmod of round 0.
    """
    width = program.width
    name = contract_name or f"Poseidon{program.config.rate}Yul"
    pad = " " * 12

    lines: List[str] = [
        "// SPDX-License-Identifier: MIT",
        "pragma solidity >=0.6.0;",
        "",
        f"contract {name} {{",
        "    fallback() external {",
        "        assembly {",
        f"{pad}let PRIME := {hex(program.config.prime)}",
        "",
        f"{pad}// State [0, input1, ..., input{width - 1}]; state0 is the capacity element",
        f"{pad}let state0 := 0",
    ]
    for i in range(1, width):
        lines.append(f"{pad}let state{i} := calldataload({hex(32 * (i - 1))})")
    for reg in program.scratch_registers():
        lines.append(f"{pad}let {reg} := 0")

    for rnd, block in program.round_blocks():
        lines.append("")
        lines.append(f"{pad}// {_round_comment(rnd.full, rnd.index)}")
        for ins in block:
            lines.append(pad + _yul_instruction(ins))

    lines += [
        "",
        f"{pad}mstore(0, state0)",
        f"{pad}return(0, 32)",
        "        }",
        "    }",
        "}",
        "",
    ]
    logger.debug("Rendered Yul contract %s: %d instructions", name, len(program))
    return "\n".join(lines)


# --- Python ---

def _py_operand(operand: Operand) -> str:
    return str(operand) if isinstance(operand, int) else operand


def _py_instruction(ins: Instruction) -> str:
    if ins.op == ADD:
        return f"{ins.dst} = ({_py_operand(ins.lhs)} + {_py_operand(ins.rhs)}) % P"
    if ins.op == MUL:
        return f"{ins.dst} = ({_py_operand(ins.lhs)} * {_py_operand(ins.rhs)}) % P"
    if ins.op == MOV:
        return f"{ins.dst} = {_py_operand(ins.lhs)}"
    raise ValueError(f"unknown opcode {ins.op!r}")


def render_python(program: UnrolledProgram) -> str:
    """Python module defining permutation(state) as straight-line code.

    The generated function expects exactly `width` ints and reduces them mod
    p on entry.
    """
    regs = program.state_registers()
    pad = " " * 4
    cfg = program.config

    lines: List[str] = [
        f'"""Unrolled Poseidon permutation: t={cfg.width}, R_F={cfg.full_rounds}, R_P={cfg.partial_rounds}.',
        "",
        "Generated by codegen.render.render_python; do not edit.",
        '"""',
        "",
        f"P = {cfg.prime}",
        "",
        "",
        "def permutation(state):",
        f"{pad}{', '.join(regs)}, = state",
    ]
    lines += [f"{pad}{reg} = {reg} % P" for reg in regs]
    for rnd, block in program.round_blocks():
        lines.append(f"{pad}# {_round_comment(rnd.full, rnd.index)}")
        for ins in block:
            lines.append(pad + _py_instruction(ins))
    lines.append(f"{pad}return [{', '.join(regs)}]")
    lines.append("")
    return "\n".join(lines)


def load_python(program: UnrolledProgram) -> Callable:
    """Compile render_python() output and return its permutation function."""
    source = render_python(program)
    namespace: dict = {}
    code = compile(source, f"<unrolled-poseidon-t{program.width}>", "exec")
    exec(code, namespace)
    return namespace["permutation"]
