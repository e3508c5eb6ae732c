"""Codegen - unrolled, loop-free realizations of the Poseidon permutation."""

from codegen.render import load_python, render_python, render_yul
from codegen.unroll import (
    ADD,
    MOV,
    MUL,
    Instruction,
    UnrolledProgram,
    build_program,
    expected_op_counts,
    interpret,
)

__all__ = [
    # Program
    "ADD",
    "MUL",
    "MOV",
    "Instruction",
    "UnrolledProgram",
    "build_program",
    "expected_op_counts",
    "interpret",
    # Renderers
    "render_yul",
    "render_python",
    "load_python",
]
