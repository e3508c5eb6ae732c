"""Loop-free realization of the Poseidon round schedule.

build_program() walks the same round schedule as the permutation core and
emits one Instruction per field operation, with every round constant and MDS
entry inlined as a literal. The result has no loops, branches or table
lookups; renderers in codegen.render turn it into Yul or Python source.

Registers:
    s0..s{t-1}  state slots
    t0..t{t-1}  MDS row accumulators
    x           S-box scratch (holds x^2, then x^4)
    m           MDS product scratch

Per round the program contains t constant additions, 3 multiplications per
S-boxed slot, and for the matrix product t*t multiplications, t*(t-1)
additions and t moves.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from primitives.errors import InvalidArity
from primitives.field import to_field_element
from primitives.params import PermutationConfig, PoseidonParams, Round

Operand = Union[str, int]

ADD = "add"
MUL = "mul"
MOV = "mov"

SBOX_SCRATCH = "x"
MDS_SCRATCH = "m"


def state_register(i: int) -> str:
    return f"s{i}"


def accumulator_register(i: int) -> str:
    return f"t{i}"


@dataclass(frozen=True)
class Instruction:
    """dst := op(lhs, rhs) over the field. MOV copies lhs and has no rhs."""
    op: str
    dst: str
    lhs: Operand
    rhs: Optional[Operand] = None


@dataclass
class UnrolledProgram:
    """Flat instruction list plus round markers for comments/inspection.

    Attributes:
        config: Permutation shape the program implements
        instructions: Field operations in execution order
        markers: (round, index of the round's first instruction)
    """
    config: PermutationConfig
    instructions: List[Instruction] = field(default_factory=list)
    markers: List[Tuple[Round, int]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.config.width

    def __len__(self) -> int:
        return len(self.instructions)

    def state_registers(self) -> List[str]:
        return [state_register(i) for i in range(self.width)]

    def scratch_registers(self) -> List[str]:
        return [accumulator_register(i) for i in range(self.width)] + [SBOX_SCRATCH, MDS_SCRATCH]

    def op_counts(self) -> Dict[str, int]:
        counts = Counter(ins.op for ins in self.instructions)
        return {op: counts.get(op, 0) for op in (ADD, MUL, MOV)}

    def literals(self) -> List[int]:
        """Every inlined constant, in program order."""
        out = []
        for ins in self.instructions:
            for operand in (ins.lhs, ins.rhs):
                if isinstance(operand, int):
                    out.append(operand)
        return out

    def round_blocks(self) -> List[Tuple[Round, List[Instruction]]]:
        """Instructions grouped by round."""
        blocks = []
        bounds = [start for _, start in self.markers] + [len(self.instructions)]
        for (rnd, start), end in zip(self.markers, bounds[1:]):
            blocks.append((rnd, self.instructions[start:end]))
        return blocks


# --- Templates ---

def _add_constants(constants: Sequence[int]) -> List[Instruction]:
    return [
        Instruction(ADD, state_register(i), state_register(i), c)
        for i, c in enumerate(constants)
    ]


def _sbox(reg: str) -> List[Instruction]:
    # x^2, x^4, then multiply back by the original value
    return [
        Instruction(MUL, SBOX_SCRATCH, reg, reg),
        Instruction(MUL, SBOX_SCRATCH, SBOX_SCRATCH, SBOX_SCRATCH),
        Instruction(MUL, reg, SBOX_SCRATCH, reg),
    ]


def _mix(matrix: Sequence[Sequence[int]]) -> List[Instruction]:
    out = []
    for i, row in enumerate(matrix):
        acc = accumulator_register(i)
        out.append(Instruction(MUL, acc, row[0], state_register(0)))
        for j in range(1, len(row)):
            out.append(Instruction(MUL, MDS_SCRATCH, row[j], state_register(j)))
            out.append(Instruction(ADD, acc, acc, MDS_SCRATCH))
    for i in range(len(matrix)):
        out.append(Instruction(MOV, state_register(i), accumulator_register(i)))
    return out


# --- Generation ---

def build_program(params: PoseidonParams) -> UnrolledProgram:
    """Unroll every round of `params` into a flat instruction list."""
    config = params.config
    width = config.width
    program = UnrolledProgram(config=config)

    for rnd in config.rounds():
        program.markers.append((rnd, len(program.instructions)))
        constants = params.round_constants[rnd.offset:rnd.offset + width]
        program.instructions.extend(_add_constants(constants))
        boxed = range(width) if rnd.full else range(1)
        for i in boxed:
            program.instructions.extend(_sbox(state_register(i)))
        program.instructions.extend(_mix(params.mds_matrix))

    return program


def expected_op_counts(config: PermutationConfig) -> Dict[str, int]:
    """Operation counts build_program must produce for `config`."""
    t = config.width
    sboxes = config.full_rounds * t + config.partial_rounds
    return {
        ADD: config.total_rounds * (t + t * (t - 1)),
        MUL: config.total_rounds * t * t + 3 * sboxes,
        MOV: config.total_rounds * t,
    }


# --- Interpretation ---

def interpret(program: UnrolledProgram, state: Sequence[int]) -> List[int]:
    """Execute the flat program directly on `state`.

    Raises:
        InvalidArity: If len(state) != program width
        ValueError: On an unknown opcode
    """
    if len(state) != program.width:
        raise InvalidArity(f"state must have {program.width} elements, got {len(state)}")
    prime = program.config.prime
    regs: Dict[str, int] = {
        state_register(i): to_field_element(v) for i, v in enumerate(state)
    }

    def value(operand: Operand) -> int:
        return operand if isinstance(operand, int) else regs[operand]

    for ins in program.instructions:
        if ins.op == ADD:
            regs[ins.dst] = (value(ins.lhs) + value(ins.rhs)) % prime
        elif ins.op == MUL:
            regs[ins.dst] = (value(ins.lhs) * value(ins.rhs)) % prime
        elif ins.op == MOV:
            regs[ins.dst] = value(ins.lhs)
        else:
            raise ValueError(f"unknown opcode {ins.op!r}")

    return [regs[state_register(i)] for i in range(program.width)]
