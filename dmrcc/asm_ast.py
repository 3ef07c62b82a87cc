"""Assembly-level syntax tree with pseudoregister replacement and instruction fixing."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from dmrcc.stack_alloc import StackAllocTable


class Reg(Enum):
    """Hardware registers used by the generated code."""

    AX = "AX"
    R10 = "R10"


class AsmUnaryOperator(Enum):
    """Unary operators at the assembly level."""

    NEGATION = "Negation"
    NOT = "Not"


@dataclass(frozen=True)
class Imm:
    """Immediate integer operand."""

    value: int

    def format_debug(self) -> str:
        return f"Imm({self.value})"


@dataclass(frozen=True)
class Register:
    """Register operand."""

    reg: Reg

    def format_debug(self) -> str:
        return self.reg.value


@dataclass(frozen=True)
class Pseudo:
    """Pseudoregister operand, later replaced by a stack slot."""

    value: int

    def format_debug(self) -> str:
        return f"Pseudo({self.value})"


@dataclass(frozen=True)
class Stack:
    """Stack slot operand addressed relative to %rsp."""

    value: int

    def format_debug(self) -> str:
        return f"Stack({self.value})"


Operand = Imm | Register | Pseudo | Stack
_OPERAND_TYPES = (Imm, Register, Pseudo, Stack)


def _replace_operand(operand: Operand, table: StackAllocTable) -> tuple[Operand, int]:
    if isinstance(operand, Pseudo):
        address = table.get_or_insert(operand.value)
        return Stack(address), address
    return operand, 0


def _replace_operands(instruction: object, table: StackAllocTable) -> int:
    """Replace every pseudoregister operand of an instruction in place.

    Returns the highest offset among the instruction's operands, where an
    operand that is not a pseudoregister counts as 0; an instruction with no
    operands yields 0.
    """
    offsets = []
    for item in fields(instruction):
        value = getattr(instruction, item.name)
        if isinstance(value, _OPERAND_TYPES):
            replaced, offset = _replace_operand(value, table)
            setattr(instruction, item.name, replaced)
            offsets.append(offset)
    return max(offsets, default=0)


@dataclass
class Mov:
    """Move from a source operand to a destination operand."""

    src: Operand
    dst: Operand

    def format_debug(self) -> str:
        return f"Mov {self.src.format_debug()}, {self.dst.format_debug()}"

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        """Replace pseudoregister operands by stack slots; return the operands' offset."""
        return _replace_operands(self, table)


@dataclass
class AsmUnary:
    """Unary operation applied in place to an operand."""

    operator: AsmUnaryOperator
    operand: Operand

    def format_debug(self) -> str:
        return f"{self.operator.value} {self.operand.format_debug()}"

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        """Replace a pseudoregister operand by a stack slot; return its offset."""
        return _replace_operands(self, table)


@dataclass
class AllocateStack:
    """Reserve stack space for the function's locals."""

    offset: int

    def format_debug(self) -> str:
        return f"AllocateStack {self.offset}"

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        """Replace pseudoregister operands, of which this instruction has none."""
        return _replace_operands(self, table)


@dataclass
class Ret:
    """Return from the function."""

    def format_debug(self) -> str:
        return "Ret"

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        """Replace pseudoregister operands, of which this instruction has none."""
        return _replace_operands(self, table)


Instruction = Mov | AsmUnary | AllocateStack | Ret


@dataclass
class AsmFunction:
    """A named function holding a sequence of instructions."""

    name: str
    instructions: list[Instruction] = field(default_factory=list)

    def format_debug(self) -> str:
        lines = ["Function(", f"name = {self.name}"]
        lines.extend(instruction.format_debug() for instruction in self.instructions)
        lines.append(")")
        return "\n".join(lines)

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        """Replace all pseudoregisters; return the lowest stack offset reached."""
        offsets = [instruction.replace_pseudoregisters(table) for instruction in self.instructions]
        return min([0, *offsets])

    def fix_instructions(self, stack_offset: int) -> None:
        """Prepend stack allocation and split memory-to-memory moves through R10."""
        fixed: list[Instruction] = [AllocateStack(stack_offset)]
        for instruction in self.instructions:
            if (
                isinstance(instruction, Mov)
                and isinstance(instruction.src, Stack)
                and isinstance(instruction.dst, Stack)
            ):
                scratch = Register(Reg.R10)
                fixed.append(Mov(instruction.src, scratch))
                fixed.append(Mov(scratch, instruction.dst))
            else:
                fixed.append(instruction)
        self.instructions = fixed


@dataclass
class AsmProgram:
    """A whole program: a single function."""

    function: AsmFunction

    def format_debug(self) -> str:
        return "\n".join(["Program(", self.function.format_debug(), ")"])

    def replace_pseudoregisters(self, table: StackAllocTable) -> int:
        return self.function.replace_pseudoregisters(table)

    def fix_instructions(self, stack_offset: int) -> None:
        self.function.fix_instructions(stack_offset)