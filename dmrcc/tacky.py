"""Three-address intermediate representation and its lowering to the assembly tree."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

from dmrcc.asm_ast import (
    AsmFunction,
    AsmProgram,
    AsmUnary,
    AsmUnaryOperator,
    Imm,
    Instruction,
    Mov,
    Operand,
    Pseudo,
    Reg,
    Register,
    Ret,
)

_temporary_counter = itertools.count(1)


def new_temporary() -> int:
    """Return a fresh temporary variable id, unique for the whole process."""
    return next(_temporary_counter)


class TackyUnaryOperator(Enum):
    """Unary operators of the intermediate representation."""

    COMPLEMENT = "Complement"
    NEGATE = "Negate"

    def to_asm(self) -> AsmUnaryOperator:
        if self is TackyUnaryOperator.COMPLEMENT:
            return AsmUnaryOperator.NOT
        return AsmUnaryOperator.NEGATION

    def format_debug(self) -> str:
        return self.value


@dataclass(frozen=True)
class TackyConstant:
    """Integer constant value."""

    value: int

    def to_asm(self) -> Operand:
        return Imm(self.value)

    def format_debug(self) -> str:
        return f"Constant {self.value}"


@dataclass(frozen=True)
class TackyVar:
    """Temporary variable, identified by a number."""

    name: int

    def to_asm(self) -> Operand:
        return Pseudo(self.name)

    def format_debug(self) -> str:
        return f"Var t{self.name}"


TackyVal = TackyConstant | TackyVar


@dataclass(frozen=True)
class TackyReturn:
    """Return a value from the function."""

    value: TackyVal

    def to_asm(self) -> list[Instruction]:
        """Lower to a move into AX followed by a return."""
        return [Mov(self.value.to_asm(), Register(Reg.AX)), Ret()]

    def format_debug(self) -> str:
        return "\n".join(["Return(", self.value.format_debug(), ")"])


@dataclass(frozen=True)
class TackyUnary:
    """Apply a unary operator to src and store the result in dst."""

    operator: TackyUnaryOperator
    src: TackyVal
    dst: TackyVal

    def to_asm(self) -> list[Instruction]:
        """Lower to a move of src into dst followed by the operation on dst."""
        dst = self.dst.to_asm()
        return [Mov(self.src.to_asm(), dst), AsmUnary(self.operator.to_asm(), dst)]

    def format_debug(self) -> str:
        return "\n".join(
            [
                "UnaryOperator(",
                self.operator.format_debug(),
                f"src: {self.src.format_debug()}",
                f"dest: {self.dst.format_debug()}",
                ")",
            ]
        )


TackyInstruction = TackyReturn | TackyUnary


@dataclass
class TackyFunction:
    """A named function holding intermediate instructions."""

    name: str
    instructions: list[TackyInstruction] = field(default_factory=list)

    def to_asm(self) -> AsmFunction:
        asm_instructions = [
            asm for instruction in self.instructions for asm in instruction.to_asm()
        ]
        return AsmFunction(self.name, asm_instructions)

    def format_debug(self) -> str:
        lines = [f"Name: {self.name}"]
        lines.extend(instruction.format_debug() for instruction in self.instructions)
        return "\n".join(lines)


@dataclass
class TackyProgram:
    """A whole program in intermediate form: a single function."""

    function: TackyFunction

    def to_asm(self) -> AsmProgram:
        return AsmProgram(self.function.to_asm())

    def format_debug(self) -> str:
        return self.function.format_debug()