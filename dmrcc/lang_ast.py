"""Source-level syntax tree and its lowering to the intermediate representation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dmrcc.tacky import (
    TackyConstant,
    TackyFunction,
    TackyInstruction,
    TackyProgram,
    TackyReturn,
    TackyUnary,
    TackyUnaryOperator,
    TackyVal,
    TackyVar,
    new_temporary,
)


class UnaryOperator(Enum):
    """Unary operators of the source language."""

    COMPLEMENT = "Complement"
    NEGATE = "Negate"

    def to_tacky(self) -> TackyUnaryOperator:
        if self is UnaryOperator.COMPLEMENT:
            return TackyUnaryOperator.COMPLEMENT
        return TackyUnaryOperator.NEGATE


@dataclass(frozen=True)
class Constant:
    """Integer literal expression."""

    value: int

    def to_tacky(self) -> tuple[list[TackyInstruction], TackyVal]:
        """Return the instructions computing the expression and its value."""
        return [], TackyConstant(self.value)

    def format_debug(self) -> str:
        return f"Constant({self.value})"


@dataclass(frozen=True)
class Unary:
    """Unary operator applied to an expression."""

    operator: UnaryOperator
    operand: Expression

    def to_tacky(self) -> tuple[list[TackyInstruction], TackyVal]:
        """Return the instructions computing the expression and its value."""
        instructions, source = self.operand.to_tacky()
        destination = TackyVar(new_temporary())
        instructions.append(TackyUnary(self.operator.to_tacky(), source, destination))
        return instructions, destination

    def format_debug(self) -> str:
        return "\n".join(
            [f"Unary {self.operator.value} (", self.operand.format_debug(), ")"]
        )


Expression = Constant | Unary


@dataclass(frozen=True)
class ReturnStatement:
    """A return statement."""

    expression: Expression

    def to_tacky(self) -> list[TackyInstruction]:
        instructions, value = self.expression.to_tacky()
        instructions.append(TackyReturn(value))
        return instructions

    def format_debug(self) -> str:
        return "\n".join(["Return(", self.expression.format_debug(), ")"])


@dataclass(frozen=True)
class FunctionDef:
    """A function definition with a single statement body."""

    name: str
    body: ReturnStatement

    def to_tacky(self) -> TackyFunction:
        return TackyFunction(self.name, self.body.to_tacky())

    def format_debug(self) -> str:
        return "\n".join(
            ["Function(", f'name="{self.name}"', self.body.format_debug(), ")"]
        )


@dataclass(frozen=True)
class Program:
    """A whole program: a single function definition."""

    function: FunctionDef

    def to_tacky(self) -> TackyProgram:
        return TackyProgram(self.function.to_tacky())

    def format_debug(self) -> str:
        return "\n".join(["Program(", self.function.format_debug(), ")"])