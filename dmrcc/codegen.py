"""Rendering of the assembly tree as AT&T-syntax x86-64 text."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from dmrcc.asm_ast import (
    AllocateStack,
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
    Stack,
)
from dmrcc.stack_alloc import StackAllocTable

_REGISTER_NAMES = {Reg.AX: "%eax", Reg.R10: "%r10d"}
_UNARY_MNEMONICS = {AsmUnaryOperator.NEGATION: "negl", AsmUnaryOperator.NOT: "notl"}


def render_operand(operand: Operand) -> str:
    """Render an operand in assembly syntax."""
    match operand:
        case Imm(value):
            return f"${value}"
        case Register(reg):
            return _REGISTER_NAMES[reg]
        case Pseudo(value):
            return f"t{value}"
        case Stack(value):
            return f"{value}(%rsp)"
    raise TypeError(f"not an operand: {operand!r}")


def render_instruction(instruction: Instruction) -> str:
    """Render one instruction as newline-terminated assembly lines."""
    match instruction:
        case Mov(src, dst):
            return f"movl {render_operand(src)}, {render_operand(dst)}\n"
        case AsmUnary(operator, operand):
            return f"{_UNARY_MNEMONICS[operator]} {render_operand(operand)}\n"
        case AllocateStack(offset):
            return f"subq {offset}, %rsp\n"
        case Ret():
            return "movq %rbp, %rsp\npopq %rbp\nret\n"
    raise TypeError(f"not an instruction: {instruction!r}")


def render_function(function: AsmFunction) -> str:
    """Render a function with its prologue and instructions."""
    prologue = (
        f".globl {function.name}\n"
        f"{function.name}:\n"
        "pushq %rbp\n"
        "movq %rsp, %rbp\n"
    )
    return prologue + "".join(render_instruction(i) for i in function.instructions)


def render_program(program: AsmProgram) -> str:
    """Render a whole program."""
    return render_function(program.function)


class CodegenCore:
    """Finishes an assembly tree and writes it to an output file."""

    def __init__(self, output_path: str | PathLike[str]) -> None:
        self.output_path = Path(output_path)

    def codegen(self, program: AsmProgram) -> None:
        """Allocate stack slots, fix instructions and write the assembly file.

        The program is modified in place. OSError propagates on write failure.
        """
        table = StackAllocTable()
        stack_offset = program.replace_pseudoregisters(table)
        program.fix_instructions(stack_offset)
        self.output_path.write_text(render_program(program))