import pytest

from dmrcc.asm_ast import (
    AllocateStack,
    AsmFunction,
    AsmProgram,
    AsmUnary,
    AsmUnaryOperator,
    Imm,
    Mov,
    Pseudo,
    Reg,
    Register,
    Ret,
    Stack,
)
from dmrcc.stack_alloc import StackAllocTable


@pytest.mark.parametrize(
    "operand, text",
    [
        (Imm(5), "Imm(5)"),
        (Register(Reg.AX), "AX"),
        (Register(Reg.R10), "R10"),
        (Pseudo(3), "Pseudo(3)"),
        (Stack(-4), "Stack(-4)"),
    ],
)
def test_operand_debug(operand, text):
    assert operand.format_debug() == text


def test_instruction_debug():
    assert Mov(Imm(1), Register(Reg.AX)).format_debug() == "Mov Imm(1), AX"
    assert AsmUnary(AsmUnaryOperator.NOT, Pseudo(2)).format_debug() == "Not Pseudo(2)"
    assert AllocateStack(-4).format_debug() == "AllocateStack -4"
    assert Ret().format_debug() == "Ret"


def test_mov_replaces_pseudo_with_stack_slot():
    table = StackAllocTable()
    mov = Mov(Pseudo(7), Register(Reg.AX))
    offset = mov.replace_pseudoregisters(table)
    assert mov.src == Stack(table.get_or_insert(7))
    assert mov.dst == Register(Reg.AX)
    assert offset == 0


def test_unary_replacement_returns_slot_address():
    table = StackAllocTable()
    table.get_or_insert(1)
    unary = AsmUnary(AsmUnaryOperator.NEGATION, Pseudo(2))
    offset = unary.replace_pseudoregisters(table)
    assert offset == table.get_or_insert(2)
    assert unary.operand == Stack(offset)
    assert offset < 0


def test_non_pseudo_instructions_return_zero():
    table = StackAllocTable()
    assert AllocateStack(-8).replace_pseudoregisters(table) == 0
    assert Ret().replace_pseudoregisters(table) == 0
    assert AsmUnary(AsmUnaryOperator.NOT, Register(Reg.AX)).replace_pseudoregisters(table) == 0
    assert len(table) == 0


def test_function_replace_returns_lowest_offset():
    table = StackAllocTable()
    function = AsmFunction(
        "main",
        [
            Mov(Imm(2), Pseudo(1)),
            AsmUnary(AsmUnaryOperator.NEGATION, Pseudo(1)),
            Mov(Pseudo(1), Pseudo(2)),
            AsmUnary(AsmUnaryOperator.NOT, Pseudo(2)),
            Mov(Pseudo(2), Register(Reg.AX)),
            Ret(),
        ],
    )
    offset = function.replace_pseudoregisters(table)
    assert offset == min(table.get_or_insert(1), table.get_or_insert(2))
    assert not any(
        isinstance(op, Pseudo)
        for ins in function.instructions
        for op in vars(ins).values()
    )


def test_fix_instructions_prepends_allocation_and_splits_memory_moves():
    function = AsmFunction("main", [Mov(Stack(0), Stack(-4)), Ret()])
    function.fix_instructions(-4)
    assert function.instructions == [
        AllocateStack(-4),
        Mov(Stack(0), Register(Reg.R10)),
        Mov(Register(Reg.R10), Stack(-4)),
        Ret(),
    ]


def test_fix_instructions_keeps_other_moves():
    moves = [Mov(Imm(1), Stack(0)), Mov(Stack(0), Register(Reg.AX))]
    function = AsmFunction("f", list(moves))
    function.fix_instructions(0)
    assert function.instructions[1:] == moves
    assert function.instructions[0] == AllocateStack(0)


def test_program_delegates_and_debug_wraps_function():
    program = AsmProgram(AsmFunction("main", [Mov(Pseudo(1), Pseudo(2)), Ret()]))
    table = StackAllocTable()
    offset = program.replace_pseudoregisters(table)
    program.fix_instructions(offset)
    assert isinstance(program.function.instructions[0], AllocateStack)
    assert len(program.function.instructions) == 4
    lines = program.format_debug().split("\n")
    assert lines[:3] == ["Program(", "Function(", "name = main"]
    assert lines[-2:] == [")", ")"]
    assert "Ret" in lines