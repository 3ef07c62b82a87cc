# dmrcc

`dmrcc` is the back end of a small compiler for a subset of C. The subset is
one function whose body is `return <expression>;`. The expression is an
integer constant, which may be wrapped in the unary operators negate (`-`)
and complement (`~`).

A program passes through three trees. Each stage is lowered to the next.

1. **Source AST** (`dmrcc.lang_ast`). This holds `Program`, `FunctionDef`,
   `ReturnStatement`, `Constant`, `Unary` and `UnaryOperator`. Calling
   `to_tacky()` on a `Program` gives a `TackyProgram`.
2. **TACKY**, a three-address intermediate form (`dmrcc.tacky`). This holds
   `TackyProgram`, `TackyFunction`, `TackyReturn`, `TackyUnary`,
   `TackyConstant`, `TackyVar` and `TackyUnaryOperator`. Each `Unary`
   expression gets a fresh temporary from `new_temporary()`. That counter
   starts at 1 and is shared by the whole process. Calling `to_asm()` on a
   `TackyProgram` gives an `AsmProgram`.
3. **Assembly AST** (`dmrcc.asm_ast`). This holds `AsmProgram`,
   `AsmFunction`, the instructions `Mov`, `AsmUnary`, `AllocateStack` and
   `Ret`, the operands `Imm`, `Register`, `Pseudo` and `Stack`, and the enums
   `Reg` and `AsmUnaryOperator`.

Every node has `format_debug()`, which returns a readable text dump of the
node. Enum members are the exception.

## Installation

```
pip install .
```

## Usage

```python
from dmrcc.lang_ast import Program, FunctionDef, ReturnStatement, Constant, Unary, UnaryOperator
from dmrcc.codegen import CodegenCore

# int main(void) { return ~(-2); }
ast = Program(
    FunctionDef(
        "main",
        ReturnStatement(
            Unary(UnaryOperator.COMPLEMENT, Unary(UnaryOperator.NEGATE, Constant(2)))
        ),
    )
)

tacky = ast.to_tacky()
print(tacky.format_debug())

asm = tacky.to_asm()
print(asm.format_debug())

CodegenCore("out.s").codegen(asm)
```

`CodegenCore(output_path).codegen(program)` changes `program` in place and
then writes it out, in four steps:

1. It replaces every `Pseudo` operand with a `Stack` operand. A
   `dmrcc.stack_alloc.StackAllocTable` gives each new pseudoregister a 4-byte
   slot. The first slot is at offset 0 and later slots go downwards (-4, -8, …).
   A pseudoregister that appears again keeps its slot.
2. It takes the lowest offset reached (0 or a negative number) as the stack
   offset.
3. It fixes the instructions. It puts `AllocateStack(stack_offset)` first, and
   it splits each `Mov` between two stack slots into two moves through
   `Register(Reg.R10)`.
4. It writes the text to the output path. A write failure raises `OSError`.

You can run the steps yourself with `AsmProgram.replace_pseudoregisters(table)`
and `AsmProgram.fix_instructions(stack_offset)`. `dmrcc.codegen` renders the
text without writing a file, through `render_program`, `render_function`,
`render_instruction` and `render_operand`.

### Emitted assembly

The output is AT&T-syntax x86-64.

- Each function starts with `.globl <name>`, `<name>:`, `pushq %rbp` and
  `movq %rsp, %rbp`.
- `Mov` becomes `movl`. `AsmUnary` becomes `negl` or `notl`.
- `AllocateStack(n)` becomes `subq n, %rsp`.
- `Ret` becomes `movq %rbp, %rsp`, `popq %rbp` and `ret`.
- Operands are written as follows:
  - `Imm(n)` is written as `$n`.
  - `Register(Reg.AX)` is written as `%eax`, and `Register(Reg.R10)` as `%r10d`.
  - `Stack(n)` is written as `n(%rsp)`.
  - `Pseudo(n)` is written as `tn`.

## What this package does not do

- **No lexing or parsing of C source.** You build the source AST yourself in
  Python, as shown above.
- **No command-line program.** The package has no executable.
- **No assembling or linking.** It only writes the assembly text.

## Running the tests

```
pip install .[test]
pytest
```