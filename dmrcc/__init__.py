"""Small C compiler back end: source AST, TACKY intermediate code, x86-64 assembly tree and emission."""

__version__ = "0.1.0"

__all__ = ["asm_ast", "codegen", "lang_ast", "stack_alloc", "tacky"]