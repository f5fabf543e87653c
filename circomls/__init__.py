"""Lexer, error-tolerant parser, syntax tree, AST and semantic index for Circom."""

__version__ = "0.1.0"

__all__ = [
    "token_kind",
    "lexer",
    "events",
    "parser",
    "grammar",
    "syntax",
    "ast",
    "vfs",
    "database",
]