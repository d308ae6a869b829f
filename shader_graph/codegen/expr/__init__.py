# User Expression Package
# Lexer, Pratt parser and AST-based identifier substitution for GLSL snippets

from .ast import Binary, Call, Identifier, Index, Member, Node, Number, Ternary, Unary
from .lexer import Token, tokenize
from .parser import Parser, parse_expression
from .substitute import render, rewrite_expression, substitute, substitute_identifiers

__all__ = [
    'Node',
    'Number',
    'Identifier',
    'Unary',
    'Binary',
    'Ternary',
    'Call',
    'Member',
    'Index',
    'Token',
    'tokenize',
    'Parser',
    'parse_expression',
    'render',
    'substitute',
    'rewrite_expression',
    'substitute_identifiers',
]
