# Expression AST
#
# Nodes are immutable; substitution builds new trees. Binding powers follow
# GLSL operator precedence and drive both parsing and minimal-paren rendering.

from dataclasses import dataclass
from typing import Tuple


# Binding power per binary operator (higher binds tighter)
BINARY_PRECEDENCE = {
    '=': 1, '+=': 1, '-=': 1, '*=': 1, '/=': 1, '%=': 1, '<<=': 1, '>>=': 1,
    '||': 3,
    '^^': 4,
    '&&': 5,
    '|': 6,
    '^': 7,
    '&': 8,
    '==': 9, '!=': 9,
    '<': 10, '>': 10, '<=': 10, '>=': 10,
    '<<': 11, '>>': 11,
    '+': 12, '-': 12,
    '*': 13, '/': 13, '%': 13,
}
RIGHT_ASSOCIATIVE = {'=', '+=', '-=', '*=', '/=', '%=', '<<=', '>>='}
PREFIX_OPERATORS = {'-', '+', '!', '~', '++', '--'}

TERNARY_PRECEDENCE = 2
PREFIX_PRECEDENCE = 14
POSTFIX_PRECEDENCE = 15


class Node:
    """Base class for expression nodes."""
    __slots__ = ()

    @property
    def precedence(self) -> int:
        return POSTFIX_PRECEDENCE


@dataclass(frozen=True)
class Number(Node):
    text: str


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Unary(Node):
    op: str
    operand: Node
    postfix: bool = False

    @property
    def precedence(self) -> int:
        return POSTFIX_PRECEDENCE if self.postfix else PREFIX_PRECEDENCE


@dataclass(frozen=True)
class Binary(Node):
    op: str
    left: Node
    right: Node

    @property
    def precedence(self) -> int:
        return BINARY_PRECEDENCE[self.op]


@dataclass(frozen=True)
class Ternary(Node):
    condition: Node
    then: Node
    otherwise: Node

    @property
    def precedence(self) -> int:
        return TERNARY_PRECEDENCE


@dataclass(frozen=True)
class Call(Node):
    callee: Node
    args: Tuple[Node, ...]


@dataclass(frozen=True)
class Member(Node):
    """Field or swizzle access: target.name"""
    target: Node
    name: str


@dataclass(frozen=True)
class Index(Node):
    target: Node
    index: Node
