# Identifier substitution and rendering for user expressions
#
# User expressions name their inputs (e.g. `d`, `value`); the compiler binds
# those names to generated variables. Substitution works on the AST so
# swizzles and called function names are never touched, and rendering adds
# parentheses only where precedence needs them.

import logging
from typing import Dict, Mapping, Union

from ...errors import ExpressionError
from .ast import (
    POSTFIX_PRECEDENCE, PREFIX_PRECEDENCE, RIGHT_ASSOCIATIVE, TERNARY_PRECEDENCE,
    Binary, Call, Identifier, Index, Member, Node, Number, Ternary, Unary,
)
from .lexer import IDENT, PUNCT, tokenize
from .parser import parse_expression

logger = logging.getLogger(__name__)

Binding = Union[str, Node]


# ============ Rendering ============

def _wrap(node: Node, needs_parens: bool) -> str:
    text = render(node)
    return f"({text})" if needs_parens else text


def render(node: Node) -> str:
    """Emit GLSL text for an expression tree."""
    if isinstance(node, Number):
        return node.text
    if isinstance(node, Identifier):
        return node.name

    if isinstance(node, Unary):
        if node.postfix:
            return f"{_wrap(node.operand, node.operand.precedence < POSTFIX_PRECEDENCE)}{node.op}"
        operand = _wrap(node.operand, node.operand.precedence < PREFIX_PRECEDENCE)
        # '-' followed by '-x' would lex as '--'
        if operand[:1] in '+-' and node.op[-1] in '+-':
            operand = f"({operand})"
        return f"{node.op}{operand}"

    if isinstance(node, Binary):
        p = node.precedence
        if node.op in RIGHT_ASSOCIATIVE:
            left = _wrap(node.left, node.left.precedence <= p)
            right = _wrap(node.right, node.right.precedence < p)
        else:
            left = _wrap(node.left, node.left.precedence < p)
            right = _wrap(node.right, node.right.precedence <= p)
        return f"{left} {node.op} {right}"

    if isinstance(node, Ternary):
        cond = _wrap(node.condition, node.condition.precedence <= TERNARY_PRECEDENCE)
        otherwise = _wrap(node.otherwise, node.otherwise.precedence < TERNARY_PRECEDENCE)
        return f"{cond} ? {render(node.then)} : {otherwise}"

    if isinstance(node, Call):
        callee = _wrap(node.callee, node.callee.precedence < POSTFIX_PRECEDENCE)
        return f"{callee}({', '.join(render(arg) for arg in node.args)})"
    if isinstance(node, Member):
        return f"{_wrap(node.target, node.target.precedence < POSTFIX_PRECEDENCE)}.{node.name}"
    if isinstance(node, Index):
        target = _wrap(node.target, node.target.precedence < POSTFIX_PRECEDENCE)
        return f"{target}[{render(node.index)}]"

    raise TypeError(f"Unknown expression node: {node!r}")


# ============ AST substitution ============

def substitute(tree: Node, bindings: Mapping[str, Node]) -> Node:
    """
    Replace bound Identifier nodes with their replacement subtrees.

    Member names and called function names are left alone, so binding `x`
    never rewrites `p.x` and binding `sin` never rewrites `sin(t)`.
    """
    if isinstance(tree, Identifier):
        return bindings.get(tree.name, tree)
    if isinstance(tree, Number):
        return tree
    if isinstance(tree, Unary):
        return Unary(tree.op, substitute(tree.operand, bindings), tree.postfix)
    if isinstance(tree, Binary):
        return Binary(tree.op, substitute(tree.left, bindings), substitute(tree.right, bindings))
    if isinstance(tree, Ternary):
        return Ternary(
            substitute(tree.condition, bindings),
            substitute(tree.then, bindings),
            substitute(tree.otherwise, bindings),
        )
    if isinstance(tree, Call):
        callee = tree.callee if isinstance(tree.callee, Identifier) else substitute(tree.callee, bindings)
        return Call(callee, tuple(substitute(arg, bindings) for arg in tree.args))
    if isinstance(tree, Member):
        return Member(substitute(tree.target, bindings), tree.name)
    if isinstance(tree, Index):
        return Index(substitute(tree.target, bindings), substitute(tree.index, bindings))
    raise TypeError(f"Unknown expression node: {tree!r}")


def _as_tree(value: Binding) -> Node:
    return value if isinstance(value, Node) else parse_expression(value)


def rewrite_expression(source: str, bindings: Mapping[str, str]) -> str:
    """
    Bind names in a single-line expression and render it back to GLSL.

    Text that does not parse as one expression falls back to token-level
    substitution, so it still reaches the GPU compiler unchanged otherwise.
    """
    try:
        tree = parse_expression(source)
        trees = {name: _as_tree(value) for name, value in bindings.items()}
    except ExpressionError as e:
        logger.debug(f"Expression fallback to token substitution: {e}")
        return substitute_identifiers(source, bindings)
    return render(substitute(tree, trees))


# ============ Token-level substitution ============

def _is_atomic(text: str) -> bool:
    try:
        return parse_expression(text).precedence >= POSTFIX_PRECEDENCE
    except ExpressionError:
        return False


def substitute_identifiers(text: str, bindings: Mapping[str, str]) -> str:
    """
    Rewrite identifier tokens in arbitrary GLSL text (statements included).

    Everything but the rewritten identifiers is preserved verbatim. An
    identifier right after '.' is a field or swizzle and is never rewritten;
    a replacement that is not a single atom is parenthesized.
    """
    if not bindings:
        return text
    replacements: Dict[str, str] = {
        name: value if _is_atomic(value) else f"({value})"
        for name, value in bindings.items()
    }
    pieces = []
    cursor = 0
    prev = None
    for tok in tokenize(text, strict=False):
        if tok.kind == IDENT and tok.text in replacements:
            after_dot = prev is not None and prev.kind == PUNCT and prev.text == '.'
            if not after_dot:
                pieces.append(text[cursor:tok.start])
                pieces.append(replacements[tok.text])
                cursor = tok.end
        prev = tok
    pieces.append(text[cursor:])
    return ''.join(pieces)
