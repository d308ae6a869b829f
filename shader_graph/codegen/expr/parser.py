# Pratt parser for single GLSL expressions

from ...errors import ExpressionError
from .ast import (
    BINARY_PRECEDENCE, POSTFIX_PRECEDENCE, PREFIX_OPERATORS, PREFIX_PRECEDENCE,
    RIGHT_ASSOCIATIVE, TERNARY_PRECEDENCE,
    Binary, Call, Identifier, Index, Member, Number, Ternary, Unary,
)
from .lexer import EOF, IDENT, NUMBER, OP, PUNCT, tokenize


class Parser:
    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self.pos = 0

    # ============ Token helpers ============

    def peek(self):
        return self.tokens[self.pos]

    def advance(self):
        tok = self.tokens[self.pos]
        if tok.kind != EOF:
            self.pos += 1
        return tok

    def expect(self, text: str):
        tok = self.advance()
        if tok.text != text or tok.kind not in (OP, PUNCT):
            self.error(f"Expected {text!r}", tok)
        return tok

    def error(self, message, tok):
        found = tok.text or 'end of input'
        raise ExpressionError(f"{message}, found {found!r}", source=self.source, position=tok.start)

    # ============ Pratt core ============

    def parse(self):
        if self.peek().kind == EOF:
            self.error("Empty expression", self.peek())
        tree = self.expression(0)
        if self.peek().kind != EOF:
            self.error("Unexpected token", self.peek())
        return tree

    def expression(self, rbp: int):
        left = self.nud(self.advance())
        while rbp < self.left_binding_power(self.peek()):
            left = self.led(self.advance(), left)
        return left

    def left_binding_power(self, tok) -> int:
        if tok.kind == PUNCT and tok.text in '([.':
            return POSTFIX_PRECEDENCE
        if tok.kind != OP:
            return 0
        if tok.text in ('++', '--'):
            return POSTFIX_PRECEDENCE
        if tok.text == '?':
            return TERNARY_PRECEDENCE
        return BINARY_PRECEDENCE.get(tok.text, 0)

    def nud(self, tok):
        if tok.kind == NUMBER:
            return Number(tok.text)
        if tok.kind == IDENT:
            return Identifier(tok.text)
        if tok.kind == PUNCT and tok.text == '(':
            inner = self.expression(0)
            self.expect(')')
            return inner
        if tok.kind == OP and tok.text in PREFIX_OPERATORS:
            return Unary(tok.text, self.expression(PREFIX_PRECEDENCE - 1))
        self.error("Unexpected token", tok)

    def led(self, tok, left):
        text = tok.text
        if tok.kind == PUNCT:
            if text == '(':
                return Call(left, self.arguments())
            if text == '[':
                index = self.expression(0)
                self.expect(']')
                return Index(left, index)
            # '.'
            name = self.advance()
            if name.kind != IDENT:
                self.error("Expected field name", name)
            return Member(left, name.text)

        if text in ('++', '--'):
            return Unary(text, left, postfix=True)
        if text == '?':
            then = self.expression(0)
            self.expect(':')
            otherwise = self.expression(TERNARY_PRECEDENCE - 1)
            return Ternary(left, then, otherwise)

        bp = BINARY_PRECEDENCE[text]
        right = self.expression(bp - 1 if text in RIGHT_ASSOCIATIVE else bp)
        return Binary(text, left, right)

    def arguments(self):
        args = []
        if self.peek().text == ')' and self.peek().kind == PUNCT:
            self.advance()
            return tuple(args)
        while True:
            args.append(self.expression(0))
            tok = self.advance()
            if tok.kind == PUNCT and tok.text == ')':
                return tuple(args)
            if not (tok.kind == PUNCT and tok.text == ','):
                self.error("Expected ',' or ')'", tok)


def parse_expression(source: str):
    """Parse one GLSL expression, raising ExpressionError on failure."""
    return Parser(source).parse()
