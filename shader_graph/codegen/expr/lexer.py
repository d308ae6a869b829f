# GLSL Expression Lexer
# Splits user-authored GLSL snippets into tokens with source offsets

import re
from collections import namedtuple

from ...errors import ExpressionError

Token = namedtuple('Token', ['kind', 'text', 'start', 'end'])

NUMBER = 'NUMBER'
IDENT = 'IDENT'
OP = 'OP'
PUNCT = 'PUNCT'
OTHER = 'OTHER'
EOF = 'EOF'

# Longest operators first so '<=' wins over '<'
OPERATORS = (
    '<<=', '>>=',
    '++', '--', '<=', '>=', '==', '!=', '&&', '||', '^^', '<<', '>>',
    '+=', '-=', '*=', '/=', '%=',
    '+', '-', '*', '/', '%', '<', '>', '!', '~', '?', ':', '=', '&', '|', '^',
)
PUNCTUATION = '(),.;{}[]'

_TOKEN_RE = re.compile(r'''
    (?P<space>\s+)
  | (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?[fFuU]?)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<op>%s)
  | (?P<punct>[%s])
''' % ('|'.join(re.escape(op) for op in OPERATORS), re.escape(PUNCTUATION)),
    re.VERBOSE | re.DOTALL)

_KINDS = {'number': NUMBER, 'ident': IDENT, 'op': OP, 'punct': PUNCT}


def tokenize(source: str, strict: bool = True):
    """
    Tokenize a GLSL snippet. Whitespace and comments are dropped.

    With strict=False unknown characters become OTHER tokens instead of
    raising, so callers that splice by offset can still walk the text.
    """
    tokens = []
    pos = 0
    length = len(source)
    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            if strict:
                raise ExpressionError(
                    f"Unexpected character {source[pos]!r}", source=source, position=pos)
            tokens.append(Token(OTHER, source[pos], pos, pos + 1))
            pos += 1
            continue
        group = match.lastgroup
        if group in _KINDS:
            tokens.append(Token(_KINDS[group], match.group(), match.start(), match.end()))
        pos = match.end()
    tokens.append(Token(EOF, '', length, length))
    return tokens
