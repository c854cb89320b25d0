import logging

import ply.lex as lex

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """The input is not a well-formed formula."""


# --------------------------
# Lexer (Tokenization)
# --------------------------
tokens = (
    'NUMBER',
    'PLUS', 'MINUS', 'MUL', 'DIV',
    'LPAREN', 'RPAREN'
)

t_PLUS = r'\+'
t_MINUS = r'-'
t_MUL = r'\*'
t_DIV = r'/'
t_LPAREN = r'\('
t_RPAREN = r'\)'


def t_NUMBER(t):
    r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
    t.value = float(t.value)
    return t


def t_error(t):
    raise ParseError(f"Illegal character '{t.value[0]}' at {t.lexpos}")


lexer = lex.lex()


def tokenize(text):
    """Split normalized text into tokens.

    Signs are always separate MINUS/PLUS tokens here; whether a sign belongs
    to a number is decided by the parser.
    """
    # clone so concurrent callers never share input position
    scanner = lexer.clone()
    scanner.input(text)
    result = list(scanner)
    logger.debug("tokens for %r: %s", text, [tok.type for tok in result])
    return result
