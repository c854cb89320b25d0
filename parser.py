import logging

from ast_nodes import BinaryOp, Literal, Op
from lexer import ParseError, tokenize

logger = logging.getLogger(__name__)

_ADDITIVE = {'PLUS': Op.ADD, 'MINUS': Op.SUB}
_MULTIPLICATIVE = {'MUL': Op.MUL, 'DIV': Op.DIV}


class _Group:
    """Partial expression and term of one parenthesized level."""

    def __init__(self, negate=False):
        self.negate = negate
        self.expression = None
        self.add_op = None
        self.term = None
        self.mul_op = None

    def add_factor(self, node):
        if self.term is None:
            self.term = node
        else:
            self.term = BinaryOp(self.term, self.mul_op, node)

    def close_term(self):
        if self.expression is None:
            self.expression = self.term
        else:
            self.expression = BinaryOp(self.expression, self.add_op, self.term)
        self.term = None

    def close(self):
        if self.negate:
            # -( e ) is sugar for -1 * e
            return BinaryOp(Literal(-1.0), Op.MUL, self.expression)
        return self.expression


class Parser:
    """Descent parser over the tokens of one normalized line.

    Grammar, lowest precedence first:

        expression := term { ('+' | '-') term }
        term       := factor { ('*' | '/') factor }
        factor     := '-' '(' expression ')' | '(' expression ')' | atom
        atom       := ['+' | '-'] NUMBER

    Both binary levels fold to the left, so ``10-5-100`` is ``(10-5)-100``.
    Open parentheses are kept on an explicit stack of groups rather than
    the Python call stack, so nesting depth is limited by memory only.
    """

    def __init__(self, tokens):
        self.tokens = tokens
        self.index = 0

    @property
    def current(self):
        return self.peek()

    def peek(self, offset=0):
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def check(self, type_, offset=0):
        token = self.peek(offset)
        return token is not None and token.type == type_

    def check_any(self, types):
        return self.current is not None and self.current.type in types

    def eat(self, type_):
        token = self.current
        if not self.check(type_):
            found = token.type if token is not None else 'end of input'
            raise ParseError(f"Expected {type_}, found {found}")
        self.index += 1
        return token

    def parse(self):
        groups = [_Group()]
        while True:
            self.open_groups(groups)
            node = self.atom()

            # fold the factor in, closing groups for each ')' that follows
            while True:
                group = groups[-1]
                group.add_factor(node)
                if self.check_any(_MULTIPLICATIVE):
                    group.mul_op = _MULTIPLICATIVE[self.eat(self.current.type).type]
                    break

                group.close_term()
                if self.check_any(_ADDITIVE):
                    group.add_op = _ADDITIVE[self.eat(self.current.type).type]
                    break

                if len(groups) == 1:
                    if self.current is not None:
                        raise ParseError(f"Unexpected {self.current.type} after expression")
                    return group.close()

                self.eat('RPAREN')
                node = groups.pop().close()

    def open_groups(self, groups):
        while True:
            if self.check('MINUS') and self.check('LPAREN', 1):
                self.eat('MINUS')
                self.eat('LPAREN')
                groups.append(_Group(negate=True))
            elif self.check('LPAREN'):
                self.eat('LPAREN')
                groups.append(_Group())
            else:
                return

    def atom(self):
        sign = 1.0
        if self.check('MINUS'):
            self.eat('MINUS')
            sign = -1.0
        elif self.check('PLUS'):
            self.eat('PLUS')

        token = self.eat('NUMBER')
        return Literal(sign * token.value)


def parse(text):
    """Parse a normalized line into an AST, raising ParseError on any violation."""
    node = Parser(tokenize(text)).parse()
    logger.debug("parsed %r into %s", text, node)
    return node
