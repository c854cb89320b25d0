import logging
import math
import operator

from ast_nodes import BinaryOp, Literal, Op

logger = logging.getLogger(__name__)


class EvaluationError(RuntimeError):
    """The AST handed to the evaluator breaks the tree invariants."""


def _divide(left, right):
    # IEEE 754 division; Python floats raise on a zero divisor instead
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


_BIN_OPS = {
    Op.ADD: operator.add,
    Op.SUB: operator.sub,
    Op.MUL: operator.mul,
    Op.DIV: _divide,
}


class Evaluator:
    """Reduces an AST to one float with a post-order walk and a value stack.

    The walk keeps its own work list instead of recursing, so left-deep
    chains such as ``1+1+...+1`` are limited by memory only.
    """

    def __init__(self):
        self.stack = []

    def evaluate(self, node):
        self.stack = []
        # (node, children_done) pairs; right is pushed before left so left runs first
        work = [(node, False)]
        while work:
            current, children_done = work.pop()
            if isinstance(current, Literal):
                self.push(current.value)
            elif isinstance(current, BinaryOp):
                if children_done:
                    self.apply(current.op)
                else:
                    if current.left is None or current.right is None:
                        raise EvaluationError("invalid formula: operator node is missing a child")
                    work.append((current, True))
                    work.append((current.right, False))
                    work.append((current.left, False))
            else:
                raise EvaluationError(f"invalid formula: unknown node {type(current).__name__}")

        if len(self.stack) != 1:
            raise EvaluationError(f"invalid formula: {len(self.stack)} values left on the stack")
        return self.stack.pop()

    def push(self, value):
        self.stack.append(float(value))

    def pop(self):
        if not self.stack:
            raise EvaluationError("invalid formula: value stack underflow")
        return self.stack.pop()

    def apply(self, op):
        if op not in _BIN_OPS:
            raise EvaluationError(f"invalid formula: unsupported operator {op!r}")
        right = self.pop()
        left = self.pop()
        self.push(_BIN_OPS[op](left, right))


def evaluate(node):
    result = Evaluator().evaluate(node)
    logger.debug("evaluated to %r", result)
    return result
