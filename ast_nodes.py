from dataclasses import dataclass
from enum import Enum
from typing import Union


class Op(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Literal:
    value: float

    def __str__(self):
        return f"Literal({self.value})"


@dataclass(frozen=True)
class BinaryOp:
    left: 'Node'
    op: Op
    right: 'Node'

    def __str__(self):
        return render(self)


Node = Union[Literal, BinaryOp]


def render(node):
    """Render a tree as ``BinaryOp(Literal(1.0), +, Literal(2.0))`` without recursing."""
    parts = []
    # pending items are either nodes still to render or finished text
    work = [node]
    while work:
        item = work.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, BinaryOp):
            work.extend([")", item.right, f", {item.op}, ", item.left, "BinaryOp("])
        else:
            parts.append(str(item))
    return "".join(parts)
