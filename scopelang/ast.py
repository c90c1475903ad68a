"""Abstract Syntax Tree (AST) definitions for scopelang.

The AST classes defined in this module represent the syntactic structure
of parsed programs. They are produced either by the recursive-descent
parser or by the interchange decoder in `ast_json`, and are evaluated by
the interpreter. Each node corresponds to a form in the grammar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Identifier(Node):
    name: str


@dataclass
class StringLiteral(Node):
    text: str


@dataclass
class IntegerLiteral(Node):
    value: int


@dataclass
class BooleanLiteral(Node):
    # only the interchange decoder builds these; source text uses the
    # `true`/`false` identifiers
    value: bool


@dataclass
class Application(Node):
    callee: Node
    args: List[Node]


@dataclass
class Block(Node):
    exprs: List[Node]


@dataclass
class Lambda(Node):
    params: List[str]
    body: Block


@dataclass
class Clause:
    test: Node
    result: Node


@dataclass
class Cond(Node):
    clauses: List[Clause]


@dataclass
class Let(Node):
    name: str
    value: Node
    body: Optional[Block] = None


@dataclass
class Definition(Node):
    name: str
    value: Node


@dataclass
class Assignment(Node):
    name: str
    value: Node
