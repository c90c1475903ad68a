"""Render an AST back to canonical source text.

`to_source(parse_program(text))` parses to the same tree as `text`.
Blocks always separate their expressions with `;` and applications
always separate arguments with `,`.
"""

from .ast import (
    Node, Identifier, StringLiteral, IntegerLiteral, BooleanLiteral,
    Application, Block, Lambda, Cond, Let, Definition, Assignment,
)
from .types import quote_string


def to_source(node: Node) -> str:
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return quote_string(node.text)
    if isinstance(node, IntegerLiteral):
        return str(node.value)
    if isinstance(node, BooleanLiteral):
        # true/false are bound in the root frame
        return 'true' if node.value else 'false'
    if isinstance(node, Application):
        args = ', '.join(to_source(a) for a in node.args)
        return f"{to_source(node.callee)}({args})"
    if isinstance(node, Lambda):
        return f"λ({', '.join(node.params)}) {to_source(node.body)}"
    if isinstance(node, Cond):
        clauses = ' '.join(f"({to_source(c.test)} => {to_source(c.result)})" for c in node.clauses)
        return f"cond {clauses}"
    if isinstance(node, Block):
        return '{ ' + '; '.join(to_source(e) for e in node.exprs) + ' }'
    if isinstance(node, Let):
        text = f"let {node.name} = {to_source(node.value)}"
        if node.body is not None:
            text += ' ' + to_source(node.body)
        return text
    if isinstance(node, Definition):
        return f"def {node.name} = {to_source(node.value)}"
    if isinstance(node, Assignment):
        return f"{node.name} = {to_source(node.value)}"
    raise TypeError(f"Unsupported node for rendering: {type(node).__name__}")
