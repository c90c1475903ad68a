"""JSON interchange format for the scopelang AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding, so that a program can be handed
to the evaluator without going through the bundled parser.

Document shape:

* numbers -> `IntegerLiteral` (integers within 64 bits only)
* booleans -> `BooleanLiteral`
* strings -> `StringLiteral`
* `{"Identifier": "name"}` -> `Identifier`
* tagged forms, either as a single-key object `{"Tag": [operands...]}`
  or as an array headed by the tag `["Tag", operand, ...]`

`ast_to_obj` always emits the object form, e.g. the factorial program
encodes as::

    {"Def": [{"Identifier": "fact"},
             {"Lambda": [{"Parameters": [{"Identifier": "n"}]},
                         {"Block": [{"Cond": [...]}]}]}]}

`ast_from_obj` rejects every shape it cannot map with a `ParseError`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from .ast import (
    Node,
    Identifier,
    StringLiteral,
    IntegerLiteral,
    BooleanLiteral,
    Application,
    Block,
    Lambda,
    Clause,
    Cond,
    Let,
    Definition,
    Assignment,
)
from .errors import ParseError
from .types import I64_MAX, I64_MIN

# Accepted spellings of each tag, looked up case-insensitively
TAGS: Dict[str, str] = {
    'identifier': 'Identifier',
    'application': 'Application',
    'apply': 'Application',
    'lambda': 'Lambda',
    'λ': 'Lambda',
    'parameters': 'Parameters',
    'cond': 'Cond',
    'clause': 'Clause',
    'block': 'Block',
    'let': 'Let',
    'def': 'Def',
    'definition': 'Def',
    'assignment': 'Assignment',
    '=': 'Assignment',
    'set!': 'Assignment',
}


def ast_to_obj(node: Node) -> Any:
    if isinstance(node, BooleanLiteral):
        return node.value
    if isinstance(node, IntegerLiteral):
        return node.value
    if isinstance(node, StringLiteral):
        return node.text
    if isinstance(node, Identifier):
        return {"Identifier": node.name}
    if isinstance(node, Application):
        return {"Application": [ast_to_obj(node.callee)] + [ast_to_obj(a) for a in node.args]}
    if isinstance(node, Lambda):
        params = {"Parameters": [{"Identifier": p} for p in node.params]}
        return {"Lambda": [params, ast_to_obj(node.body)]}
    if isinstance(node, Cond):
        return {"Cond": [{"Clause": [ast_to_obj(c.test), ast_to_obj(c.result)]} for c in node.clauses]}
    if isinstance(node, Block):
        return {"Block": [ast_to_obj(e) for e in node.exprs]}
    if isinstance(node, Let):
        operands = [{"Identifier": node.name}, ast_to_obj(node.value)]
        if node.body is not None:
            operands.append(ast_to_obj(node.body))
        return {"Let": operands}
    if isinstance(node, Definition):
        return {"Def": [{"Identifier": node.name}, ast_to_obj(node.value)]}
    if isinstance(node, Assignment):
        return {"Assignment": [{"Identifier": node.name}, ast_to_obj(node.value)]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def dumps(node: Node, indent: Optional[int] = None) -> str:
    return json.dumps(ast_to_obj(node), ensure_ascii=False, indent=indent)


def loads(text: str) -> Node:
    """Decode a JSON interchange document into an AST."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid interchange document: {e.msg} at {e.lineno}:{e.colno}",
                         e.lineno, e.colno, 'JSON document')
    except RecursionError:
        raise ParseError("invalid interchange document: nesting too deep",
                         expected='less deeply nested document') from None
    try:
        return ast_from_obj(data)
    except RecursionError:
        raise ParseError("nesting too deep in interchange document",
                         expected='less deeply nested document') from None


def _fragment(obj: Any) -> str:
    text = json.dumps(obj, ensure_ascii=False)
    if len(text) > 60:
        text = text[:57] + '...'
    return text


def _reject(message: str, obj: Any) -> ParseError:
    return ParseError(f"{message} in interchange document: {_fragment(obj)}",
                      expected=message, found=_fragment(obj))


def _split_form(obj: Any) -> Optional[Tuple[str, List[Any]]]:
    """Return (canonical tag, operands) if `obj` is a tagged form."""
    if isinstance(obj, dict):
        if len(obj) != 1:
            return None
        (key, operands), = obj.items()
        tag = TAGS.get(key.lower())
        if tag is None:
            return None
        if tag == 'Identifier':
            return tag, [operands]
        if not isinstance(operands, list):
            raise _reject(f"expected a list of operands for {tag}", obj)
        return tag, operands
    if isinstance(obj, list) and obj and isinstance(obj[0], str):
        tag = TAGS.get(obj[0].lower())
        if tag is None:
            return None
        return tag, obj[1:]
    return None


def _name_from_obj(obj: Any) -> str:
    if isinstance(obj, str):
        return obj
    form = _split_form(obj)
    if form is not None and form[0] == 'Identifier' and len(form[1]) == 1 and isinstance(form[1][0], str):
        return form[1][0]
    raise _reject("expected an identifier", obj)


def _params_from_obj(obj: Any) -> List[str]:
    form = _split_form(obj)
    if form is not None and form[0] == 'Parameters':
        items = form[1]
    elif isinstance(obj, list):
        items = obj
    else:
        raise _reject("expected a parameter list", obj)
    params = [_name_from_obj(p) for p in items]
    if len(set(params)) != len(params):
        raise _reject("expected distinct parameter names", obj)
    return params


def _clause_from_obj(obj: Any) -> Clause:
    form = _split_form(obj)
    if form is not None and form[0] == 'Clause':
        operands = form[1]
    elif form is None and isinstance(obj, list):
        operands = obj
    else:
        raise _reject("expected a cond clause", obj)
    if len(operands) != 2:
        raise _reject("expected a clause with a test and a result", obj)
    return Clause(ast_from_obj(operands[0]), ast_from_obj(operands[1]))


def _block_from_obj(obj: Any) -> Block:
    node = ast_from_obj(obj)
    if not isinstance(node, Block):
        raise _reject("expected a block", obj)
    return node


def ast_from_obj(obj: Any) -> Node:
    if isinstance(obj, bool):
        return BooleanLiteral(obj)
    if isinstance(obj, int):
        if obj < I64_MIN or obj > I64_MAX:
            raise _reject("expected an integer that fits in 64 bits", obj)
        return IntegerLiteral(obj)
    if isinstance(obj, float):
        raise _reject("expected an integer", obj)
    if isinstance(obj, str):
        return StringLiteral(obj)
    if obj is None:
        raise _reject("expected an expression", obj)

    form = _split_form(obj)
    if form is None:
        raise _reject("unknown form", obj)
    t, operands = form

    if t == 'Identifier':
        return Identifier(_name_from_obj(obj))
    if t == 'Application':
        if not operands:
            raise _reject("expected a function to apply", obj)
        return Application(callee=ast_from_obj(operands[0]), args=[ast_from_obj(a) for a in operands[1:]])
    if t == 'Lambda':
        if len(operands) != 2:
            raise _reject("expected parameters and a block for Lambda", obj)
        return Lambda(params=_params_from_obj(operands[0]), body=_block_from_obj(operands[1]))
    if t == 'Cond':
        if not operands:
            raise _reject("expected at least one clause for Cond", obj)
        return Cond(clauses=[_clause_from_obj(c) for c in operands])
    if t == 'Block':
        if not operands:
            raise _reject("expected at least one expression in Block", obj)
        return Block(exprs=[ast_from_obj(e) for e in operands])
    if t == 'Let':
        if len(operands) not in (2, 3):
            raise _reject("expected a name, a value and an optional block for Let", obj)
        body = _block_from_obj(operands[2]) if len(operands) == 3 else None
        return Let(name=_name_from_obj(operands[0]), value=ast_from_obj(operands[1]), body=body)
    if t == 'Def':
        if len(operands) != 2:
            raise _reject("expected a name and a value for Def", obj)
        return Definition(name=_name_from_obj(operands[0]), value=ast_from_obj(operands[1]))
    if t == 'Assignment':
        if len(operands) != 2:
            raise _reject("expected a name and a value for Assignment", obj)
        return Assignment(name=_name_from_obj(operands[0]), value=ast_from_obj(operands[1]))

    raise _reject(f"{t} is not an expression", obj)
