"""Lexer and recursive-descent parser for scopelang.

This module implements a two-stage parsing pipeline:

1. **Tokenizing**: `tokenize` turns source text into a list of `Token`
   objects. Whitespace and `//` line comments are dropped here.

2. **Parsing**: `Parser` consumes the tokens with one token of lookahead
   (two to tell an assignment `x = e` from a bare identifier) and builds
   the AST defined in `ast`. There is one `parse_*` method per grammar
   rule:

       PROGRAM    := EXP EOF
       EXP        := PRIMARY ( '(' ARGS? ')' )*
       PRIMARY    := LAMBDA | COND | BLOCK | LET | DEFINITION | ASSIGNMENT | ATOM
       ARGS       := EXP ( (';' | ',') EXP )*
       LAMBDA     := ('lambda' | 'λ') '(' ( IDENT (',' IDENT)* )? ')' BLOCK
       COND       := 'cond' ( '(' EXP '=>' EXP ')' )+
       BLOCK      := '{' EXP (';'? EXP)* ';'? '}'
       LET        := 'let' IDENT '=' EXP BLOCK?
       DEFINITION := 'def' IDENT '='? EXP
       ASSIGNMENT := IDENT '=' EXP
       ATOM       := IDENT | STRING | INTEGER

The `parse_program` function is the public entry point. Lexical problems
raise `LexError` and syntax problems raise `ParseError`; neither ever
returns a partial tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .ast import (
    Node, Identifier, StringLiteral, IntegerLiteral, Application, Block,
    Lambda, Clause, Cond, Let, Definition, Assignment,
)
from .errors import LexError, ParseError
from .types import I64_MAX, I64_MIN

###############################################################################
# Tokenizer
###############################################################################

KEYWORDS = {
    'lambda': 'lambda',
    'λ': 'lambda',
    'cond': 'cond',
    'def': 'def',
    'let': 'let',
    '=': '=',
    '=>': '=>',
}

PUNCTUATION = {'(', ')', '{', '}', ',', ';'}

# Characters that can never appear inside an identifier
DELIMITERS = {'"', '(', ')', '{', '}', ',', ';'}

ESCAPES = {'\\': '\\', '"': '"', 'n': '\n', 't': '\t', 'r': '\r'}


@dataclass
class Token:
    type: str
    value: Union[str, int]
    line: int
    column: int

    def describe(self) -> str:
        if self.type == 'EOF':
            return 'end of input'
        if self.type == 'STRING':
            return f'string "{self.value}"'
        if self.type == 'INT':
            return f"integer {self.value}"
        if self.type == 'IDENT':
            return f"identifier '{self.value}'"
        return f"'{self.value}'"


def is_digit(c: str) -> bool:
    # ASCII only; other Unicode digits such as `²` are identifier characters
    return '0' <= c <= '9'


def is_ident_char(c: str) -> bool:
    return not (c.isspace() or c in DELIMITERS)


def _ends_word(source: str, i: int) -> bool:
    # an arrow or a comment ends an identifier or integer even without spacing
    return source.startswith('=>', i) or source.startswith('//', i)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with an EOF token.

    Identifiers are any run of characters other than whitespace, quotes,
    parentheses, braces, commas and semicolons. A run that spells a
    keyword becomes a keyword token. `=>` always ends an identifier so
    that `true=>x` reads as three tokens. Integers take an optional sign
    and must fit in 64 bits.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        # Skip whitespace
        if c.isspace():
            advance()
            continue
        # Line comments
        if source.startswith('//', i):
            while i < length and source[i] != '\n':
                advance()
            continue
        # String literal
        if c == '"':
            start_line, start_col = line, col
            advance()  # skip opening quote
            chars: List[str] = []
            closed = False
            while i < length:
                ch = source[i]
                if ch == '\\':
                    esc_line, esc_col = line, col
                    advance()
                    if i >= length:
                        break
                    escaped = source[i]
                    if escaped not in ESCAPES:
                        raise LexError(f"invalid escape sequence '\\{escaped}'", esc_line, esc_col)
                    chars.append(ESCAPES[escaped])
                    advance()
                    continue
                if ch == '"':
                    advance()  # skip closing quote
                    closed = True
                    break
                chars.append(ch)
                advance()
            if not closed:
                raise LexError("unterminated string literal", start_line, start_col)
            tokens.append(Token('STRING', ''.join(chars), start_line, start_col))
            continue
        if c in PUNCTUATION:
            tokens.append(Token(c, c, line, col))
            advance()
            continue
        if source.startswith('=>', i):
            tokens.append(Token('=>', '=>', line, col))
            advance(2)
            continue
        # Integers, with an optional sign
        if is_digit(c) or (c in '+-' and i + 1 < length and is_digit(source[i + 1])):
            start_line, start_col = line, col
            start_i = i
            advance()
            while i < length and is_digit(source[i]):
                advance()
            if i < length and is_ident_char(source[i]) and not _ends_word(source, i):
                raise LexError(f"invalid character {source[i]!r} in integer literal", line, col)
            value = int(source[start_i:i])
            if value < I64_MIN or value > I64_MAX:
                raise LexError(f"integer literal {value} does not fit in 64 bits", start_line, start_col)
            tokens.append(Token('INT', value, start_line, start_col))
            continue
        # Identifiers and keywords
        if is_ident_char(c):
            start_line, start_col = line, col
            start_i = i
            while i < length and is_ident_char(source[i]) and not _ends_word(source, i):
                advance()
            text = source[start_i:i]
            if text in KEYWORDS:
                tokens.append(Token(KEYWORDS[text], text, start_line, start_col))
            else:
                tokens.append(Token('IDENT', text, start_line, start_col))
            continue
        raise LexError(f"unexpected character {c!r}", line, col)
    tokens.append(Token('EOF', '', line, col))
    return tokens


###############################################################################
# Parser implementation
###############################################################################


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def error(self, expected: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.peek()
        found = token.describe()
        return ParseError(
            f"expected {expected} at {token.line}:{token.column}, got {found}",
            token.line, token.column, expected, found,
        )

    def consume(self, expected: str, description: Optional[str] = None) -> Token:
        token = self.peek()
        if token.type != expected:
            raise self.error(description or f"'{expected}'", token)
        self.pos += 1
        return token

    def match(self, expected: Union[str, List[str]]) -> bool:
        token = self.peek()
        if isinstance(expected, list):
            return token.type in expected
        return token.type == expected

    def parse_program(self) -> Node:
        expr = self.parse_expression()
        if not self.match('EOF'):
            raise self.error('end of input')
        return expr

    def parse_expression(self) -> Node:
        node = self.parse_primary()
        # Application is postfix: any expression followed by '(' is called
        while self.match('('):
            node = self.parse_application(node)
        return node

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == 'lambda':
            return self.parse_lambda()
        if token.type == 'cond':
            return self.parse_cond()
        if token.type == '{':
            return self.parse_block()
        if token.type == 'let':
            return self.parse_let()
        if token.type == 'def':
            return self.parse_definition()
        if token.type == 'IDENT' and self.peek(1).type == '=':
            return self.parse_assignment()
        if token.type in ('IDENT', 'STRING', 'INT'):
            return self.parse_atom()
        raise self.error('expression', token)

    def parse_application(self, callee: Node) -> Application:
        self.consume('(')
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match([';', ',']):
                self.pos += 1
                args.append(self.parse_expression())
        self.consume(')', "',', ';' or ')' in argument list")
        return Application(callee, args)

    def parse_lambda(self) -> Lambda:
        self.consume('lambda')
        self.consume('(', "'(' after lambda")
        params: List[str] = []
        if not self.match(')'):
            params.append(self.parse_identifier('parameter name'))
            while self.match(','):
                self.consume(',')
                params.append(self.parse_identifier('parameter name'))
        self.consume(')', "',' or ')' in parameter list")
        if len(set(params)) != len(params):
            token = self.peek()
            raise ParseError(f"duplicate parameter name at {token.line}:{token.column}",
                             token.line, token.column, 'distinct parameter names', ', '.join(params))
        body = self.parse_block()
        return Lambda(params, body)

    def parse_cond(self) -> Cond:
        self.consume('cond')
        clauses: List[Clause] = []
        if not self.match('('):
            raise self.error("'(' to start a cond clause")
        while self.match('('):
            clauses.append(self.parse_clause())
        return Cond(clauses)

    def parse_clause(self) -> Clause:
        self.consume('(')
        test = self.parse_expression()
        self.consume('=>', "'=>' in cond clause")
        result = self.parse_expression()
        self.consume(')', "')' to close cond clause")
        return Clause(test, result)

    def parse_block(self) -> Block:
        self.consume('{', 'a block')
        if self.match('}'):
            raise self.error('expression in block')
        exprs: List[Node] = [self.parse_expression()]
        while not self.match('}'):
            if self.match(';'):
                self.consume(';')
                if self.match('}'):
                    break
            if self.match('EOF'):
                raise self.error("'}' to close block")
            exprs.append(self.parse_expression())
        self.consume('}')
        return Block(exprs)

    def parse_let(self) -> Let:
        self.consume('let')
        name = self.parse_identifier('identifier after let')
        self.consume('=', "'=' in let expression")
        value = self.parse_expression()
        body: Optional[Block] = None
        if self.match('{'):
            body = self.parse_block()
        return Let(name, value, body)

    def parse_definition(self) -> Definition:
        self.consume('def')
        name = self.parse_identifier('identifier after def')
        if self.match('='):
            self.consume('=')
        value = self.parse_expression()
        return Definition(name, value)

    def parse_assignment(self) -> Assignment:
        name = self.parse_identifier('identifier')
        self.consume('=')
        value = self.parse_expression()
        return Assignment(name, value)

    def parse_atom(self) -> Node:
        token = self.peek()
        self.pos += 1
        if token.type == 'INT':
            return IntegerLiteral(token.value)
        if token.type == 'STRING':
            return StringLiteral(token.value)
        return Identifier(token.value)

    def parse_identifier(self, description: str) -> str:
        token = self.consume('IDENT', description)
        return token.value


def parse_program(source: str) -> Node:
    """Parse source code into an AST using the recursive-descent parser."""
    tokens = tokenize(source)
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        token = parser.peek()
        raise ParseError(f"nesting too deep at {token.line}:{token.column}",
                         token.line, token.column, 'less deeply nested expression', token.describe()) from None
