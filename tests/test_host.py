import json

import scopelang
from scopelang import (
    parse, evaluate, parse_and_evaluate, parse_to_string,
    interpret_to_string, interpret_with_parser_to_string,
)

DIVERGENT = '{ let incr = λ(n){add(amt,n)}; let amt = 1; incr(5) }'


def test_aliases():
    assert parse is parse_to_string
    assert evaluate is interpret_to_string
    assert parse_and_evaluate is interpret_with_parser_to_string
    assert 'Interpreter' in scopelang.__all__


def test_parse_to_string():
    document = parse_to_string('{ add(1,2) }')
    assert json.loads(document) == {"Block": [{"Application": [{"Identifier": "add"}, 1, 2]}]}


def test_parse_errors_are_rendered():
    assert parse_to_string('"open').startswith('LexError: unterminated string literal')
    assert parse_to_string('{ }').startswith('ParseError: expected expression in block')


def test_interpret_document():
    document = parse_to_string(DIVERGENT)
    assert interpret_to_string(document, lexical_scope=False) == '6'
    assert interpret_to_string(document) == "UnboundIdentifierError: undefined symbol 'amt'"


def test_interpret_rejects_bad_documents():
    assert interpret_to_string('{"Mystery": [1]}').startswith('ParseError: ')
    assert interpret_to_string('not json').startswith('ParseError: invalid interchange document')


def test_interpret_with_parser():
    assert interpret_with_parser_to_string('{ concat(to_uppercase("hello"), " ", "world") }') == 'HELLO world'
    assert interpret_with_parser_to_string('as_list(1, "a", true)') == '[1, "a", true]'
    assert interpret_with_parser_to_string('zero?(0)') == 'true'
    assert interpret_with_parser_to_string(DIVERGENT, lexical_scope=False) == '6'
    assert interpret_with_parser_to_string('div(1, 0)') == 'DivisionByZeroError: division by zero'


def test_parsed_and_decoded_programs_agree():
    source = '{ def fact = λ(n) { cond (zero?(n) => 1) (true => mul(n, fact(sub(n, 1)))) }; fact(12) }'
    assert interpret_to_string(parse_to_string(source)) == interpret_with_parser_to_string(source) == '479001600'


def test_deeply_nested_source_is_a_parse_error():
    source = '{' * 5000 + '1' + '}' * 5000
    assert parse_to_string(source).startswith('ParseError: nesting too deep')
    assert interpret_with_parser_to_string(source).startswith('ParseError: nesting too deep')


def test_deeply_nested_document_is_a_parse_error():
    assert interpret_to_string('[' * 100000).startswith('ParseError: ')
    nested = '{"Block": [' * 5000 + '1' + ']}' * 5000
    assert interpret_to_string(nested).startswith('ParseError: ')
