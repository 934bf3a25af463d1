import itertools

import pytest
from hypothesis import given, strategies as st

from sharplisp.errors import (
    SharpLexError,
    SharpUnbalancedParenError,
    SharpIntegerRangeError,
    SharpParseError,
)
from sharplisp.reader.lexer import tokenize, tokenize_with_positions
from sharplisp.reader.parser import parse, find_matching_close
from sharplisp.types.nodes import (
    ListNode,
    LambdaNode,
    IdentifierNode,
    IntegerNode,
    SymbolNode,
    unparse,
)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("add", ["add"]),
        ("(add 1 2)", ["(", "add", "1", "2", ")"]),
        ("#(add %0 1)", ["#(", "add", "%0", "1", ")"]),
        (":factorial", [":factorial"]),
        ("((x))", ["(", "(", "x", ")", ")"]),
        ("12abc", ["12", "abc"]),
        ("a:b%c9", ["a:b%c9"]),
        ("007", ["007"]),
        ("(print\n\t:x)", ["(", "print", ":x", ")"]),
        ("", []),
        ("   \n\t ", []),
    ]
)
def test_lexer_basic(source, expected):
    assert list(tokenize(source)) == expected


def test_lexer_positions():
    assert list(tokenize_with_positions(" (def :x #(id 1))")) == [
        ("(", 1), ("def", 2), (":x", 6), ("#(", 9), ("id", 11), ("1", 14), (")", 15), (")", 16),
    ]


@pytest.mark.parametrize(
    "source,char,position",
    [
        ("(add 1 $)", "$", 7),
        ("#x", "#", 0),
        ("-5", "-", 0),
        ("(a) \"s\"", '"', 4),
    ]
)
def test_lexer_rejects_unknown_characters(source, char, position):
    with pytest.raises(SharpLexError) as info:
        list(tokenize(source))
    assert info.value.char == char
    assert info.value.position == position


def test_lexer_is_lazy():
    tokens = tokenize("(a) $")
    assert list(itertools.islice(tokens, 3)) == ["(", "a", ")"]
    with pytest.raises(SharpLexError):
        next(tokens)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", [IntegerNode(42)]),
        ("x", [IdentifierNode("x")]),
        (":x", [SymbolNode("x")]),
        ("%1", [IdentifierNode("%1")]),
        ("(add 2 3)", [ListNode((IdentifierNode("add"), IntegerNode(2), IntegerNode(3)))]),
        ("#(add %0 1)", [LambdaNode((IdentifierNode("add"), IdentifierNode("%0"), IntegerNode(1)))]),
        ("()", [ListNode(())]),
        ("1 :b c", [IntegerNode(1), SymbolNode("b"), IdentifierNode("c")]),
    ]
)
def test_parser(source, expected):
    assert parse(tokenize(source)) == expected


def test_nested_lists():
    source = "(a (b #(c 1)) d)"
    expected = ListNode((
        IdentifierNode("a"),
        ListNode((IdentifierNode("b"), LambdaNode((IdentifierNode("c"), IntegerNode(1))))),
        IdentifierNode("d"),
    ))
    assert parse(tokenize(source)) == [expected]


@pytest.mark.parametrize("source", ["(add 1", "((a)", "#(a", "(a #(b)", ")", "(a))"])
def test_unbalanced_parentheses(source):
    with pytest.raises(SharpUnbalancedParenError):
        parse(tokenize(source))


def test_integer_range():
    assert parse(["2147483647"]) == [IntegerNode(2147483647)]
    with pytest.raises(SharpIntegerRangeError):
        parse(["2147483648"])
    assert issubclass(SharpIntegerRangeError, SharpParseError)


def test_find_matching_close():
    tokens = ["(", "a", "#(", "b", ")", "(", ")", ")", "c"]
    assert find_matching_close(tokens, 0) == 7
    assert find_matching_close(tokens, 2) == 4
    assert find_matching_close(tokens, 5) == 6


def test_unparse():
    source = "(do (def :f #(add %0 1)) (f 2))"
    assert unparse(parse(tokenize(source))) == source


# -------------------------------
# Properties
# -------------------------------
@given(st.from_regex(r"[0-9]{1,9}", fullmatch=True))
def test_integer_token_roundtrip(digits):
    tokens = list(tokenize(digits))
    assert tokens == [digits]
    assert parse(tokens) == [IntegerNode(int(digits))]


atom_strat = st.one_of(
    st.integers(min_value=0, max_value=10_000).map(IntegerNode),
    st.sampled_from(["add", "x", "%0", "print"]).map(IdentifierNode),
    st.sampled_from(["a", "true", "nil"]).map(SymbolNode),
)

node_strat = st.recursive(
    atom_strat,
    lambda children: st.builds(
        lambda cls, kids: cls(tuple(kids)),
        st.sampled_from([ListNode, LambdaNode]),
        st.lists(children, max_size=4),
    ),
    max_leaves=25,
)

form_strat = st.builds(lambda cls, kids: cls(tuple(kids)), st.sampled_from([ListNode, LambdaNode]), st.lists(node_strat, max_size=4))


@given(form_strat)
def test_depth_returns_to_zero_at_matching_close(form):
    tokens = list(tokenize(str(form)))
    assert find_matching_close(tokens, 0) == len(tokens) - 1
    assert parse(tokens) == [form]


@given(form_strat)
def test_one_unmatched_open_fails(form):
    tokens = list(tokenize(str(form)))
    with pytest.raises(SharpUnbalancedParenError):
        parse(tokens[:-1])
