import pytest

from sharplisp.evaluation.evaluator import evaluate
from sharplisp.reader.lexer import tokenize
from sharplisp.reader.parser import parse
from sharplisp.types.values import IntegerValue, SymbolValue, FunctionValue, NIL, TRUE, FALSE


def _eval(source, scope):
    (node,) = parse(tokenize(source))
    return evaluate(node, scope)


def test_if_forces_only_selected_thunk(recorder):
    rec, scope = recorder
    assert _eval("(if (eq 1 1) #(tick :then) #(tick :else))", scope) == NIL
    assert rec.calls == [SymbolValue("then")]


def test_if_false_branch(recorder):
    rec, scope = recorder
    _eval("(if (eq 1 2) #(tick :then) #(tick :else))", scope)
    assert rec.calls == [SymbolValue("else")]


def test_if_returns_plain_values(scope):
    assert _eval("(if (eq :a :a) 1 2)", scope) == IntegerValue(1)
    assert _eval("(if (eq :a :b) 1 2)", scope) == IntegerValue(2)


def test_if_unselected_print_never_runs(scope, capsys):
    _eval("(if (eq 1 1) #(print :yes) #(print :no))", scope)
    assert capsys.readouterr().out == "yes\n"


def test_bare_branches_are_evaluated_eagerly(recorder):
    # Known quirk: only #(...) branches are deferred; a bare branch runs before `if` does
    rec, scope = recorder
    _eval("(if (eq 1 2) (tick :then) #(tick :else))", scope)
    assert rec.calls == [SymbolValue("then"), SymbolValue("else")]


@pytest.mark.parametrize("condition", [":yes", "1", "(list)", ":nil", ":false"])
def test_only_true_symbol_selects_then(scope, condition):
    assert _eval(f"(if {condition} :then :else)", scope) == SymbolValue("else")
    assert _eval("(if :true :then :else)", scope) == SymbolValue("then")


def test_when_true_forces_thunk(recorder):
    rec, scope = recorder
    assert _eval("(when (eq 2 2) #(add 1 2))", scope) == IntegerValue(3)
    assert _eval("(when :true #(tick :ran))", scope) == NIL
    assert rec.calls == [SymbolValue("ran")]


def test_when_false_returns_false_without_forcing(recorder):
    rec, scope = recorder
    assert _eval("(when (eq 1 2) #(tick :ran))", scope) == FALSE
    assert rec.calls == []


def test_when_returns_plain_value(scope):
    assert _eval("(when :true 5)", scope) == IntegerValue(5)


def test_forced_thunk_runs_in_child_scope(scope):
    # a def inside a forced thunk binds in the thunk's own scope, not the caller's
    _eval("(when :true #(def :inner 1))", scope)
    assert "inner" not in scope


def test_forcing_returns_a_returned_function_unforced(scope):
    value = _eval("(if :true #(id #(add 1 1)) 0)", scope)
    assert isinstance(value, FunctionValue)
    assert value([], scope) == IntegerValue(2)


def test_eq_returns_sentinels(scope):
    assert _eval("(eq 3 3)", scope) == TRUE
    assert _eval("(eq 3 4)", scope) == FALSE
