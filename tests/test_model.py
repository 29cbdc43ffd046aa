import pytest

from cyk.grammar.ast import ProductionDecl, Span
from cyk.grammar.model import (
    EMPTY, GrammarError, Pair, Term, build_grammar,
)


def test_redeclared_lhs_merges_alternatives():
    g = build_grammar("S", ["a", "b"], ["S"], [("S", ["a"]), ("S", ["b"])])
    assert g.alternatives("S") == (Term("a"), Term("b"))
    assert g.producers("a") == {"S"}
    assert g.producers("b") == {"S"}


def test_duplicate_alternative_kept_once():
    g = build_grammar("S", ["a"], ["S"], [("S", ["a"]), ("S", ["a"])])
    assert g.alternatives("S") == (Term("a"),)


def test_producers_is_structural():
    decls = [
        ("S", ["A", "BC"]),
        ("T", ["AB", "C"]),
        ("A", ["x"]), ("AB", ["x"]), ("BC", ["x"]), ("C", ["x"]),
    ]
    g = build_grammar("S", ["x"], ["S", "T", "A", "AB", "BC", "C"], decls)
    assert g.producers(("A", "BC")) == {"S"}
    assert g.producers(Pair("AB", "C")) == {"T"}
    assert g.producers(("AB", "C")) == {"T"}
    assert g.producers("ABC") == frozenset()
    assert g.producers(Term("x")) == {"A", "AB", "BC", "C"}


def test_same_alternative_under_several_lhs():
    g = build_grammar("S", ["a"], ["S", "A"], [("S", ["a"]), ("A", ["a"])])
    assert g.producers("a") == {"S", "A"}


def test_unknown_rhs_returns_empty_set():
    g = build_grammar("S", ["a"], ["S"], [("S", ["a"])])
    assert g.producers("z") == frozenset()
    assert g.producers(("S", "S")) == frozenset()


def test_empty_alternative_is_first_class():
    g = build_grammar("S", ["a"], ["S", "A"], [("S", ["*"]), ("A", ["a"])])
    assert g.alternatives("S") == (EMPTY,)
    assert g.derives_empty()
    assert not g.derives_empty("A")
    assert g.producers(EMPTY) == {"S"}
    # ε is never reachable through the terminal path
    assert g.producers("*") == frozenset()


def test_custom_empty_marker():
    g = build_grammar("S", ["*"], ["S"], [("S", ["*"]), ("S", ["eps"])], empty_marker="eps")
    assert g.derives_empty()
    assert g.producers("*") == {"S"}


def test_empty_marker_colliding_with_terminal_is_rejected():
    with pytest.raises(GrammarError, match="Empty marker"):
        build_grammar("S", ["*", "a"], ["S"], [("S", ["a"])])


def test_start_without_productions_is_legal():
    g = build_grammar("S", ["a"], ["S", "A"], [("A", ["a"])])
    assert g.alternatives("S") == ()
    assert not g.derives_empty()


@pytest.mark.parametrize("decl, msg", [
    (("S", ["a", "b"]), "two non-terminals"),
    (("S", ["A", "a"]), "two non-terminals"),
    (("S", ["A", "A", "A"]), "3 symbols"),
    (("S", []), "0 symbols"),
    (("S", ["A"]), "Unit production"),
    (("S", ["q"]), "Undeclared symbol 'q'"),
    (("S", ["A", "Q"]), "Undeclared symbol 'Q'"),
    (("Q", ["a"]), "not a declared non-terminal"),
])
def test_malformed_productions_fail_at_construction(decl, msg):
    with pytest.raises(GrammarError, match=msg):
        build_grammar("S", ["a", "b"], ["S", "A"], [decl])


def test_symbol_in_both_sets_is_rejected():
    with pytest.raises(GrammarError, match="both terminal and non-terminal"):
        build_grammar("S", ["a", "S"], ["S"], [])


def test_error_carries_source_location():
    decl = ProductionDecl("S", ["a", "a"], Span(10, 13, 4, 3))
    with pytest.raises(GrammarError, match="at 4:3"):
        build_grammar("S", ["a"], ["S"], [decl])


def test_grammar_error_is_a_syntax_error():
    assert issubclass(GrammarError, SyntaxError)


def test_rules_sorted_by_lhs():
    g = build_grammar("S", ["a", "b"], ["S", "B", "A"],
                      [("S", ["A", "B"]), ("B", ["b"]), ("A", ["a"])])
    assert [lhs for lhs, _ in g.rules()] == ["A", "B", "S"]
    assert g.is_terminal("a") and not g.is_terminal("A")
    assert g.is_nonterminal("B") and not g.is_nonterminal("b")


def test_empty_marker_colliding_with_nonterminal_is_rejected():
    with pytest.raises(GrammarError, match="Empty marker 'A' is also a declared non-terminal"):
        build_grammar("S", ["a"], ["S", "A"], [("S", ["A"]), ("A", ["a"])], empty_marker="A")


def test_grammar_is_read_only_and_hashable():
    g = build_grammar("S", ["a"], ["S"], [("S", ["a"])])
    with pytest.raises(TypeError):
        g.productions["S"] = ()
    with pytest.raises(TypeError):
        g._unary["b"] = frozenset({"S"})
    assert g.alternatives("S") == (Term("a"),)
    assert {g: 1}[g] == 1
