import random

import pytest

from cyk.engine.fill import build_table, create_table, fill_cell, fill_table, freeze_table
from cyk.engine.runtime import accepts, recognize
from cyk.grammar.loader import load_grammar
from cyk.grammar.model import build_grammar
from cyk.lex import TOKEN, tokenize


@pytest.fixture
def unary():
    return build_grammar("S", ["a", "b"], ["S"], [("S", ["a"]), ("S", ["b"])])


@pytest.fixture
def ab():
    return build_grammar("S", ["a", "b"], ["S", "A", "B"],
                         [("S", ["A", "B"]), ("A", ["a"]), ("B", ["b"])])


@pytest.fixture
def textbook(grammar_path):
    return load_grammar(grammar_path("textbook.txt"))


def test_trivial_grammar(unary):
    assert accepts(unary, "a")
    assert accepts(unary, "b")
    res = recognize(unary, "c")
    assert not res.accepted
    assert res.table.rows == (("c",), (frozenset(),))


def test_binary_combination(ab):
    res = recognize(ab, "ab")
    assert res.accepted
    t = res.table
    assert t.rows[0] == ("a", "b")
    assert t.cell(1, 0) == {"A"}
    assert t.cell(1, 1) == {"B"}
    assert t.cell(2, 0) == {"S"}
    assert t.top == {"S"}


def test_no_spurious_acceptance(ab):
    assert not accepts(ab, "ba")
    assert not accepts(ab, "abb")
    res = recognize(ab, "ax")
    assert res.table.cell(1, 1) == frozenset()
    assert res.table.top == frozenset()


def test_textbook_table(textbook):
    t = recognize(textbook, "baaba").table
    assert [set(c) for c in t.rows[1]] == [{"B"}, {"A", "C"}, {"A", "C"}, {"B"}, {"A", "C"}]
    assert [set(c) for c in t.rows[2]] == [{"S", "A"}, {"B"}, {"S", "C"}, {"S", "A"}]
    assert [set(c) for c in t.rows[3]] == [set(), {"B"}, {"B"}]
    assert [set(c) for c in t.rows[4]] == [set(), {"S", "A", "C"}]
    assert t.top == {"S", "A", "C"}
    assert t.accepts("S")


def test_textbook_rejects(textbook):
    assert not accepts(textbook, "bb")
    assert not accepts(textbook, "baab")


def test_table_shape():
    table = create_table(["x", "y", "z"])
    assert [len(r) for r in table] == [3, 3, 2, 1]
    assert table[0] == ["x", "y", "z"]


def test_create_table_refuses_empty_input():
    with pytest.raises(ValueError):
        create_table([])


def test_each_cell_written_once(ab):
    table = create_table(["a", "b"])
    fill_cell(table, ab, 1, 0)
    with pytest.raises(RuntimeError, match="already filled"):
        fill_cell(table, ab, 1, 0)


def test_dependencies_must_be_final(ab):
    table = create_table(["a", "b"])
    fill_cell(table, ab, 1, 0)
    with pytest.raises(RuntimeError, match="not filled yet"):
        fill_cell(table, ab, 2, 0)


def test_determinism(textbook):
    first = recognize(textbook, "baaba")
    for _ in range(5):
        again = recognize(textbook, "baaba")
        assert again.table == first.table
        assert again.accepted == first.accepted


def test_split_order_does_not_change_cells(textbook):
    word = "baabaab"
    expected = build_table(textbook, word)
    rng = random.Random(1234)
    for _ in range(10):
        table = create_table(word)
        n = len(word)
        for length in range(1, n + 1):
            for start in range(n - length + 1):
                splits = list(range(1, length))
                rng.shuffle(splits)
                fill_cell(table, textbook, length, start, splits)
        assert freeze_table(table) == expected


def test_missing_row_one_entry_blocks_split():
    g = build_grammar("S", ["a", "b", "c"], ["S", "A", "B"],
                      [("S", ["A", "B"]), ("A", ["a"]), ("B", ["b"])])
    t = build_table(g, "cb")
    assert t.cell(1, 0) == frozenset()
    assert t.top == frozenset()


def test_empty_input_uses_empty_derivation():
    with_eps = build_grammar("S", ["a"], ["S"], [("S", ["a"]), ("S", ["*"])])
    without = build_grammar("S", ["a"], ["S"], [("S", ["a"])])
    res = recognize(with_eps, "")
    assert res.accepted and res.table is None
    assert not accepts(without, "")
    assert accepts(with_eps, tokenize("eps"))


def test_start_without_productions_never_accepts():
    g = build_grammar("S", ["a"], ["S", "A"], [("A", ["a"])])
    assert not accepts(g, "a")
    assert not accepts(g, "")


def test_token_mode_sentence(grammar_path):
    g = load_grammar(grammar_path("sentence.txt"))
    assert accepts(g, tokenize("the dog saw a cat", TOKEN))
    assert accepts(g, ["a", "cat", "chased", "the", "dog"])
    assert not accepts(g, tokenize("dog the saw a cat", TOKEN))
    res = recognize(g, tokenize("the dog saw a cat", TOKEN))
    assert res.table.derivable_spans("NP") == [(2, 0), (2, 3)]


def test_cell_bounds(ab):
    t = build_table(ab, "ab")
    with pytest.raises(IndexError):
        t.cell(3, 0)
    with pytest.raises(IndexError):
        t.cell(2, 1)


def test_fill_table_returns_frozen(ab):
    t = fill_table(create_table("ab"), ab)
    assert all(isinstance(c, frozenset) for row in t.rows[1:] for c in row)
    assert isinstance(t.rows, tuple)
