import json

from cyk.engine.runtime import recognize
from cyk.grammar.model import build_grammar
from cyk.lex import TOKEN, tokenize
from cyk.render.emit_json import build_document, emit_json_to_string
from cyk.render.emit_text import (
    emit_grammar_to_string, emit_report_to_string, emit_table_to_string,
    emit_verdict_to_string,
)


def _ab():
    return build_grammar("S", ["a", "b"], ["S", "A", "B"],
                         [("S", ["A", "B"]), ("S", ["*"]), ("A", ["a"]), ("B", ["b"])])


def test_table_box_layout():
    table = recognize(_ab(), "ab").table
    assert emit_table_to_string(table) == "\n".join([
        "+-----+-----+",
        "| a   | b   |",
        "+-----+-----+",
        "| A   | B   |",
        "+-----+-----+",
        "| S   |",
        "+-----+",
    ]) + "\n"


def test_empty_cells_and_sorted_members():
    g = build_grammar("S", ["a"], ["S", "A"], [("S", ["a"]), ("A", ["a"]), ("S", ["A", "A"])])
    out = emit_table_to_string(recognize(g, "ax").table)
    assert "| A,S   | -     |" in out


def test_grammar_summary():
    assert emit_grammar_to_string(_ab()) == "\n".join([
        "G = ({a, b}, {S, A, B}, P, S)",
        "",
        "Productions P:",
        "A -> a",
        "B -> b",
        "S -> A B | *",
    ]) + "\n"


def test_verdict_banner():
    out = emit_verdict_to_string("S", "ab", True)
    assert "Start Symbol: S" in out
    assert "Word        : ab" in out
    assert "Result      : ACCEPTED" in out
    assert "REJECTED" in emit_verdict_to_string("S", "", False)
    assert "EPS (empty string)" in emit_verdict_to_string("S", "", False)


def test_report_for_empty_word_is_only_the_banner():
    g = _ab()
    res = recognize(g, tokenize("eps"))
    assert emit_report_to_string(g, res) == emit_verdict_to_string("S", "", True)


def test_full_report_sections():
    g = _ab()
    out = emit_report_to_string(g, recognize(g, "ab"))
    assert out.startswith("Word: ab\n\nG = (")
    assert "Applying CYK-Algorithm:" in out
    assert out.rstrip().endswith("=" * 36)


def test_json_document():
    g = _ab()
    doc = build_document(g, recognize(g, tokenize("a b", TOKEN)))
    assert doc["table"] == [["a", "b"], [["A"], ["B"]], [["S"]]]
    assert doc["productions"]["S"] == [["A", "B"], []]
    assert doc["tokens"] == ["a", "b"]
    assert doc["mode"] == "token"
    assert doc["accepted"] is True


def test_json_for_empty_word():
    g = _ab()
    doc = json.loads(emit_json_to_string(g, recognize(g, "")))
    assert doc["table"] is None
    assert doc["accepted"] is True
    assert doc["word"] == ""
