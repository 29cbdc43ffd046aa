# cyk/render/emit_json.py
"""JSON Emit: 다른 도구가 소비하기 쉬운 단일 JSON 문서.

스키마
------
{
  "start": "S",
  "terminals": [...], "nonterminals": [...],
  "productions": {"S": [["A", "B"], ["a"], []], ...},   # [] = ε
  "word": "ab", "mode": "char", "tokens": ["a", "b"],
  "table": [["a", "b"], [["A"], ["B"]], [["S"]]] | null,
  "accepted": true
}
"""

from __future__ import annotations
import json
from typing import Dict, List

from ..grammar.model import Alternative, Grammar, Pair, Term
from ..engine.runtime import CYKResult


def _alt_to_list(alt: Alternative) -> List[str]:
    if isinstance(alt, Term):
        return [alt.symbol]
    if isinstance(alt, Pair):
        return [alt.left, alt.right]
    return []


def build_document(grammar: Grammar, result: CYKResult) -> Dict:
    productions = {lhs: [_alt_to_list(a) for a in alts] for lhs, alts in grammar.rules()}
    table = None
    if result.table is not None:
        rows = result.table.rows
        table = [list(rows[0])] + [[sorted(c) for c in row] for row in rows[1:]]
    return {
        "start": grammar.start,
        "terminals": list(grammar.terminals),
        "nonterminals": list(grammar.nonterminals),
        "productions": productions,
        "word": result.word.text,
        "mode": result.word.mode,
        "tokens": list(result.word.tokens),
        "table": table,
        "accepted": result.accepted,
    }


def emit_json_to_string(grammar: Grammar, result: CYKResult, indent: int = 2) -> str:
    return json.dumps(build_document(grammar, result), indent=indent, ensure_ascii=False) + "\n"
