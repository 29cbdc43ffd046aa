# cyk/render/emit_text.py
"""Text Emit (문법 요약 / CYK 표 / 판정 배너를 **문자열로** 생성).

형식
----
- 표는 CYK 행마다 상자 한 줄. 칸 너비는 가장 긴 칸 + 2로 통일한다.
- 행 사이 테두리는 위/아래 두 행 중 **더 넓은 쪽**에 맞춘다(삼각형이 좁아지므로 윗행 기준).
- 빈 집합 칸은 `-`, 비단말 집합은 정렬 후 `,`로 이어 붙인다.
"""

from __future__ import annotations
from typing import List, Optional

from ..grammar.model import Alternative, Empty, Grammar
from ..engine.runtime import CYKResult
from ..engine.table import CYKTable

RULE = "=" * 36


# ---------- 유틸 ----------

def _fmt_set(names) -> str:
    return "{" + ", ".join(names) + "}"


def _fmt_cell(cell) -> str:
    if isinstance(cell, str):
        return cell
    if not cell:
        return "-"
    return ",".join(sorted(cell))


def _fmt_alt(alt: Alternative, empty_marker: str) -> str:
    return empty_marker if isinstance(alt, Empty) else str(alt)


def _border(cells: int, width: int) -> str:
    return "+" + ("-" * (width + 2) + "+") * cells


# ---------- 방출 ----------

def emit_table_to_string(table: CYKTable) -> str:
    """CYKTable → 상자 표 문자열(마지막 개행 포함)."""
    shown: List[List[str]] = [[_fmt_cell(c) for c in row] for row in table.rows]
    width = max(len(s) for row in shown for s in row) + 2

    out: List[str] = []
    prev_len = 0
    for row in shown:
        out.append(_border(max(prev_len, len(row)), width))
        out.append("".join(f"| {s:<{width}} " for s in row) + "|")
        prev_len = len(row)
    out.append(_border(prev_len, width))
    return "\n".join(out) + "\n"


def emit_grammar_to_string(grammar: Grammar) -> str:
    """G = (Σ, V, P, S) 요약과 프로덕션 목록."""
    lines = [
        f"G = ({_fmt_set(grammar.terminals)}, {_fmt_set(grammar.nonterminals)}, P, {grammar.start})",
        "",
        "Productions P:",
    ]
    for lhs, alts in grammar.rules():
        rhs = " | ".join(_fmt_alt(a, grammar.empty_marker) for a in alts)
        lines.append(f"{lhs} -> {rhs}")
    return "\n".join(lines) + "\n"


def emit_verdict_to_string(start: str, word: Optional[str], accepted: bool) -> str:
    """판정 배너. word가 비었으면 EPS로 표시."""
    shown = word if word else "EPS (empty string)"
    return "\n".join([
        RULE,
        f"Start Symbol: {start}",
        f"Word        : {shown}",
        f"Result      : {'ACCEPTED' if accepted else 'REJECTED'}",
        RULE,
    ]) + "\n"


def emit_report_to_string(grammar: Grammar, result: CYKResult) -> str:
    """
    전체 보고서.
    - 빈 단어: 판정 배너만
    - 그 외  : 단어, 문법 요약, CYK 표, 판정 배너
    """
    verdict = emit_verdict_to_string(grammar.start, result.word.text, result.accepted)
    if result.table is None:
        return verdict
    return "".join([
        f"Word: {result.word.text}\n\n",
        emit_grammar_to_string(grammar),
        "\nApplying CYK-Algorithm:\n\n",
        emit_table_to_string(result.table),
        "\n",
        verdict,
    ])
