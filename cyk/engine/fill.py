# cyk/engine/fill.py
"""CYK 테이블 생성 및 상향식 채우기.

알고리즘 개요
------------
1) rows[0][i] = i번째 입력 심볼(원문)
2) rows[1][i] = producers(Term(rows[0][i]))
     일치하는 프로덕션이 없으면 빈 집합(오류 아님)
3) rows[L][i] (L = 2..n)
     모든 분할 s = 1..L-1 에 대해
       A ∈ rows[s][i], B ∈ rows[L-s][i+s] 인 쌍 (A, B)마다 producers(Pair(A, B))를 합집합
     분할 평가 순서는 결과에 영향이 없다(합집합은 교환적).
4) 각 칸은 의존 칸(더 짧은 행)이 모두 확정된 뒤 **정확히 한 번** 기록된다.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Set

from ..grammar.model import Grammar
from .table import CYKTable


def create_table(tokens: Sequence[str]) -> List[list]:
    """
    빈 삼각 테이블(가변 리스트)을 만든다.
    - 0행: 입력 심볼, 1..n행: None(미기록)
    n == 0 이면 ValueError: 빈 단어는 테이블 없이 derives_empty로 판정한다.
    """
    n = len(tokens)
    if n == 0:
        raise ValueError("CYK table needs at least one input symbol; use Grammar.derives_empty() for ε")
    table: List[list] = [list(tokens)]
    for k in range(1, n + 1):
        table.append([None] * (n - (k - 1)))
    return table


def fill_cell(table: List[list], grammar: Grammar, length: int, start: int,
              splits: Optional[Iterable[int]] = None) -> Set[str]:
    """
    칸 (length, start) 하나를 계산해 기록하고 그 집합을 돌려준다.

    Parameters
    ----------
    splits : Iterable[int], optional
        평가할 분할 지점 순서. 기본값은 1..length-1 오름차순.
        length == 1 에서는 무시한다.
    """
    if table[length][start] is not None:
        raise RuntimeError(f"cell (length={length}, start={start}) already filled")

    if length == 1:
        out = set(grammar.producers(table[0][start]))
        table[1][start] = out
        return out

    out: Set[str] = set()
    for s in (range(1, length) if splits is None else splits):
        left = table[s][start]
        right = table[length - s][start + s]
        if left is None or right is None:
            raise RuntimeError(f"dependency of cell (length={length}, start={start}) not filled yet")
        if not left or not right:
            continue
        for a in left:
            for b in right:
                out |= grammar.producers((a, b))
    table[length][start] = out
    return out


def freeze_table(table: List[list]) -> CYKTable:
    """채우기가 끝난 가변 테이블 → 불변 CYKTable"""
    rows = [tuple(table[0])]
    for k in range(1, len(table)):
        rows.append(tuple(frozenset(c) for c in table[k]))
    return CYKTable(rows=tuple(rows))


def fill_table(table: List[list], grammar: Grammar) -> CYKTable:
    """1행부터 n행까지 행 단위로 채운 뒤 불변 테이블로 돌려준다."""
    n = len(table[0])
    for length in range(1, n + 1):
        for start in range(n - length + 1):
            fill_cell(table, grammar, length, start)
    return freeze_table(table)


def build_table(grammar: Grammar, tokens: Sequence[str]) -> CYKTable:
    """create_table + fill_table"""
    return fill_table(create_table(tokens), grammar)
