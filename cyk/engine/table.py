# table.py
"""CYK 삼각 테이블 컨테이너"""
from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple


@dataclass(frozen=True)
class CYKTable:
    """
    CYKTable
    ========
    길이 n 입력에 대한 (n+1)행 삼각 테이블. 채우기가 끝난 뒤에는 불변.

    행 구성
    -------
    - rows[0]     : n칸. 입력 심볼 원문 (str)
    - rows[k]     : n-(k-1)칸 (k = 1..n). rows[k][i]는 위치 i에서 시작하는
                    길이 k 부분 문자열을 유도하는 비단말 집합 (frozenset)
    - rows[n][0]  : 입력 전체를 유도하는 비단말 집합 (수락 판정 칸)

    사용
    ----
    - cell(length, start)로 칸을 읽는다.
    - 표현 계층(render)은 rows를 그대로 순회한다.
    """
    rows: Tuple[Tuple, ...]

    @property
    def n(self) -> int:
        return len(self.rows[0])

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self.rows[0]

    def cell(self, length: int, start: int) -> FrozenSet[str]:
        """길이 length, 시작 위치 start 구간의 비단말 집합. 범위 밖이면 IndexError."""
        if not (1 <= length <= self.n) or not (0 <= start <= self.n - length):
            raise IndexError(f"no cell for span (length={length}, start={start}) in table of n={self.n}")
        return self.rows[length][start]

    @property
    def top(self) -> FrozenSet[str]:
        return self.rows[self.n][0]

    def accepts(self, symbol: str) -> bool:
        return symbol in self.top

    def derivable_spans(self, symbol: str) -> List[Tuple[int, int]]:
        """symbol이 유도하는 모든 (length, start) 구간. 짧은 구간부터."""
        return [(k, i)
                for k in range(1, self.n + 1)
                for i, cell in enumerate(self.rows[k])
                if symbol in cell]
