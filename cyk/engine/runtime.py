# cyk/engine/runtime.py
"""CYK 인식기 런타임.

- `Grammar`와 입력(Word 또는 심볼 시퀀스)을 받아 **accept/reject** 를 판정한다.
- 빈 단어는 테이블을 만들지 않고 `grammar.derives_empty()`로만 판정한다.
- 유효한 Grammar와 입력에 대해서는 예외를 던지지 않는다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..grammar.model import Grammar
from ..lex import CHAR, TOKEN, Word
from .fill import build_table
from .table import CYKTable


@dataclass(frozen=True)
class CYKResult:
    """
    - accepted : 시작 기호가 rows[n][0]에 있으면 True (빈 단어면 derives_empty)
    - table    : 채워진 테이블. 빈 단어면 None
    - word     : 판정한 입력
    """
    accepted: bool
    table: Optional[CYKTable]
    word: Word


def _as_word(word: Union[Word, Sequence[str]]) -> Word:
    if isinstance(word, Word):
        return word
    if isinstance(word, str):
        return Word(word, CHAR, tuple(word))
    tokens = tuple(word)
    return Word(" ".join(tokens), TOKEN, tokens)


def recognize(grammar: Grammar, word: Union[Word, Sequence[str]]) -> CYKResult:
    """
    recognize(grammar, word) -> CYKResult

    Parameters
    ----------
    grammar : Grammar
        검증이 끝난 CNF 문법(읽기 전용으로 공유).
    word : Word | str | Sequence[str]
        - Word : lex.tokenize 결과
        - str  : 문자 하나 = 심볼 하나
        - 그 외 시퀀스 : 원소 하나 = 심볼 하나

    Notes
    -----
    시작 기호에 프로덕션이 없으면 모든 입력이 거부된다.
    """
    w = _as_word(word)
    if w.is_empty:
        return CYKResult(accepted=grammar.derives_empty(), table=None, word=w)
    table = build_table(grammar, w.tokens)
    return CYKResult(accepted=table.accepts(grammar.start), table=table, word=w)


def accepts(grammar: Grammar, word: Union[Word, Sequence[str]]) -> bool:
    return recognize(grammar, word).accepted
