"""cyk 토크나이저: 입력 단어를 단말 심볼 시퀀스로 나눈다.

모드
----
- CHAR  : 문자 하나 = 심볼 하나 (공백 문자도 그대로 심볼)
- TOKEN : 공백으로 구분된 토큰 하나 = 심볼 하나

특수 입력
---------
- 대소문자 무시 `eps` 는 두 모드 모두에서 **빈 단어**를 뜻한다.
  (CHAR 모드는 앞뒤 공백 없이 정확히 `eps`, TOKEN 모드는 앞뒤 공백 무시)

API
---
- `Word(text, mode, tokens)`: 토크나이즈 결과(불변)
- `tokenize(text, mode=CHAR) -> Word`
- `tokenize_argv(args, mode=None) -> Word`: CLI 인자 목록에서 단어 만들기
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import regex as re

CHAR = "char"
TOKEN = "token"
MODES = (CHAR, TOKEN)

EPS = "eps"

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Word:
    text: str                   # 표시용 원문(빈 단어면 "")
    mode: str                   # CHAR | TOKEN
    tokens: Tuple[str, ...]     # 단말 심볼 시퀀스

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        return not self.tokens


def _is_eps(text: str, mode: str) -> bool:
    # CHAR 모드는 공백도 심볼이므로 정확히 `eps`일 때만
    if mode == CHAR:
        return text.lower() == EPS
    return text.strip().lower() == EPS


def tokenize(text: str, mode: str = CHAR) -> Word:
    """
    text를 mode 정책에 따라 심볼 시퀀스로 나눈다.
    - CHAR : list(text) 그대로 (앞뒤 공백도 심볼)
    - TOKEN: 앞뒤 공백 제거 후 공백 런(run)으로 분리
    """
    if mode not in MODES:
        raise ValueError(f"unknown tokenize mode: {mode!r} (expected one of {', '.join(MODES)})")
    if _is_eps(text, mode):
        return Word("", mode, ())
    if mode == CHAR:
        return Word(text, mode, tuple(text))
    stripped = text.strip()
    if not stripped:
        return Word("", mode, ())
    return Word(stripped, mode, tuple(_WS_RE.split(stripped)))


def tokenize_argv(args: Sequence[str], mode: Optional[str] = None) -> Word:
    """
    CLI 위치 인자 → Word.
    - mode 미지정 시: 인자가 2개 이상이면 TOKEN, 아니면 CHAR
    - 인자들은 공백 하나로 이어 붙인 뒤 mode 정책으로 나눈다
    """
    if mode is None:
        mode = TOKEN if len(args) > 1 else CHAR
    return tokenize(" ".join(args), mode)
