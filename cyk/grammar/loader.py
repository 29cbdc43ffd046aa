"""문법 파일 로더 (텍스트 읽기 → 파싱 → 모델 구축)"""

from __future__ import annotations
from pathlib    import Path
from typing     import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import Grammar


def load_grammar_text(path: str) -> str:
    """
    파일을 UTF-8로 읽고 개행을 모두 '\\n'으로 정규화한다.
    파일이 없으면 FileNotFoundError를 그대로 올린다(CLI가 처리).
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_grammar(path: str, empty_marker: str = "*") -> "Grammar":
    """파일 경로 하나로 검증 완료된 Grammar까지 만든다."""
    from .parser import parse_grammar
    from .model import grammar_from_source

    src = load_grammar_text(path)
    return grammar_from_source(parse_grammar(src, empty_marker=empty_marker))
