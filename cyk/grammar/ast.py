# cyk/grammar/ast.py
"""Grammar source AST
- GrammarSource: 문법 파일 한 개를 그대로 보존한 선언 묶음
- ProductionDecl: `LHS -> rhs...` 선언 1개 (우변은 심볼 토큰 리스트)

모델 검증(CNF 형태 확인, 미선언 심볼 검사)은 여기서 하지 않는다.
그 일은 grammar.model.build_grammar 가 담당한다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import List, Optional

@dataclass
class Span:
    start: int
    end: int
    line: int
    col: int

@dataclass
class ProductionDecl:
    """
    프로덕션 선언 1개.
    - lhs: 좌변 비단말 이름
    - rhs: 우변 심볼 토큰 리스트
        * ["a"]       : 단말 1개
        * ["A", "B"]  : 비단말 2개
        * ["*"]       : 빈 문자열 마커(empty_marker)
    - span: 원문 위치(파일에서 읽은 경우)
    """
    lhs: str
    rhs: List[str]
    span: Optional[Span] = None

@dataclass
class GrammarSource:
    """
    문법 파일 헤더(시작기호/단말/비단말) + 프로덕션 선언 목록.
    같은 좌변이 여러 줄에 나와도 선언은 **순서대로 모두** 보존된다(병합은 모델 단계).
    """
    start: str
    terminals: List[str] = field(default_factory=list)
    nonterminals: List[str] = field(default_factory=list)
    decls: List[ProductionDecl] = field(default_factory=list)
    empty_marker: str = "*"
