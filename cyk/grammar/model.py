# cyk/grammar/model.py
"""CNF 문법 모델

선언(ProductionDecl) 목록을 받아 **구조적으로 분류된** 대안(Alternative)으로 바꾸고,
CYK 채우기가 쓰는 단 하나의 조회 연산 `producers()`를 제공한다.

대안의 모양
-----------
- Term(a)     : A -> a      (단말 1개)
- Pair(B, C)  : A -> B C    (비단말 2개, 순서 있음)
- EMPTY       : A -> ε      (빈 문자열)

문자열 이어붙이기("BC")로 쌍을 찾지 않는다. 쌍은 항상 (B, C) 튜플로 조회한다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from types          import MappingProxyType
from typing         import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .ast import GrammarSource, ProductionDecl


class GrammarError(SyntaxError):
    """문법 구성 단계에서 발견된 모델 오류(미선언 심볼, CNF 위반 등)."""


@dataclass(frozen=True)
class Term:
    symbol: str

    def __str__(self) -> str:
        return self.symbol

@dataclass(frozen=True)
class Pair:
    left: str
    right: str

    def __str__(self) -> str:
        return f"{self.left} {self.right}"

@dataclass(frozen=True)
class Empty:
    def __str__(self) -> str:
        return "ε"

EMPTY = Empty()

Alternative = Union[Term, Pair, Empty]


def _where(decl: ProductionDecl) -> str:
    if decl.span is None:
        return ""
    return f" at {decl.span.line}:{decl.span.col}"


@dataclass(frozen=True, eq=False)
class Grammar:
    """
    Grammar
    =======
    구축 이후 불변인 CNF 문법.

    필드
    ----
    - start        : 시작 기호
    - terminals    : 단말 이름(선언 순서)
    - nonterminals : 비단말 이름(선언 순서)
    - productions  : 좌변 → 대안 튜플(중복 제거, 선언 순서 유지). 읽기 전용 매핑
    - empty_marker : 원문에서 ε를 적는 마커(표시용)

    역색인
    ------
    - _unary  : 단말 a → {A | A -> a}
    - _binary : (B, C) → {A | A -> B C}
    - _empty  : {A | A -> ε}
    """
    start: str
    terminals: Tuple[str, ...]
    nonterminals: Tuple[str, ...]
    productions: Mapping[str, Tuple[Alternative, ...]]
    empty_marker: str = "*"
    _unary: Mapping[str, FrozenSet[str]] = field(default_factory=dict, repr=False)
    _binary: Mapping[Tuple[str, str], FrozenSet[str]] = field(default_factory=dict, repr=False)
    _empty: FrozenSet[str] = field(default=frozenset(), repr=False)

    # ----- 조회 -----
    def producers(self, rhs: Union[Alternative, str, Tuple[str, str]]) -> FrozenSet[str]:
        """
        우변 rhs를 대안으로 가진 모든 비단말 집합. 없으면 빈 집합.
        - str          → Term(str)
        - (B, C) 튜플  → Pair(B, C)
        """
        if isinstance(rhs, str):
            return self._unary.get(rhs, frozenset())
        if isinstance(rhs, tuple):
            return self._binary.get(rhs, frozenset())
        if isinstance(rhs, Term):
            return self._unary.get(rhs.symbol, frozenset())
        if isinstance(rhs, Pair):
            return self._binary.get((rhs.left, rhs.right), frozenset())
        if isinstance(rhs, Empty):
            return self._empty
        raise TypeError(f"unknown alternative: {rhs!r}")

    def derives_empty(self, symbol: Optional[str] = None) -> bool:
        """symbol(기본: 시작 기호)이 ε 대안을 가지는지."""
        return (self.start if symbol is None else symbol) in self._empty

    def alternatives(self, lhs: str) -> Tuple[Alternative, ...]:
        return self.productions.get(lhs, ())

    def rules(self) -> List[Tuple[str, Tuple[Alternative, ...]]]:
        """표시용: (좌변, 대안들) 목록. 좌변 정렬."""
        return [(lhs, self.productions[lhs]) for lhs in sorted(self.productions)]

    def is_terminal(self, name: str) -> bool:
        return name in self.terminals

    def is_nonterminal(self, name: str) -> bool:
        return name in self.nonterminals

    def __repr__(self) -> str:
        n_alts = sum(len(a) for a in self.productions.values())
        return (f"Grammar(start={self.start}, terms={list(self.terminals)}, "
                f"nonterms={list(self.nonterminals)}, alternatives={n_alts})")


class _Builder:
    def __init__(self, start: str, terminals: Iterable[str], nonterminals: Iterable[str], empty_marker: str):
        self.start = start
        self.terms: List[str] = _dedup(terminals)
        self.nonterms: List[str] = _dedup(nonterminals)
        self.term_set = set(self.terms)
        self.nonterm_set = set(self.nonterms)
        self.empty_marker = empty_marker
        self.prods: Dict[str, List[Alternative]] = {}

    def check_header(self) -> None:
        both = [s for s in self.terms if s in self.nonterm_set]
        if both:
            raise GrammarError(
                f"Symbols declared both terminal and non-terminal: {', '.join(both)}"
            )
        if self.empty_marker in self.term_set or self.empty_marker in self.nonterm_set:
            kind = "terminal" if self.empty_marker in self.term_set else "non-terminal"
            raise GrammarError(
                f"Empty marker {self.empty_marker!r} is also a declared {kind}; "
                "choose a different empty marker"
            )

    def classify(self, decl: ProductionDecl) -> Alternative:
        """우변 토큰 리스트를 Term / Pair / EMPTY 중 하나로 분류."""
        rhs = decl.rhs
        shown = f"{decl.lhs} -> {' '.join(rhs) if rhs else '(nothing)'}"
        for s in rhs:
            if s != self.empty_marker and s not in self.term_set and s not in self.nonterm_set:
                raise GrammarError(f"Undeclared symbol {s!r} in production {shown}{_where(decl)}")

        if len(rhs) == 1:
            s = rhs[0]
            if s == self.empty_marker:
                return EMPTY
            if s in self.term_set:
                return Term(s)
            raise GrammarError(
                f"Unit production {shown}{_where(decl)}: "
                "a single right-hand symbol must be a terminal"
            )
        if len(rhs) == 2:
            a, b = rhs
            if a in self.nonterm_set and b in self.nonterm_set:
                return Pair(a, b)
            raise GrammarError(
                f"Not in Chomsky Normal Form: {shown}{_where(decl)}: "
                "a two-symbol right-hand side must be two non-terminals"
            )
        raise GrammarError(
            f"Not in Chomsky Normal Form: {shown}{_where(decl)}: "
            f"right-hand side has {len(rhs)} symbols (expected 1 or 2)"
        )

    def add(self, decl: ProductionDecl) -> None:
        if decl.lhs not in self.nonterm_set:
            raise GrammarError(
                f"Left-hand side {decl.lhs!r} is not a declared non-terminal{_where(decl)}"
            )
        alt = self.classify(decl)
        # 같은 좌변 재선언은 대안을 **추가**한다(덮어쓰지 않음)
        alts = self.prods.setdefault(decl.lhs, [])
        if alt not in alts:
            alts.append(alt)

    def build(self) -> Grammar:
        unary: Dict[str, set] = {}
        binary: Dict[Tuple[str, str], set] = {}
        empty = set()
        for lhs, alts in self.prods.items():
            for alt in alts:
                if isinstance(alt, Term):
                    unary.setdefault(alt.symbol, set()).add(lhs)
                elif isinstance(alt, Pair):
                    binary.setdefault((alt.left, alt.right), set()).add(lhs)
                else:
                    empty.add(lhs)
        return Grammar(
            start=self.start,
            terminals=tuple(self.terms),
            nonterminals=tuple(self.nonterms),
            productions=MappingProxyType({lhs: tuple(alts) for lhs, alts in self.prods.items()}),
            empty_marker=self.empty_marker,
            _unary=MappingProxyType({k: frozenset(v) for k, v in unary.items()}),
            _binary=MappingProxyType({k: frozenset(v) for k, v in binary.items()}),
            _empty=frozenset(empty),
        )


def _dedup(names: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for nm in names:
        if nm not in seen:
            seen.add(nm)
            out.append(nm)
    return out


def build_grammar(start: str,
                  terminals: Iterable[str],
                  nonterminals: Iterable[str],
                  decls: Iterable[Union[ProductionDecl, Tuple[str, List[str]]]],
                  empty_marker: str = "*") -> Grammar:
    """
    build_grammar
    =============
    시작기호/단말/비단말 + (좌변, 우변 토큰들) 선언 목록 → 검증된 Grammar.

    - decls 원소는 ProductionDecl 또는 (lhs, [rhs...]) 튜플.
    - 위반 시 GrammarError(SyntaxError 하위형)를 던진다.
    - 시작 기호가 프로덕션을 갖지 않아도 허용(모든 입력이 거부될 뿐).
    """
    b = _Builder(start, terminals, nonterminals, empty_marker)
    b.check_header()
    for d in decls:
        if not isinstance(d, ProductionDecl):
            lhs, rhs = d
            d = ProductionDecl(lhs, list(rhs))
        b.add(d)
    return b.build()


def grammar_from_source(src: GrammarSource) -> Grammar:
    """GrammarSource(파서 결과) → Grammar"""
    return build_grammar(src.start, src.terminals, src.nonterminals, src.decls,
                         empty_marker=src.empty_marker)
