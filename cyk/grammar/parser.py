"""CYK 문법 파일 파서
- 1행: 시작 기호
- 2행: 단말 목록(공백 구분)
- 3행: 비단말 목록(공백 구분)
- 4행~: 프로덕션
    * 레거시 형식 : `S AB BA a *`        (좌변 다음 토큰 하나하나가 대안 1개)
    * 화살표 형식 : `S -> A B | a | *`   (대안은 '|'로, 대안 안의 심볼은 공백으로 구분)
- `#`로 시작하는 줄은 어디서나 무시, 빈 줄은 프로덕션 구간에서만 무시
  (헤더 세 줄은 위치로 읽으므로 빈 단말 줄 = 단말 없음)
- 화살표는 공백으로 구분된 독립 토큰일 때만 인식한다(`a->b`는 심볼 이름)
- 레거시 형식의 "AB"는 선언된 비단말 이름으로 **분할 지점을 전부 시도**해 (A, B)로 복원한다
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple
from .ast import GrammarSource, ProductionDecl, Span

# ---- 줄 단위 토큰 ----
_COMMENT_RE = re.compile(r"\s*#")
_BLANK_RE   = re.compile(r"\s*$")
_WORD_RE  = re.compile(r"[^\s|]+|\|")
_ARROW_RE = re.compile(r"(?<!\S)(?:->|→)(?!\S)")

@dataclass
class Tok:
    lexeme: str
    start: int
    end: int
    line: int
    col: int

@dataclass
class _Line:
    text: str
    start: int      # 원문 절대 오프셋
    line: int       # 1-based

def _lines(src: str) -> Tuple[List[_Line], List[_Line]]:
    """
    (헤더, 본문) 줄 목록을 원문 위치와 함께 돌려준다.
    - 헤더: 주석이 아닌 처음 세 줄(빈 줄 포함)
    - 본문: 그 뒤의 주석/빈 줄이 아닌 줄
    """
    header: List[_Line] = []
    body: List[_Line] = []
    raw = src.split("\n")
    if src.endswith("\n"):
        raw.pop()
    pos = 0
    for i, text in enumerate(raw, start=1):
        if not _COMMENT_RE.match(text):
            if len(header) < 3:
                header.append(_Line(text, pos, i))
            elif not _BLANK_RE.match(text):
                body.append(_Line(text, pos, i))
        pos += len(text) + 1
    # 파일 끝의 빈 줄은 헤더로 치지 않는다
    while header and len(header) < 3 and _BLANK_RE.match(header[-1].text):
        header.pop()
    return header, body

def _words(ln: _Line, offset: int = 0, end: Optional[int] = None) -> List[Tok]:
    toks: List[Tok] = []
    stop = len(ln.text) if end is None else end
    for m in _WORD_RE.finditer(ln.text, offset, stop):
        toks.append(Tok(m.group(0), ln.start + m.start(), ln.start + m.end(), ln.line, m.start() + 1))
    return toks


# ---------- error handling utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [시작, 끝+1) 범위"""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end

def _snippet_caret_at_pos(src: str, pos: int) -> str:
    start, end = _line_bounds(src, pos)
    col = (pos - start) + 1
    return f"{src[start:end]}\n" + " " * (col - 1) + "^"

def _error_at(src: str, tok: Tok, msg: str) -> SyntaxError:
    return SyntaxError(f"{msg} at {tok.line}:{tok.col}\n" + _snippet_caret_at_pos(src, tok.start))

def _span(tok: Tok) -> Span:
    return Span(tok.start, tok.end, tok.line, tok.col)


# ---------- 헤더 ----------
def _header_symbols(src: str, ln: _Line, what: str) -> List[str]:
    toks = _words(ln)
    bars = [t for t in toks if t.lexeme == "|"]
    if bars:
        raise _error_at(src, bars[0], f"Unexpected '|' in {what} line")
    return [t.lexeme for t in toks]


# ---------- 레거시 대안 복원 ----------
def split_concatenated(word: str, terms: Set[str], nonterms: Set[str], marker: str) -> List[str]:
    """
    레거시 대안 토큰 하나를 우변 심볼 리스트로 복원한다.
    - marker / 선언된 단말 / 선언된 비단말이면 그대로 1개
    - 그 외: 모든 분할 지점 i에 대해 word[:i], word[i:]가 둘 다 비단말인 경우를 찾는다
        * 정확히 1개 → [B, C]
        * 2개 이상  → ValueError(모호)
        * 0개       → 원문 그대로 1개(모델 단계에서 미선언 심볼로 보고됨)
    """
    if word == marker or word in terms or word in nonterms:
        return [word]
    cands = [(word[:i], word[i:]) for i in range(1, len(word))
             if word[:i] in nonterms and word[i:] in nonterms]
    if len(cands) > 1:
        shown = ", ".join(f"{b} {c}" for b, c in cands)
        raise ValueError(f"Ambiguous alternative {word!r}: can be read as {shown}")
    if cands:
        return list(cands[0])
    return [word]


def _parse_legacy(src: str, ln: _Line, terms: Set[str], nonterms: Set[str], marker: str) -> List[ProductionDecl]:
    toks = _words(ln)
    lhs = toks[0]
    if lhs.lexeme == "|":
        raise _error_at(src, lhs, "Expected left-hand side")
    alts = toks[1:]
    if not alts:
        raise _error_at(src, lhs, f"Production for {lhs.lexeme!r} has no alternatives")
    out: List[ProductionDecl] = []
    for t in alts:
        if t.lexeme == "|":
            # 레거시 줄의 '|'는 장식으로 허용
            continue
        try:
            rhs = split_concatenated(t.lexeme, terms, nonterms, marker)
        except ValueError as e:
            raise _error_at(src, t, str(e))
        out.append(ProductionDecl(lhs.lexeme, rhs, _span(t)))
    return out


def _parse_arrow(src: str, ln: _Line, arrow: "re.Match",
                 terms: Set[str], nonterms: Set[str], marker: str) -> List[ProductionDecl]:
    head = _words(ln, 0, arrow.start())
    if len(head) != 1 or head[0].lexeme == "|":
        anchor = head[1] if len(head) > 1 else Tok("", ln.start, ln.start, ln.line, 1)
        raise _error_at(src, anchor, "Expected exactly one left-hand side before '->'")
    lhs = head[0].lexeme

    out: List[ProductionDecl] = []
    cur: List[Tok] = []
    # 마지막 대안 뒤 빈 칸 검사를 위해 가상 '|'를 덧붙인다
    end_tok = Tok("|", ln.start + len(ln.text), ln.start + len(ln.text), ln.line, len(ln.text) + 1)
    for t in _words(ln, arrow.end()) + [end_tok]:
        if t.lexeme != "|":
            cur.append(t)
            continue
        if not cur:
            raise _error_at(src, t, "Empty alternative (write the empty marker for ε)")
        rhs = [c.lexeme for c in cur]
        if len(rhs) == 1:
            # `S -> AB` 처럼 붙여 쓴 쌍도 레거시와 같은 규칙으로 복원
            try:
                rhs = split_concatenated(rhs[0], terms, nonterms, marker)
            except ValueError as e:
                raise _error_at(src, cur[0], str(e))
        out.append(ProductionDecl(lhs, rhs, _span(cur[0])))
        cur = []
    return out


def parse_grammar(src: str, empty_marker: str = "*") -> GrammarSource:
    """
    parse_grammar
    =============
    문법 텍스트 → GrammarSource.

    - 헤더 세 줄이 모자라면 SyntaxError (빈 단말/비단말 줄은 허용)
    - 같은 좌변을 여러 줄에서 선언하면 선언이 **누적**된다
    - 단말/비단말 검증은 model.build_grammar 에서 수행
    """
    header, body = _lines(src)
    if len(header) < 3:
        missing = ("start symbol", "terminal", "non-terminal")[len(header)]
        raise SyntaxError(f"Missing {missing} line (header needs 3 lines) at EOF")

    start_toks = _words(header[0])
    if len(start_toks) != 1 or start_toks[0].lexeme == "|":
        if len(start_toks) > 1:
            bad = start_toks[1]
        elif start_toks:
            bad = start_toks[0]
        else:
            bad = Tok("", header[0].start, header[0].start, header[0].line, 1)
        raise _error_at(src, bad, "Start line must hold exactly one symbol")

    terminals = _header_symbols(src, header[1], "terminal")
    nonterminals = _header_symbols(src, header[2], "non-terminal")
    term_set, nonterm_set = set(terminals), set(nonterminals)

    decls: List[ProductionDecl] = []
    for ln in body:
        arrow = _ARROW_RE.search(ln.text)
        if arrow is not None:
            decls.extend(_parse_arrow(src, ln, arrow, term_set, nonterm_set, empty_marker))
        else:
            decls.extend(_parse_legacy(src, ln, term_set, nonterm_set, empty_marker))

    return GrammarSource(
        start=start_toks[0].lexeme,
        terminals=terminals,
        nonterminals=nonterminals,
        decls=decls,
        empty_marker=empty_marker,
    )
