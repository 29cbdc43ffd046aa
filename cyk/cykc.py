# cyk/cykc.py
"""cykc – cyk CLI

사용 예)
    $ python -m cyk.cykc run tests/grammars/ab.txt ab
    $ python -m cyk.cykc run tests/grammars/sentence.txt the dog saw the cat -D
    $ python -m cyk.cykc run tests/grammars/ab.txt eps
    $ python -m cyk.cykc check tests/grammars/ab.txt
    $ python -m cyk.cykc lex --tokens "the dog  saw"

기능
----
- run   : 문법을 읽어 단어를 CYK로 판정하고 표/결과를 출력 (text|json)
- check : 문법을 읽어 검증하고 요약 한 줄 출력
- lex   : 입력 단어가 어떤 심볼 시퀀스로 나뉘는지 출력

종료 코드
--------
- 0 : 수락 / 검사 통과
- 1 : 거부
- 2 : 문법 오류, 파일 오류 등

디버그 모드(-D/--debug)를 켜면 문법/토큰/테이블 요약을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _load(grammar_path: str, debug: bool, empty_marker: str):
    """문법 파일 → GrammarSource → Grammar"""
    from .grammar.loader import load_grammar_text
    from .grammar.parser import parse_grammar
    from .grammar.model import grammar_from_source

    src = load_grammar_text(grammar_path)
    gs = parse_grammar(src, empty_marker=empty_marker)
    if debug: _eprint("[DEBUG] source parsed | terms=%d nonterms=%d decls=%d" %
                      (len(gs.terminals), len(gs.nonterminals), len(gs.decls)))

    g = grammar_from_source(gs)
    if debug: _eprint("[DEBUG] grammar built | lhs=%d alternatives=%d start=%s derives_empty=%s" %
                      (len(g.productions), sum(len(a) for a in g.productions.values()),
                       g.start, g.derives_empty()))
    return g


def _run_guarded(fn, args) -> int:
    """문법/파일 오류를 종료 코드 2로 바꾼다."""
    try:
        return fn(args)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return EXIT_ERROR
    except OSError as e:
        _eprint("[ERROR]", f"Can't find or open the file: {e.filename or args.file}")
        return EXIT_ERROR
    except ValueError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return EXIT_ERROR

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_word(word) -> None:
    _eprint(f"[DEBUG] word mode={word.mode} n={len(word)} tokens={list(word.tokens)!r}")


def _print_table_summary(table, start: str) -> None:
    _eprint("\n[CYK Table]")
    _eprint(f"n: {table.n}")
    for k in range(1, table.n + 1):
        filled = sum(1 for c in table.rows[k] if c)
        _eprint(f"  row {k}: {filled}/{len(table.rows[k])} non-empty")
    spans = table.derivable_spans(start)
    _eprint(f"Spans derived by {start}: {spans if spans else '(none)'}")

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_run(args) -> int:
    from .lex import TOKEN, tokenize_argv
    from .engine.runtime import recognize

    g = _load(args.file, args.debug, args.empty_marker)
    word = tokenize_argv(args.word, TOKEN if args.tokens else None)
    if args.debug: _print_word(word)

    result = recognize(g, word)
    if args.debug and result.table is not None:
        _print_table_summary(result.table, g.start)

    if args.format == "json":
        from .render.emit_json import emit_json_to_string
        sys.stdout.write(emit_json_to_string(g, result))
    else:
        from .render.emit_text import emit_report_to_string
        sys.stdout.write(emit_report_to_string(g, result))
    return EXIT_ACCEPTED if result.accepted else EXIT_REJECTED


def cmd_check(args) -> int:
    g = _load(args.file, args.debug, args.empty_marker)
    if args.debug:
        from .render.emit_text import emit_grammar_to_string
        _eprint("\n[Grammar]")
        _eprint(emit_grammar_to_string(g))
    n_alts = sum(len(a) for a in g.productions.values())
    note = "" if g.start in g.productions else " (start symbol has no productions)"
    print(f"[CHECK OK] start={g.start} terms={len(g.terminals)} nonterms={len(g.nonterminals)} "
          f"alternatives={n_alts} derives_empty={g.derives_empty()}{note}")
    return EXIT_ACCEPTED


def cmd_lex(args) -> int:
    """입력 단어를 토크나이즈해 결과를 표준출력으로 보여줍니다."""
    from .lex import TOKEN, tokenize_argv
    word = tokenize_argv(args.word, TOKEN if args.tokens else None)
    if word.is_empty:
        print("(empty word)")
        return EXIT_ACCEPTED
    for i, tok in enumerate(word.tokens):
        print(f"{i:03d}: {tok!r}")
    return EXIT_ACCEPTED


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="cykc", description="CYK membership test for CNF grammars")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="CYK 알고리즘으로 단어가 문법의 언어에 속하는지 판정합니다")
    p_run.add_argument("file", help="문법 파일")
    p_run.add_argument("word", nargs="+", help="판정할 단어 ('eps' = 빈 단어). 2개 이상이면 토큰 모드")
    p_run.add_argument("--tokens", action="store_true", help="공백 구분 토큰 모드(기본: 문자 모드)")
    p_run.add_argument("--format", choices=["text", "json"], default="text", help="출력 형식")
    p_run.add_argument("--empty-marker", default="*", help="문법 파일에서 ε를 나타내는 마커")
    p_run.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_run.set_defaults(func=cmd_run)

    p_check = sub.add_parser("check", help="문법 파일을 읽고 검증합니다")
    p_check.add_argument("file", help="문법 파일")
    p_check.add_argument("--empty-marker", default="*", help="문법 파일에서 ε를 나타내는 마커")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_lex = sub.add_parser("lex", help="입력 단어의 토크나이즈 결과를 보여줍니다")
    p_lex.add_argument("word", nargs="+", help="입력 단어")
    p_lex.add_argument("--tokens", action="store_true", help="공백 구분 토큰 모드")
    p_lex.set_defaults(func=cmd_lex, file=None)

    args = ap.parse_args(argv)
    return int(_run_guarded(args.func, args))

if __name__ == "__main__":
    sys.exit(main())
