"""
Rewrite class lists inside JS/JSX/TS/TSX sources.

Targets:
 - className="..." / class="..." and className={"..."} attributes
 - cn(...), clsx(...), cx(...), classnames(...), classNames(...) calls, bare or as a member

Default mode sorts string literals in place (quote style kept). Merge-call mode
(use_cn) turns a literal attribute into {helper("group1", "group2", ...)} and
regroups the string arguments of existing helper calls, keeping non-string
arguments in their original relative order.

Detection is text based: literals containing backslash escapes are left alone.
"""
from __future__ import annotations

import json
import re
import sys
from bisect import bisect_right
from dataclasses import replace
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from .core import format_classes
from .types import FormatOptions

SOURCE_SUFFIXES = {".js", ".jsx", ".ts", ".tsx"}
SKIP_DIRS = {"node_modules"}

HELPER_NAMES = ("cn", "clsx", "cx", "classnames", "classNames")
DEFAULT_HELPER = "classNames"
DEFAULT_HELPER_MODULE = "classnames"

CLASS_ATTR_RE = re.compile(
    r"""(?<![\w$.-])(?P<name>className|class)=(?P<value>"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'"""
    r"""|\{\s*(?P<expr>"[^"\\\n]*"|'[^'\\\n]*')\s*\})"""
)
CALL_RE = re.compile(r"(?<![\w$])(?P<name>cn|clsx|cx|classnames|classNames)\s*\(")
STATIC_STRING_RE = re.compile(r"""^(?:"[^"\\\n]*"|'[^'\\\n]*'|`(?:[^`\\$]|\$(?!\{))*`)$""", re.S)
# "use client"; style directives and a shebang must stay above inserted imports
PROLOGUE_RE = re.compile(r"""^(?:#![^\n]*\n)?(?:[ \t]*(?:"[^"\n]*"|'[^'\n]*')[ \t]*;?[ \t]*\n)*""")
# any import declaration of the classnames package; "default" is its default binding
CLASSNAMES_IMPORT_RE = re.compile(
    r"""^[ \t]*import\s+(?:(?P<default>[\w$]+)\s*,?\s*)?(?:\{[^}]*\}\s*|\*\s*as\s+[\w$]+\s*)?"""
    r"""(?:from\s*)?["']classnames["']""",
    re.M,
)


class RewriteResult(NamedTuple):
    code: str
    mutated: bool
    inserted_import: bool


def _trace(debug: bool, msg: str) -> None:
    if debug:
        print(f"[tw-format] {msg}")


def _skip_braces(code: str, i: int) -> int:
    depth = 1
    n = len(code)
    while i < n:
        ch = code[i]
        if ch in "\"'`":
            i = _skip_string(code, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _skip_string(code: str, i: int) -> int:
    quote = code[i]
    i += 1
    n = len(code)
    while i < n:
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if quote == "`" and code.startswith("${", i):
            i = _skip_braces(code, i + 2)
            continue
        if ch == "\n" and quote != "`":
            return i
        i += 1
    return n


def literal_spans(code: str) -> List[Tuple[int, int]]:
    """(start, end) of every string literal and comment in code, in order."""
    spans: List[Tuple[int, int]] = []
    i = 0
    n = len(code)
    while i < n:
        ch = code[i]
        if ch in "\"'`":
            end = _skip_string(code, i)
        elif code.startswith("//", i):
            nl = code.find("\n", i)
            end = n if nl < 0 else nl
        elif code.startswith("/*", i):
            end = code.find("*/", i + 2)
            end = n if end < 0 else end + 2
        else:
            i += 1
            continue
        spans.append((i, end))
        i = end
    return spans


def _in_spans(spans: List[Tuple[int, int]], pos: int) -> bool:
    k = bisect_right(spans, (pos, sys.maxsize)) - 1
    return k >= 0 and spans[k][0] <= pos < spans[k][1]


def split_call_args(code: str, start: int) -> Optional[Tuple[List[str], int]]:
    """Split the argument list opening at ``start`` (just past ``(``).

    Returns (raw argument texts, index of the closing paren), or None when the
    parens are unbalanced.
    """
    args: List[str] = []
    depth = 0
    arg_start = start
    i = start
    n = len(code)
    while i < n:
        ch = code[i]
        if ch in "\"'`":
            i = _skip_string(code, i)
            continue
        if code.startswith("//", i):
            nl = code.find("\n", i)
            i = n if nl < 0 else nl
            continue
        if code.startswith("/*", i):
            end = code.find("*/", i + 2)
            i = n if end < 0 else end + 2
            continue
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth == 0:
                if ch != ")":
                    return None
                last = code[arg_start:i]
                if last.strip():
                    args.append(last)
                return args, i
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(code[arg_start:i])
            arg_start = i + 1
        i += 1
    return None


def static_string_value(arg: str) -> Optional[str]:
    text = arg.strip()
    if not STATIC_STRING_RE.match(text):
        return None
    return text[1:-1]


def js_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def find_helper(code: str) -> Optional[str]:
    """First merge helper name bound at file level (import or declaration)."""
    for name in HELPER_NAMES:
        n = re.escape(name)
        binding = re.compile(
            rf"\bimport\s+(?:type\s+)?(?:{n}\b[^;'\"]*?|(?:[\w$]+\s*,\s*)?\{{[^}}]*\b{n}\b[^}}]*\}}|\*\s+as\s+{n}\b)\s*from\b"
            rf"|\b(?:const|let|var|function)\s+{n}\b"
        )
        if binding.search(code):
            return name
    return None


def insert_import(code: str, statement: str) -> str:
    m = PROLOGUE_RE.match(code)
    at = m.end() if m else 0
    return code[:at] + statement + "\n" + code[at:]


def _regroup_args(args: List[str], options: FormatOptions) -> Optional[List[str]]:
    values = [static_string_value(a) for a in args]
    idx = [i for i, v in enumerate(values) if v is not None]
    if not idx:
        return None
    combined = " ".join(values[i] for i in idx)
    groups = format_classes(combined, replace(options, split_per_group=True))
    if not groups:
        return None
    first = idx[0]
    rest = [a.strip() for i, a in enumerate(args) if i > first and values[i] is None]
    before = [("arg", a.strip()) for a in args[:first]]
    # unchanged grouping (quote style aside) leaves the call as written
    old = [("str", v) if v is not None else ("arg", a.strip()) for a, v in zip(args, values)]
    new = before + [("str", g) for g in groups] + [("arg", a) for a in rest]
    if old == new:
        return None
    return [a for _, a in before] + [js_string(g) for g in groups] + rest


def _rewrite_calls(code: str, options: FormatOptions, use_cn: bool, debug: bool) -> str:
    flat = replace(options, split_per_group=False)
    spans = literal_spans(code)
    pos = 0
    while True:
        m = CALL_RE.search(code, pos)
        if not m:
            return code
        pos = m.end()
        if _in_spans(spans, m.start()):
            continue
        parsed = split_call_args(code, m.end())
        if parsed is None:
            continue
        args, close = parsed
        _trace(debug, f"{m.group('name')}() call found args={len(args)}")
        if use_cn:
            new_args = _regroup_args(args, options)
            if new_args is None:
                continue
            code = code[:m.end()] + ", ".join(new_args) + code[close:]
            spans = literal_spans(code)
            _trace(debug, f"{m.group('name')}() args regrouped -> {new_args}")
        elif len(args) == 1:
            raw = static_string_value(args[0])
            if not raw:
                continue
            pretty = format_classes(raw, flat)
            if pretty == raw:
                continue
            literal = args[0].strip()
            code = code[:m.end()] + literal[0] + pretty + literal[-1] + code[close:]
            spans = literal_spans(code)
            _trace(debug, f"{m.group('name')}() single arg sorted -> \"{pretty}\"")


def rewrite_source(code: str, options: Optional[FormatOptions] = None, use_cn: bool = False,
                   debug: bool = False) -> RewriteResult:
    opts = options or FormatOptions()
    flat = replace(opts, split_per_group=False)
    split = replace(opts, split_per_group=True)

    out = _rewrite_calls(code, opts, use_cn, debug)
    helper = find_helper(out) if use_cn else None
    existing = CLASSNAMES_IMPORT_RE.search(out) if use_cn and helper is None else None
    if existing:
        helper = existing.group("default") or DEFAULT_HELPER
    need_import = False
    spans = literal_spans(out)

    def repl(m: re.Match) -> str:
        nonlocal helper, need_import
        if _in_spans(spans, m.start()):
            return m.group(0)
        if m.group("expr") is not None:
            literal = m.group("expr")
            raw = literal[1:-1]
        else:
            literal = m.group("value")
            raw = m.group("dq") if m.group("dq") is not None else m.group("sq")
        if not raw:
            return m.group(0)
        _trace(debug, f"JSX class attr found: raw=\"{raw}\" USE_CN={use_cn}")
        if use_cn:
            groups = format_classes(raw, split)
            if groups:
                if helper is None:
                    helper = DEFAULT_HELPER
                    need_import = True
                call = f"{helper}({', '.join(js_string(g) for g in groups)})"
                _trace(debug, f"JSX class wrapped with {helper}()")
                return f"{m.group('name')}={{{call}}}"
        pretty = format_classes(raw, flat)
        if pretty == raw:
            return m.group(0)
        new_value = literal[0] + pretty + literal[-1]
        if m.group("expr") is not None:
            new_value = "{" + new_value + "}"
        _trace(debug, f"JSX class sorted -> \"{pretty}\"")
        return f"{m.group('name')}={new_value}"

    out = CLASS_ATTR_RE.sub(repl, out)
    if need_import:
        out = insert_import(out, f'import {DEFAULT_HELPER} from "{DEFAULT_HELPER_MODULE}";')
        _trace(debug, f'inserted import: import {DEFAULT_HELPER} from "{DEFAULT_HELPER_MODULE}"')
    return RewriteResult(code=out, mutated=out != code, inserted_import=need_import)


def find_source_files(root: Path) -> List[Path]:
    files = []
    for p in Path(root).glob("**/*"):
        if p.suffix not in SOURCE_SUFFIXES or not p.is_file():
            continue
        if SKIP_DIRS.intersection(p.relative_to(root).parts):
            continue
        files.append(p)
    return sorted(files)


def format_tailwind_in_dir(root: Path, options: Optional[FormatOptions] = None, dry: bool = False,
                           use_cn: bool = False, debug: bool = False) -> int:
    """Rewrite every source file below root; returns how many changed."""
    root = Path(root)
    changed = 0
    for file in find_source_files(root):
        _trace(debug, f"scanning: {file}")
        try:
            code = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[ERROR] {file}: {e}")
            continue
        result = rewrite_source(code, options, use_cn=use_cn, debug=debug)
        if not result.mutated:
            continue
        if not dry:
            try:
                file.write_text(result.code, encoding="utf-8")
            except OSError as e:
                print(f"[ERROR] {file}: {e}")
                continue
        changed += 1
        print(f"{'[dry] ' if dry else ''}formatted: {file}")
    print(f"Done. Updated {changed} file(s)." if changed else "No changes needed.")
    return changed
