#!/usr/bin/env python3
from __future__ import annotations

import argparse
import re
import sys
from dataclasses import replace
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from twformat.config import load_options  # noqa: E402
from twformat.core import format_classes  # noqa: E402
from twformat.types import FormatOptions  # noqa: E402

CLASS_ATTR_RE = re.compile(r'(class=\")([^\"]+)(\")')


def normalize_html(src: str, options: FormatOptions | None = None) -> tuple[str, int]:
    """Reorder every class="..." attribute; returns (html, changed_count)."""
    opts = replace(options or FormatOptions(), split_per_group=False)
    changed = 0

    def repl(m: re.Match) -> str:
        nonlocal changed
        before, classes, after = m.group(1), m.group(2), m.group(3)
        new = format_classes(classes, opts)
        if new and new != classes:
            changed += 1
            return before + new + after
        return m.group(0)

    return CLASS_ATTR_RE.sub(repl, src), changed


def main(argv=None):
    ap = argparse.ArgumentParser(description='Group and order Tailwind classes in index.html class attributes')
    ap.add_argument('--root', required=True)
    ap.add_argument('--dry-run', action='store_true')
    args = ap.parse_args(argv)

    root = Path(args.root)
    html_path = root / 'index.html'
    if not html_path.exists():
        raise SystemExit('index.html not found')
    try:
        options = load_options()
    except ValueError as e:
        raise SystemExit(f'[ERROR] {e}')

    src = html_path.read_text(encoding='utf-8', errors='ignore')
    out, changed = normalize_html(src, options)
    if args.dry_run:
        print(f"[NORM-ORDER] changed={changed}")
        return changed
    if changed:
        bak = root / 'index.html.normalize_order.bak'
        if not bak.exists():
            bak.write_text(src, encoding='utf-8')
        html_path.write_text(out, encoding='utf-8')
    print(f"[NORM-ORDER] changed={changed}")
    return changed


if __name__ == '__main__':
    main()
