#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List

from bs4 import BeautifulSoup

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from twformat.config import load_options  # noqa: E402
from twformat.core import categorize, format_classes, tokenize  # noqa: E402
from twformat.types import FormatOptions  # noqa: E402


def collect_class_attrs(html_text: str) -> List[Dict[str, str]]:
    # keep class as one string; bs4 would otherwise split bracketed values that contain spaces
    soup = BeautifulSoup(html_text, 'html.parser', multi_valued_attributes=None)
    out = []
    for pos, tag in enumerate(soup.find_all(True)):
        classes = tag.get('class')
        if classes and classes.strip():
            out.append({'tag': tag.name, 'position': pos, 'classes': classes})
    return out


def build_report(root: Path, options: FormatOptions | None = None) -> dict:
    opts = replace(options or FormatOptions(), split_per_group=False)
    group_counts: Dict[str, int] = {}
    unordered = []
    total = 0
    for html_path in sorted(root.glob('**/*.html')):
        html_text = html_path.read_text(encoding='utf-8', errors='ignore')
        for el in collect_class_attrs(html_text):
            total += 1
            for group, tokens in categorize(el['classes'], opts).items():
                if tokens:
                    group_counts[group] = group_counts.get(group, 0) + len(tokens)
            current = ' '.join(tokenize(el['classes']))
            expected = format_classes(el['classes'], opts)
            if current != expected:
                unordered.append({
                    'file': str(html_path.relative_to(root)),
                    'tag': el['tag'],
                    'position': el['position'],
                    'current': current,
                    'expected': expected,
                })
    return {
        'total_class_attrs': total,
        'unordered_count': len(unordered),
        'group_token_counts': group_counts,
        'unordered': unordered[:1000],
    }


def main(argv=None):
    ap = argparse.ArgumentParser(description='Report class attributes that are not in grouped Tailwind order')
    ap.add_argument('--root', required=True)
    args = ap.parse_args(argv)

    root = Path(args.root)
    if not root.is_dir():
        raise SystemExit('root directory not found')
    try:
        options = load_options()
    except ValueError as e:
        raise SystemExit(f'[ERROR] {e}')

    report = build_report(root, options)
    out = root / 'class_order_report.json'
    out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding='utf-8')
    print(f"[CLASS-ORDER] Report: {out} (unordered={report['unordered_count']}/{report['total_class_attrs']})")
    return report


if __name__ == '__main__':
    main()
