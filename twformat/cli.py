from __future__ import annotations

import argparse
import os
from pathlib import Path

from .config import load_options
from .rewrite import format_tailwind_in_dir


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="tw-format",
        description="Group and order Tailwind class lists in .js/.jsx/.ts/.tsx files",
    )
    ap.add_argument("dir", nargs="?", default="src", help="Directory to scan (default: src)")
    ap.add_argument("--dry", action="store_true", help="Report files that would change; write nothing")
    ap.add_argument("--use-cn", dest="use_cn", action="store_true",
                    help="Emit one helper-call argument per group (cn/clsx/classNames)")
    ap.add_argument("--debug", action="store_true", help="Verbose tracing (also TW_DEBUG=1)")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        options = load_options()
    except ValueError as e:
        print(f"[ERROR] {e}")
        raise SystemExit(1)
    debug = args.debug or os.getenv("TW_DEBUG") == "1"

    root = Path(args.dir)
    if not root.is_dir():
        print(f"[ERROR] directory not found: {root}")
        raise SystemExit(1)

    if debug:
        print(f"[tw-format] start dir={root} DRY={args.dry} USE_CN={args.use_cn} DEBUG={debug}")
    return format_tailwind_in_dir(root, options, dry=args.dry, use_cn=args.use_cn, debug=debug)


if __name__ == "__main__":
    main()
