#!/usr/bin/env python3
"""
Format Tailwind class lists in a source tree.

Thin wrapper around twformat/cli.py so you can run:

  python format_tailwind.py src/ --dry

Flags:
  --dry      Report files that would change; write nothing
  --use-cn   Split class lists into one cn()/clsx()/classNames() argument per group
  --debug    Verbose tracing (same as TW_DEBUG=1)

Options such as prefix/variants come from .env (TW_PREFIX, TW_VARIANTS,
TW_CUSTOM_UTILITIES, TW_GROUP_ORDER) or a JSON file named by TW_CONFIG.
"""

import os
import sys


def main():
    # Ensure repo root is on sys.path so we can import twformat without installing
    repo_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, repo_root)
    from twformat.cli import main as cli_main  # type: ignore
    cli_main()


if __name__ == "__main__":
    main()
