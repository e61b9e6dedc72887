"""Pattern tables for classification and intra-group ordering.

All tables are ordered and evaluated first-match-wins. Group rules are kept as
pattern sources anchored with ``^`` so a configured prefix can be injected
right after the anchor (see ``core.with_prefix``).
"""
from __future__ import annotations

import re
from typing import Tuple

from .types import GroupKey

# Fallback vocabulary for variant stripping when no variants are configured.
DEFAULT_VARIANTS: Tuple[str, ...] = (
    # screens
    "sm", "md", "lg", "xl", "2xl",
    # color scheme / env
    "dark", "light", "portrait", "landscape", "motion-safe", "motion-reduce",
    # state
    "hover", "focus", "focus-visible", "focus-within", "active", "visited", "disabled",
    # structural
    "first", "last", "only", "odd", "even",
    # data/aria
    "open", "checked", "required", "invalid",
    # direction
    "rtl", "ltr",
    # group/peer
    "group-hover", "group-focus", "peer-hover", "peer-focus",
)

# text-{xs,sm,base,lg,xl,[...]} is a size (typography), any other text-* is a color
_TEXT_SIZE = r"text-(?:xs|sm|base|lg|xl|\[)"
_TEXT_COLOR = r"text-(?!xs|sm|base|lg|xl)"

GROUP_RULES: Tuple[Tuple[GroupKey, str], ...] = (
    ("layout", r"^(container|block|inline|flex|grid|table|flow-|contents|col-|row-|justify-|items-|content-|place-|order-|gap-)"),
    ("spacing", r"^(p[trblxy]?-.+|m[trblxy]?-.+|space-[xy]-)"),
    ("sizing", r"^(w-|h-|min-w-|max-w-|min-h-|max-h-|aspect-)"),
    ("typography", rf"^(font-|{_TEXT_SIZE}|leading-|tracking-|list-|truncate|line-clamp-)"),
    ("colors", rf"^(bg-|{_TEXT_COLOR}|from-|via-|to-|decoration-|underline|ring-|shadow-|opacity-)"),
    ("borders", r"^(border|rounded|divide-|outline)"),
    ("effects", r"^(shadow-|blur|backdrop-|transform|scale-|rotate-|translate-|skew-)"),
    ("interactivity", r"^(cursor-|select-|pointer-events-|accent-|appearance-|scroll-|transition|duration-|ease-|animate-)"),
    ("accessibility", r"^(sr-only|not-sr-only|aria-|data-)"),
)

# Lower index sorts earlier inside a bucket. Tried with ``search`` against the
# unprefixed base; the col/row and alignment entries anchor only their first
# branch, so e.g. ``border-2`` ranks with ``order-*`` and ``flex-row-reverse``
# with ``row-*``.
ORDER_HINTS: Tuple["re.Pattern[str]", ...] = tuple(re.compile(p) for p in (
    r"^container$",
    r"^(block|inline.*|contents)$",  # display
    r"^(flex|grid|table)$",
    r"^col-.*|row-.*$",
    r"^gap-.*$",
    r"^justify-.*|items-.*|content-.*|place-.*|order-.*$",  # alignment
    r"^p.*",  # padding
    r"^m.*",  # margin
    r"^space-.*",
    r"^(w-|h-|min-|max-|aspect-)",
    rf"^(font-|{_TEXT_SIZE}|leading-|tracking-|list-|truncate|line-clamp-)",
    rf"^(bg-|{_TEXT_COLOR}|from-|via-|to-|decoration-|underline|ring-|shadow-|opacity-)",
    r"^(border|rounded|divide-|outline)",
    r"^(transform|scale-|rotate-|translate-|skew-|blur|backdrop-)",
    r"^(cursor-|select-|pointer-events-|accent-|appearance-|scroll-|transition|duration-|ease-|animate-)",
    r"^(sr-only|not-sr-only|aria-|data-)",
))

UNRANKED = len(ORDER_HINTS) + 1
NO_PREFERENCE = 9999
