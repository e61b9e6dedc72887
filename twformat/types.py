from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Tuple, Union

GroupKey = Literal[
    "layout",
    "spacing",
    "sizing",
    "typography",
    "colors",
    "borders",
    "effects",
    "interactivity",
    "accessibility",
    "misc",
]

# structural -> visual -> interactive, misc last
GROUP_KEYS: Tuple[GroupKey, ...] = (
    "layout",         # display, position, flex/grid
    "spacing",        # padding, margin, space-x/y
    "sizing",         # width, height, aspect
    "typography",     # font, text size, leading, tracking
    "colors",         # bg, text color, gradients
    "borders",        # border, rounded, divide, outline
    "effects",        # transforms, filters
    "interactivity",  # cursor, transitions, animation
    "accessibility",  # sr-only, aria-*, data-*
    "misc",
)
DEFAULT_ORDER: Tuple[GroupKey, ...] = GROUP_KEYS

CustomUtility = Union[str, "re.Pattern[str]"]


@dataclass(frozen=True)
class TailwindOptions:
    prefix: str = ""
    # priority list; earlier = sorts first. Also the variant vocabulary when set.
    variants: Tuple[str, ...] = ()
    # plugin utilities: literal prefixes or compiled patterns, all go to misc
    custom_utilities: Tuple[CustomUtility, ...] = ()


@dataclass(frozen=True)
class FormatOptions:
    group_order: Tuple[GroupKey, ...] = DEFAULT_ORDER
    split_per_group: bool = False
    strict_tailwind_order: bool = False  # reserved for a parity mode, unused
    tailwind: TailwindOptions = field(default_factory=TailwindOptions)


@dataclass(frozen=True)
class ParsedToken:
    token: str
    base: str
    variants: Tuple[str, ...]
    group: GroupKey
    original_index: int
    base_score: int
    variant_score: int

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.variant_score, self.base_score, self.original_index)
