from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .rules import DEFAULT_VARIANTS, GROUP_RULES, NO_PREFERENCE, ORDER_HINTS, UNRANKED
from .types import GROUP_KEYS, FormatOptions, GroupKey, ParsedToken, TailwindOptions

ClassInput = Union[str, Sequence[str]]

_ARBITRARY_VARIANT = r"\[[^\]]+\]"


def _as_text(value: ClassInput) -> str:
    if isinstance(value, str):
        return value
    return " ".join(value)


def tokenize(value: ClassInput) -> List[str]:
    """Split a class list on whitespace, keeping ``[...]`` segments whole.

    Whitespace only separates tokens at bracket depth 0. An unterminated ``[``
    keeps the rest of the input in one token.
    """
    text = _as_text(value)
    out: List[str] = []
    cur: List[str] = []
    depth = 0
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]" and depth > 0:
            depth -= 1
        if depth == 0 and ch.isspace():
            if cur:
                out.append("".join(cur))
                cur = []
        else:
            cur.append(ch)
    if cur:
        out.append("".join(cur))
    return out


@lru_cache(maxsize=64)
def _variant_regex(variants: Tuple[str, ...]) -> "re.Pattern[str]":
    names = "|".join(re.escape(v) for v in variants)
    return re.compile(rf"^(?:{_ARBITRARY_VARIANT}|(?:{names})):", re.IGNORECASE)


def make_variant_regex(variants: Optional[Iterable[str]] = None) -> "re.Pattern[str]":
    vocab = tuple(variants or ())
    return _variant_regex(vocab or DEFAULT_VARIANTS)


def split_variants(pattern: "re.Pattern[str]", token: str) -> Tuple[str, List[str]]:
    """Strip leading ``variant:`` segments; returns ``(base, variants)``.

    ``sm:hover:text-red-500`` -> ``("text-red-500", ["sm", "hover"])``.
    """
    rest = token
    found: List[str] = []
    while True:
        m = pattern.match(rest)
        if not m:
            break
        raw = m.group(0)
        found.append(raw[:-1])
        rest = rest[len(raw):]
    return rest, found


def with_prefix(prefix: str, source: str) -> str:
    if not prefix or not source.startswith("^"):
        return source
    return "^" + re.escape(prefix) + source[1:]


@lru_cache(maxsize=32)
def _group_patterns(prefix: str) -> Tuple[Tuple[GroupKey, "re.Pattern[str]"], ...]:
    return tuple((group, re.compile(with_prefix(prefix, src))) for group, src in GROUP_RULES)


def _is_custom_utility(base: str, custom: Iterable) -> bool:
    for pat in custom:
        if isinstance(pat, str):
            if base.startswith(pat):
                return True
        elif pat.search(base):
            return True
    return False


def classify(base: str, tailwind: Optional[TailwindOptions] = None) -> GroupKey:
    tw = tailwind or TailwindOptions()
    # declared plugin utilities are known tokens but have no group of their own
    if tw.custom_utilities and _is_custom_utility(base, tw.custom_utilities):
        return "misc"
    for group, pattern in _group_patterns(tw.prefix):
        if pattern.match(base):
            return group
    return "misc"


def base_score(base: str) -> int:
    for i, hint in enumerate(ORDER_HINTS):
        if hint.search(base):
            return i
    return UNRANKED


def variant_score(variants: Sequence[str], priority: Optional[Sequence[str]] = None) -> int:
    if not priority or not variants:
        return NO_PREFERENCE
    for v in variants:
        if v in priority:
            return list(priority).index(v)
    return NO_PREFERENCE


def parse_tokens(value: ClassInput, options: Optional[FormatOptions] = None) -> List[ParsedToken]:
    opts = options or FormatOptions()
    tw = opts.tailwind
    variant_re = make_variant_regex(tw.variants)
    parsed: List[ParsedToken] = []
    for i, token in enumerate(tokenize(value)):
        base, variants = split_variants(variant_re, token)
        parsed.append(ParsedToken(
            token=token,
            base=base,
            variants=tuple(variants),
            group=classify(base, tw),
            original_index=i,
            base_score=base_score(base),
            variant_score=variant_score(variants, tw.variants),
        ))
    return parsed


def format_classes(value: ClassInput, options: Optional[FormatOptions] = None) -> Union[str, List[str]]:
    """Group and order a class list.

    Returns one space-joined string, or a list of per-group chunks when
    ``options.split_per_group`` is set. Groups missing from
    ``options.group_order`` are not emitted.
    """
    opts = options or FormatOptions()
    buckets: Dict[GroupKey, List[ParsedToken]] = {k: [] for k in GROUP_KEYS}
    for item in parse_tokens(value, opts):
        buckets[item.group].append(item)

    # variant priority -> base hint -> original index
    ordered = {k: [p.token for p in sorted(items, key=ParsedToken.sort_key)]
               for k, items in buckets.items()}

    if opts.split_per_group:
        return [" ".join(ordered[k]) for k in opts.group_order if ordered.get(k)]
    flat: List[str] = []
    for k in opts.group_order:
        flat.extend(ordered.get(k, ()))
    return " ".join(flat).strip()


def categorize(value: ClassInput, options: Optional[FormatOptions] = None) -> Dict[GroupKey, List[str]]:
    """Bucket tokens by group without sorting; ``misc`` is always present."""
    opts = options or FormatOptions()
    tw = opts.tailwind
    variant_re = make_variant_regex(tw.variants)
    groups: Dict[GroupKey, List[str]] = {k: [] for k in GROUP_KEYS}
    for token in tokenize(value):
        base, _ = split_variants(variant_re, token)
        groups[classify(base, tw)].append(token)

    out: Dict[GroupKey, List[str]] = {}
    for k in opts.group_order:
        out[k] = groups.get(k, [])
    if "misc" not in out:
        out["misc"] = groups["misc"]
    return out
