from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .types import GROUP_KEYS, FormatOptions, TailwindOptions

# /pattern/ or /pattern/i in config marks a regex custom utility
_REGEX_LITERAL = re.compile(r"^/(?P<src>.+)/(?P<flags>[i]*)$")


def _split_csv(raw: Optional[str]) -> List[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


def parse_custom_utility(entry):
    if not isinstance(entry, str):
        return entry
    m = _REGEX_LITERAL.match(entry)
    if not m:
        return entry
    flags = re.IGNORECASE if "i" in m.group("flags") else 0
    try:
        return re.compile(m.group("src"), flags)
    except re.error as e:
        raise ValueError(f"invalid customUtilities pattern {entry!r}: {e}") from e


def _list_field(value, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{name}' must be a list, got {type(value).__name__}")
    return list(value)


def options_from_dict(data: Mapping) -> FormatOptions:
    """Build FormatOptions from a camelCase mapping (JSON config shape)."""
    if not isinstance(data, Mapping):
        raise ValueError("config must be a JSON object")
    tw = data.get("tailwind") or {}
    if not isinstance(tw, Mapping):
        raise ValueError("'tailwind' must be an object")

    kwargs = {}
    if data.get("groupOrder") is not None:
        order = [str(k) for k in _list_field(data["groupOrder"], "groupOrder")]
        unknown = [k for k in order if k not in GROUP_KEYS]
        if unknown:
            raise ValueError(f"unknown group(s) in groupOrder: {', '.join(unknown)}")
        kwargs["group_order"] = tuple(order)
    return FormatOptions(
        split_per_group=bool(data.get("splitPerGroup", False)),
        strict_tailwind_order=bool(data.get("strictTailwindOrder", False)),
        tailwind=TailwindOptions(
            prefix=str(tw.get("prefix") or ""),
            variants=tuple(str(v) for v in _list_field(tw.get("variants"), "variants")),
            custom_utilities=tuple(
                parse_custom_utility(u) for u in _list_field(tw.get("customUtilities"), "customUtilities")
            ),
        ),
        **kwargs,
    )


def options_from_env(env: Optional[Mapping[str, str]] = None, base: Optional[Mapping] = None) -> Dict:
    """Overlay TW_* environment variables onto a camelCase config mapping."""
    env = os.environ if env is None else env
    data = dict(base or {})
    tw = dict(data.get("tailwind") or {})
    if env.get("TW_PREFIX") is not None:
        tw["prefix"] = env["TW_PREFIX"]
    if env.get("TW_VARIANTS"):
        tw["variants"] = _split_csv(env["TW_VARIANTS"])
    if env.get("TW_CUSTOM_UTILITIES"):
        tw["customUtilities"] = _split_csv(env["TW_CUSTOM_UTILITIES"])
    if env.get("TW_GROUP_ORDER"):
        data["groupOrder"] = _split_csv(env["TW_GROUP_ORDER"])
    if tw:
        data["tailwind"] = tw
    return data


def load_options(config_path: Optional[str] = None) -> FormatOptions:
    # .env of the project being formatted, not of this package
    load_dotenv(find_dotenv(usecwd=True))
    data: Dict = {}
    path = config_path or os.getenv("TW_CONFIG")
    if path:
        p = Path(path)
        if p.exists():
            try:
                data = json.loads(p.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValueError(f"invalid JSON in {p}: {e}") from e
        elif config_path:
            raise ValueError(f"config file not found: {p}")
    if not isinstance(data, Mapping):
        raise ValueError("config must be a JSON object")
    return options_from_dict(options_from_env(base=data))
