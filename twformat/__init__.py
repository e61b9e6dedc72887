from .core import categorize, classify, format_classes, parse_tokens, tokenize
from .types import DEFAULT_ORDER, GROUP_KEYS, FormatOptions, ParsedToken, TailwindOptions

__all__ = [
    "DEFAULT_ORDER",
    "GROUP_KEYS",
    "FormatOptions",
    "ParsedToken",
    "TailwindOptions",
    "categorize",
    "classify",
    "format_classes",
    "parse_tokens",
    "tokenize",
]
