"""
Abbreviator
Wraps abbreviations in HTML content with <abbr> tags carrying their meaning
"""

from .core import (
    AbbreviationEntry,
    AbbreviationRegistry,
    AbbreviatorError,
    ContentRewriter,
    DuplicateAbbreviationError,
    RewriteDecision,
    ValidationError,
    brackets_balanced,
    build_registry,
    rewrite,
)

__version__ = "1.0.0"

__all__ = [
    "AbbreviationEntry",
    "AbbreviationRegistry",
    "AbbreviatorError",
    "ContentRewriter",
    "DuplicateAbbreviationError",
    "RewriteDecision",
    "ValidationError",
    "brackets_balanced",
    "build_registry",
    "rewrite",
]
