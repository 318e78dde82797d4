"""Core abbreviation registry and content rewriting"""

from .abbreviation import AbbreviationEntry
from .content_filter import ContentFilter
from .exceptions import AbbreviatorError, DuplicateAbbreviationError, ValidationError
from .registry import AbbreviationRegistry, build_registry, load_registry
from .rewriter import ContentRewriter, RewriteDecision, brackets_balanced, rewrite
from .settings import PostValidity, SettingsService, validate_posted_data
from .store import KeyValueStore, MemoryStore, YamlFileStore

__all__ = [
    "AbbreviationEntry",
    "AbbreviationRegistry",
    "AbbreviatorError",
    "ContentFilter",
    "ContentRewriter",
    "DuplicateAbbreviationError",
    "KeyValueStore",
    "MemoryStore",
    "PostValidity",
    "RewriteDecision",
    "SettingsService",
    "ValidationError",
    "YamlFileStore",
    "brackets_balanced",
    "build_registry",
    "load_registry",
    "rewrite",
    "validate_posted_data",
]
