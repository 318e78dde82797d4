"""
Abbreviator Content Filter
Rewrites content through the ContentRewriter, caching each content item's
RewriteDecision in a key-value store until the content changes
"""

import logging
import os
import time
from typing import Callable, Iterable, Optional, Union

from .registry import AbbreviationRegistry
from .rewriter import ContentRewriter, RewriteDecision
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class ContentFilter:
    """
    Staleness-aware wrapper around ContentRewriter

    For every content item the store records when it was last checked, the
    resulting decision, and the fingerprint of the registry used. An item is
    checked again once its last-modified time (or that of any watched file)
    passes the recorded check time, or once the registry changes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        registry: AbbreviationRegistry,
        prefix: str = "abbreviator-",
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.registry = registry
        self.prefix = prefix
        self.clock = clock
        self.rewriter = ContentRewriter(registry)
        self._fingerprint = registry.fingerprint()

    def _key(self, content_id: Union[str, int], name: str) -> str:
        return f"{self.prefix}{content_id}-{name}"

    def staleness(self, modified_at: float, watched_files: Iterable[str] = ()) -> float:
        """Latest of modified_at and the mtimes of the watched files"""
        latest = modified_at
        for path in watched_files:
            try:
                latest = max(latest, os.path.getmtime(path))
            except OSError:
                logger.warning(f"Watched file {path} is not readable, ignoring it")
        return latest

    def should_recheck(
        self,
        content_id: Union[str, int],
        modified_at: float,
        watched_files: Iterable[str] = (),
    ) -> bool:
        """True when the content, a watched file, or the registry changed since the last check"""
        last_check = self.store.get(self._key(content_id, "last-abbreviation-check"), 0)
        if self.staleness(modified_at, watched_files) > last_check:
            return True
        return self.store.get(self._key(content_id, "registry-fingerprint")) != self._fingerprint

    def recheck(self, content_id: Union[str, int], content: str) -> RewriteDecision:
        """Check content now and record the result"""
        self.store.set(self._key(content_id, "last-abbreviation-check"), self.clock())
        decision = self.rewriter.check(content)

        self.store.set(self._key(content_id, "post-has-abbreviations"), decision.has_abbreviations)
        self.store.set(self._key(content_id, "rewrite-decision"), decision.to_dict())
        self.store.set(self._key(content_id, "registry-fingerprint"), self._fingerprint)

        logger.debug(
            f"Checked {content_id}: has_abbreviations={decision.has_abbreviations}, "
            f"inside_tags={decision.has_abbreviations_inside_tags}"
        )
        return decision

    def cached_decision(self, content_id: Union[str, int]) -> Optional[RewriteDecision]:
        data = self.store.get(self._key(content_id, "rewrite-decision"))
        return RewriteDecision.from_dict(data) if data else None

    def filter(
        self,
        content_id: Union[str, int],
        content: str,
        modified_at: float,
        watched_files: Iterable[str] = (),
    ) -> str:
        """
        Return content with abbreviation tags added

        Args:
            content_id: Identity of the content item
            content: HTML content
            modified_at: Last-modified timestamp of the content (UTC seconds)
            watched_files: Auxiliary files whose changes also invalidate the cache

        Returns:
            Rewritten content, or content unchanged if it has no abbreviations
        """
        watched_files = list(watched_files)

        if self.should_recheck(content_id, modified_at, watched_files):
            decision = self.recheck(content_id, content)
            return decision.rewritten_content if decision.has_abbreviations else content

        if not self.store.get(self._key(content_id, "post-has-abbreviations"), False):
            return content

        decision = self.cached_decision(content_id)
        if decision is not None and decision.rewritten_content is not None:
            return decision.rewritten_content

        return self.rewriter.rewrite(content)

    def invalidate(self, content_id: Union[str, int]) -> None:
        """Forget everything recorded for content_id so the next filter() rechecks it"""
        for name in (
            "last-abbreviation-check",
            "post-has-abbreviations",
            "rewrite-decision",
            "registry-fingerprint",
        ):
            self.store.delete(self._key(content_id, name))
