"""
Abbreviator Content Rewriter
Wraps whole-word abbreviations in HTML content with <abbr> tags while leaving
occurrences inside tag markup alone
"""

import logging
import re
from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Set

from .registry import AbbreviationRegistry

logger = logging.getLogger(__name__)

# Tag markup as far as bracket counting is concerned: a < up to the next >
TAG_PATTERN = re.compile(r"<[^<>]*>")


@lru_cache(maxsize=512)
def word_pattern(abbreviation: str) -> "re.Pattern[str]":
    """Match an abbreviation as a literal token between word boundaries"""
    return re.compile(r"\b" + re.escape(abbreviation) + r"\b")


def brackets_balanced(text: str) -> bool:
    """True when text has as many < as > characters"""
    return text.count("<") == text.count(">")


def strip_tags(text: str) -> str:
    return TAG_PATTERN.sub("", text)


@dataclass
class RewriteDecision:
    """
    Outcome of checking one piece of content

    Collaborators may cache this keyed by content identity so unchanged
    content doesn't have to be scanned again.
    """

    has_abbreviations: bool = False
    has_abbreviations_inside_tags: bool = False
    rewritten_content: Optional[str] = None
    # False when < and > counts differed and every abbreviation went through
    # the careful strategy
    tags_verified: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RewriteDecision":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ContentRewriter:
    """
    Adds <abbr> tags for a registry's abbreviations to HTML content

    Abbreviations that never occur inside tag markup are replaced in one
    simultaneous pass. The others are rebuilt occurrence by occurrence,
    counting brackets to decide whether each one sits inside an open tag.
    """

    def __init__(self, registry: AbbreviationRegistry):
        self.registry = registry
        self._abbreviations = registry.abbreviations()
        self._tags = dict(zip(self._abbreviations, registry.tags()))
        self._any_pattern = self._build_pattern(self._abbreviations)

    @staticmethod
    def _build_pattern(abbreviations: List[str]) -> Optional["re.Pattern[str]"]:
        """Alternation of word-boundary patterns, e.g. \\bFUBAR\\b|\\bSNAFU\\b"""
        if not abbreviations:
            return None
        return re.compile("|".join(word_pattern(a).pattern for a in abbreviations))

    def has_abbreviations(self, content: str) -> bool:
        """Fast containment test for any abbreviation in content"""
        if self._any_pattern is None:
            return False
        return self._any_pattern.search(content) is not None

    def abbreviations_inside_tags(self, content: str) -> Set[str]:
        """
        Abbreviations with at least one occurrence inside tag markup

        Compares match counts against the raw content and against the content
        with tags stripped; any difference means an occurrence lives in a tag.
        """
        stripped = strip_tags(content)
        flagged = set()

        for abbreviation in self._abbreviations:
            pattern = word_pattern(abbreviation)
            if len(pattern.findall(content)) != len(pattern.findall(stripped)):
                flagged.add(abbreviation)

        return flagged

    def bulk_replace(self, content: str, abbreviations: Optional[List[str]] = None) -> str:
        """
        Replace every occurrence of the abbreviations in a single pass

        Only safe when none of them occurs inside tag markup. Replacement
        markup is never scanned again.
        """
        if abbreviations is None:
            abbreviations = self._abbreviations

        pattern = self._build_pattern(abbreviations)
        if pattern is None:
            return content

        return pattern.sub(lambda match: self._tags[match.group(0)], content)

    def careful_replace(self, content: str, abbreviation: str) -> str:
        """
        Replace occurrences of one abbreviation that sit outside tags

        Content is split on the abbreviation and rebuilt left to right. When
        the reconstruction so far has an unclosed <, the abbreviation is put
        back as-is; otherwise its tag goes in.
        """
        tag = self._tags[abbreviation]
        parts = word_pattern(abbreviation).split(content)
        reconstruction = []

        # running count of < minus > in the reconstruction; inserted text
        # never changes it
        open_brackets = 0

        for i, part in enumerate(parts):
            reconstruction.append(part)
            open_brackets += part.count("<") - part.count(">")

            if i + 1 < len(parts):
                reconstruction.append(abbreviation if open_brackets != 0 else tag)

        return "".join(reconstruction)

    def check(self, content: str) -> RewriteDecision:
        """
        Decide how content needs rewriting and rewrite it

        Args:
            content: HTML content

        Returns:
            RewriteDecision; rewritten_content is None when nothing matched
        """
        if not self.has_abbreviations(content):
            return RewriteDecision()

        if not brackets_balanced(content):
            logger.warning(
                "Unequal counts of '<' and '>' in content, "
                "checking every abbreviation occurrence individually"
            )
            rewritten = content
            for abbreviation in self._abbreviations:
                rewritten = self.careful_replace(rewritten, abbreviation)

            return RewriteDecision(
                has_abbreviations=True,
                has_abbreviations_inside_tags=True,
                rewritten_content=rewritten,
                tags_verified=False,
            )

        inside_tags = self.abbreviations_inside_tags(content)
        safe = [a for a in self._abbreviations if a not in inside_tags]
        logger.debug(f"Bulk replacing {len(safe)} abbreviations, carefully replacing {len(inside_tags)}")

        # bulk first so the careful passes see its markup as balanced tags
        rewritten = self.bulk_replace(content, safe)
        for abbreviation in self._abbreviations:
            if abbreviation in inside_tags:
                rewritten = self.careful_replace(rewritten, abbreviation)

        return RewriteDecision(
            has_abbreviations=True,
            has_abbreviations_inside_tags=bool(inside_tags),
            rewritten_content=rewritten,
        )

    def rewrite(self, content: str) -> str:
        decision = self.check(content)
        if not decision.has_abbreviations:
            return content
        return decision.rewritten_content


def rewrite(content: str, registry: AbbreviationRegistry) -> str:
    """Return content with the registry's abbreviations wrapped in <abbr> tags"""
    if not len(registry):
        return content
    return ContentRewriter(registry).rewrite(content)
