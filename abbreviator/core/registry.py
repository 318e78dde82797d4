"""
Abbreviation Registry
Ordered, unique collection of abbreviation entries
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

import yaml

from .abbreviation import AbbreviationEntry
from .exceptions import DuplicateAbbreviationError, ValidationError

logger = logging.getLogger(__name__)

EntryLike = Union[AbbreviationEntry, Mapping[str, str], tuple]


class AbbreviationRegistry:
    """
    Ordered collection of abbreviations and their meanings

    Insertion order is preserved because it determines the order in which
    abbreviations are replaced within content.
    """

    def __init__(self, entries: Optional[Iterable[AbbreviationEntry]] = None):
        self._entries: Dict[str, AbbreviationEntry] = {}

        for entry in entries or []:
            self.add_entry(entry)

    def add(self, abbreviation: str, meaning: str) -> AbbreviationEntry:
        """
        Add an abbreviation and its meaning

        Args:
            abbreviation: Abbreviation text, trimmed before storing
            meaning: Expansion shown in the tag's title

        Returns:
            The stored entry

        Raises:
            ValidationError: if either value is empty after trimming
            DuplicateAbbreviationError: if the abbreviation is already present
        """
        return self.add_entry(AbbreviationEntry(abbreviation, meaning))

    def add_entry(self, entry: AbbreviationEntry) -> AbbreviationEntry:
        """Add a prebuilt entry; anything else is rejected"""
        if not isinstance(entry, AbbreviationEntry):
            raise TypeError(
                f"AbbreviationRegistry values must be AbbreviationEntry instances, "
                f"not {type(entry).__name__}"
            )

        if entry.abbreviation in self._entries:
            raise DuplicateAbbreviationError(entry.abbreviation)

        self._entries[entry.abbreviation] = entry
        return entry

    def abbreviations(self) -> List[str]:
        """Abbreviation texts in insertion order"""
        return [entry.abbreviation for entry in self._entries.values()]

    def tags(self) -> List[str]:
        """Rendered tags, parallel to abbreviations()"""
        return [entry.tag for entry in self._entries.values()]

    def meaning_of(self, abbreviation: str) -> Optional[str]:
        entry = self._entries.get(abbreviation)
        return entry.meaning if entry else None

    def as_map(self) -> Dict[str, str]:
        """Map of abbreviations to meanings, e.g. for editing prior entries"""
        return {entry.abbreviation: entry.meaning for entry in self._entries.values()}

    def to_records(self) -> List[Dict[str, str]]:
        return [entry.to_record() for entry in self._entries.values()]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, str]]) -> "AbbreviationRegistry":
        return build_registry(records)

    def fingerprint(self) -> str:
        """Stable hash of the registry contents, order included"""
        payload = json.dumps(self.to_records(), ensure_ascii=False, sort_keys=True)
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()

    def __iter__(self) -> Iterator[AbbreviationEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, abbreviation: object) -> bool:
        return abbreviation in self._entries

    def __repr__(self) -> str:
        return f"AbbreviationRegistry({self.abbreviations()!r})"


def build_registry(entries: Iterable[EntryLike]) -> AbbreviationRegistry:
    """
    Build a registry from raw configuration data

    Args:
        entries: (abbreviation, meaning) pairs, mappings with "abbreviation"
            and "meaning" keys, or AbbreviationEntry instances

    Returns:
        A new registry holding the entries in the order given
    """
    registry = AbbreviationRegistry()

    for item in entries:
        if isinstance(item, AbbreviationEntry):
            registry.add_entry(item)
        elif isinstance(item, Mapping):
            registry.add(item.get("abbreviation", ""), item.get("meaning", ""))
        elif isinstance(item, str):
            raise ValidationError(f"Abbreviation '{item}' has no meaning", item)
        else:
            try:
                abbreviation, meaning = item
            except (TypeError, ValueError):
                raise ValidationError(f"Cannot read an abbreviation entry from {item!r}")
            registry.add(abbreviation, meaning)

    return registry


def load_registry(path: Union[str, Path]) -> AbbreviationRegistry:
    """
    Load a registry from a YAML file

    The file holds either a mapping of abbreviation to meaning or a list of
    {abbreviation, meaning} records. A missing or empty file gives an empty
    registry.
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Abbreviation file {path} not found, using an empty registry")
        return AbbreviationRegistry()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        registry = AbbreviationRegistry()
    elif isinstance(data, Mapping):
        registry = build_registry((str(k), "" if v is None else str(v)) for k, v in data.items())
    elif isinstance(data, list):
        registry = build_registry(data)
    else:
        raise ValidationError(f"Unsupported abbreviation file format in {path}")

    logger.info(f"Loaded {len(registry)} abbreviations from {path}")
    return registry
