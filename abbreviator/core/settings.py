"""
Abbreviator Settings
Validates posted abbreviation/meaning rows and persists the resulting registry
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .exceptions import AbbreviatorError
from .registry import AbbreviationRegistry, build_registry
from .store import KeyValueStore

logger = logging.getLogger(__name__)

UNEQUAL_ROWS_MESSAGE = "Please be sure to enter an equal number of abbreviations and meanings."
NOT_A_LIST_MESSAGE = "Abbreviations and meanings must each be sent as a list."


@dataclass
class PostValidity:
    """Result of validating posted settings data"""

    problems: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.problems

    def to_dict(self) -> Dict:
        return {"valid": self.valid, "problems": list(self.problems)}


def validate_posted_data(
    abbreviations: Optional[Sequence[str]],
    meanings: Optional[Sequence[str]],
) -> Tuple[PostValidity, List[Tuple[str, str]]]:
    """
    Clean and check parallel lists of abbreviations and meanings

    Values are trimmed and rows where both cells are blank are dropped. The
    remaining rows must have both an abbreviation and a meaning.

    Returns:
        (validity, rows) where rows are the cleaned (abbreviation, meaning) pairs
    """
    if not all(isinstance(values, (list, tuple)) for values in (abbreviations or [], meanings or [])):
        return PostValidity([NOT_A_LIST_MESSAGE]), []

    abbreviations = [str(a or "").strip() for a in abbreviations or []]
    meanings = [str(m or "").strip() for m in meanings or []]
    problems = []

    size = max(len(abbreviations), len(meanings))
    abbreviations += [""] * (size - len(abbreviations))
    meanings += [""] * (size - len(meanings))

    rows = [(a, m) for a, m in zip(abbreviations, meanings) if a or m]
    if any(not a or not m for a, m in rows):
        problems.append(UNEQUAL_ROWS_MESSAGE)

    return PostValidity(problems), rows


class SettingsService:
    """
    Saves and loads the abbreviation registry through a key-value store
    """

    def __init__(self, store: KeyValueStore, prefix: str = "abbreviator-"):
        self.store = store
        self.prefix = prefix

    @property
    def option_name(self) -> str:
        return f"{self.prefix}abbreviations"

    def save(self, abbreviations: Sequence[str], meanings: Sequence[str]) -> PostValidity:
        """
        Validate posted rows and, if they're valid, store them

        Registry errors (duplicates, unusable values) are reported as
        problems rather than raised, leaving the stored registry untouched.
        """
        validity, rows = validate_posted_data(abbreviations, meanings)
        if not validity.valid:
            logger.info(f"Rejected abbreviation settings: {validity.problems}")
            return validity

        try:
            registry = build_registry(rows)
        except AbbreviatorError as e:
            validity.problems.append(str(e))
            logger.info(f"Rejected abbreviation settings: {e}")
            return validity

        self.store.set(self.option_name, registry.to_records())
        logger.info(f"Saved {len(registry)} abbreviations")
        return validity

    def load(self) -> AbbreviationRegistry:
        records = self.store.get(self.option_name, None)
        if not records:
            return AbbreviationRegistry()
        return build_registry(records)

    def abbreviation_map(self) -> Dict[str, str]:
        return self.load().as_map()
