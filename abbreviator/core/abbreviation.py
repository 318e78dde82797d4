"""
Abbreviation entries
A single abbreviation, its meaning, and the <abbr> markup derived from them
"""

import html
from dataclasses import dataclass

from .exceptions import ValidationError


@dataclass(frozen=True)
class AbbreviationEntry:
    """
    An abbreviation and its meaning

    Both values are trimmed on construction. The rendered tag is derived on
    demand rather than stored.
    """

    abbreviation: str
    meaning: str

    def __post_init__(self):
        abbreviation = "" if self.abbreviation is None else str(self.abbreviation).strip()
        meaning = "" if self.meaning is None else str(self.meaning).strip()

        if not abbreviation:
            raise ValidationError("Abbreviation must not be empty", self.abbreviation)
        if not meaning:
            raise ValidationError(f"Meaning for '{abbreviation}' must not be empty", abbreviation)

        # tag detection counts brackets, so they can't be part of the token
        if "<" in abbreviation or ">" in abbreviation:
            raise ValidationError(
                f"Abbreviation '{abbreviation}' must not contain '<' or '>'", abbreviation
            )

        object.__setattr__(self, "abbreviation", abbreviation)
        object.__setattr__(self, "meaning", meaning)

    @property
    def tag(self) -> str:
        """Rendered inline markup for this abbreviation"""
        title = html.escape(self.meaning, quote=True)
        return f'<abbr title="{title}">{self.abbreviation}</abbr>'

    def to_record(self) -> dict:
        return {"abbreviation": self.abbreviation, "meaning": self.meaning}
