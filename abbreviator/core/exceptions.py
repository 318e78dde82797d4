"""
Abbreviator error taxonomy
Errors are raised while building a registry, never while rewriting content
"""

from typing import Optional


class AbbreviatorError(Exception):
    """Base class for all abbreviator errors"""

    def __init__(self, message: str, abbreviation: Optional[str] = None):
        super().__init__(message)
        self.abbreviation = abbreviation


class ValidationError(AbbreviatorError, ValueError):
    """An abbreviation or meaning is empty after trimming, or otherwise unusable"""


class DuplicateAbbreviationError(AbbreviatorError):
    """Two entries share the same abbreviation text"""

    def __init__(self, abbreviation: str):
        super().__init__(f"Abbreviation '{abbreviation}' is already defined", abbreviation)
