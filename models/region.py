"""
models/region.py
----------------
Fixed set of region classifications for addresses.
"""

from enum import Enum


class UnknownRegion(ValueError):
    """Region text read from the store matches no `Region` member."""

    def __init__(self, text):
        super().__init__(f"Unknown region: {text!r}")
        self.text = text


class Region(Enum):
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @classmethod
    def from_text(cls, text: str) -> "Region":
        """
        Parse stored region text, ignoring case.

        Raises:
            UnknownRegion: If the text is empty or not a member name.
        """
        if not text:
            raise UnknownRegion(text)
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise UnknownRegion(text) from None

    def __str__(self) -> str:
        return self.value
