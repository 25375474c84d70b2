"""Font request types.

A raw family request from the host is normalized into one candidate per
comma-separated part, plus the requested style.
"""

from dataclasses import dataclass
from enum import Enum


class ResolvedStyle(Enum):
    """Requested font style, indexed the way the host passes it."""

    REGULAR = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3

    @property
    def suffix(self) -> str:
        """Filename suffix used by bundled fonts (e.g. ``Inter_bold.ttf``)."""
        return _STYLE_SUFFIXES[self]

    @classmethod
    def from_index(cls, index: int) -> "ResolvedStyle":
        """Map a host style index to a style.

        Raises:
            ValueError: If index is outside 0..3
        """
        try:
            return cls(index)
        except ValueError:
            raise ValueError(f"Style index out of range: {index}") from None


_STYLE_SUFFIXES = {
    ResolvedStyle.REGULAR: "",
    ResolvedStyle.BOLD: "_bold",
    ResolvedStyle.ITALIC: "_italic",
    ResolvedStyle.BOLD_ITALIC: "_bold_italic",
}


@dataclass(frozen=True)
class FontCandidate:
    """One family name from a request.

    Attributes:
        family_name: Trimmed family name as requested
        custom_set_name: Font set name for ``set:logical`` requests
        logical_name: Logical font name for ``set:logical`` requests
    """

    family_name: str
    custom_set_name: str | None = None
    logical_name: str | None = None

    @property
    def is_custom_qualified(self) -> bool:
        """Whether the candidate points into a downloaded font set."""
        return self.custom_set_name is not None

    @classmethod
    def from_part(cls, part: str) -> "FontCandidate":
        """Build a candidate from one trimmed request part.

        ``"mySet:Inter"`` becomes a custom-qualified candidate; anything
        without a colon is a plain family name.
        """
        if ":" not in part:
            return cls(family_name=part)
        set_name, _, logical_name = part.partition(":")
        return cls(
            family_name=part,
            custom_set_name=set_name.strip(),
            logical_name=logical_name.strip(),
        )
