"""Family request parsing.

Turns the host's raw family string and style index into candidates:

    "mySet:Inter, Noto Sans,"  ->  [mySet:Inter (custom), Noto Sans]
"""

from fontpatch.domain.candidate import FontCandidate, ResolvedStyle


def split_families(raw_family: str) -> list[str]:
    """Split a raw family string on commas.

    Each part is trimmed; trailing empty parts are dropped.
    """
    parts = [part.strip() for part in raw_family.split(",")]
    while parts and not parts[-1]:
        parts.pop()
    return parts


def parse_family(raw_family: str, style_index: int) -> tuple[list[FontCandidate], ResolvedStyle]:
    """Parse a family request.

    Args:
        raw_family: Family string as passed by the host
        style_index: Host style index (0 regular, 1 bold, 2 italic, 3 bold italic)

    Returns:
        Candidates in request order, and the requested style

    Raises:
        ValueError: If style_index is out of range
    """
    style = ResolvedStyle.from_index(style_index)
    candidates = [FontCandidate.from_part(part) for part in split_families(raw_family)]
    return candidates, style
