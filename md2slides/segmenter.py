"""Split a markdown document into per-slide fragments."""
from typing import List

DEFAULT_DELIMITER = "---"


def segment(document: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split *document* on every literal occurrence of *delimiter*.

    Each piece is stripped and empty pieces are dropped; order is preserved.

    Args:
        document: Raw markdown content
        delimiter: Literal separator between slides

    Returns:
        List of non-empty markdown fragments, one per slide
    """
    if not delimiter:
        raise ValueError("Slide delimiter must be a non-empty string")

    fragments = []
    for piece in document.split(delimiter):
        piece = piece.strip()
        if piece:
            fragments.append(piece)
    return fragments
