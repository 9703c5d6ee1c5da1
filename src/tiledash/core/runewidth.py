"""Display width of runes and strings in terminal cells."""

from __future__ import annotations

from functools import lru_cache

from wcwidth import wcwidth


@lru_cache(maxsize=4096)
def rune_width(rune: str) -> int:
    """
    Number of cells the rune occupies, either 1 or 2.

    Zero-width and non-printable runes are given a single cell so that
    every rune written to a canvas is visible and addressable.
    """
    if len(rune) != 1:
        raise ValueError(f"expected a single rune, got {rune!r}")
    width = wcwidth(rune)
    if width == 2:
        return 2
    return 1


def string_width(text: str) -> int:
    """Number of cells the text occupies."""
    return sum(rune_width(r) for r in text)
