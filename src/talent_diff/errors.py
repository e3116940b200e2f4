"""Exception types raised at the talent_diff call boundaries.

Three named failures cover the export-string core:

- ``InvalidCharacterError``: a symbol outside ``A-Za-z0-9+/`` (and whitespace).
- ``TooShortError``: the decoded buffer cannot hold the 19-byte header.
- ``SpecMismatchError``: two builds of different specializations were diffed.

``TopologyError`` is raised when static tree data is malformed.

All of them subclass ``ValueError`` so callers that already guard user input
with ``except ValueError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "InvalidCharacterError",
    "SpecMismatchError",
    "TalentStringError",
    "TooShortError",
    "TopologyError",
]


class TalentStringError(ValueError):
    """Base class for failures on user-supplied export strings and builds."""


class InvalidCharacterError(TalentStringError):
    """The export string contains a symbol outside the base64 alphabet.

    Attributes:
        character: The offending symbol.
        position:  Offset of the symbol in the whitespace-stripped input.
    """

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid character in talent string: {character!r} at position {position}"
        )


class TooShortError(TalentStringError):
    """The decoded export string is shorter than the fixed header."""

    def __init__(self, byte_count: int, required: int) -> None:
        self.byte_count = byte_count
        self.required = required
        super().__init__(
            f"Talent string too short - got {byte_count} bytes, "
            f"expected at least {required}"
        )


class SpecMismatchError(TalentStringError):
    """Two builds (or a build and a topology) belong to different specializations.

    Attributes:
        left:  Display name of the first spec, or its numeric id as a string.
        right: Display name of the second spec, or its numeric id as a string.
    """

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Cannot compare different specs: {left} vs {right}")


class TopologyError(ValueError):
    """Static talent tree data is missing a required field or is inconsistent."""
