"""Line normalization for comparing added and removed lines."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from diffcount.domain.config import DEFAULT_PUNCTUATION

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class LineNormalizer:
    """Canonicalizes a raw hunk line so reformatted lines compare equal.

    Two lines differing only in indentation, internal spacing, quote style,
    trailing semicolons or commas normalize to the same key. This is a
    heuristic: `a b` and `ab` also collide.
    """

    punctuation: str = DEFAULT_PUNCTUATION
    _translation: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_translation", str.maketrans("", "", self.punctuation))

    def normalize(self, raw_line: str) -> str:
        """Normalize a raw line that still carries its +/-/space marker.

        Steps: drop the marker, strip the ends, delete all internal whitespace,
        delete the configured punctuation characters.
        """
        body = raw_line[1:].strip()
        body = _WHITESPACE_RE.sub("", body)
        return body.translate(self._translation)


_DEFAULT_NORMALIZER = LineNormalizer()


def normalize(raw_line: str) -> str:
    """Normalize with the default punctuation set."""
    return _DEFAULT_NORMALIZER.normalize(raw_line)
