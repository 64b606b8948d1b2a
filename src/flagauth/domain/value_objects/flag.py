"""Permission flag value object.

A flag is a dot-delimited sequence of segments, e.g. ``forum.post.delete``.

Grammar:

1. A flag has at least one segment and no segment may be empty.
2. A plain segment matches ``[a-z0-9]+``.
3. ``?`` may appear at any position and matches exactly one segment.
4. ``*`` may only appear as the final segment (or be the whole flag) and
   matches the remainder of the hierarchy.

Flags that contain ``?`` or ``*`` are wildcards. Only strict (non-wildcard)
flags may be required by a check.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass

from flagauth.domain.exceptions import InvalidFlagFormat

SEPARATOR = "."
WILDCARD = "*"
ANY_SEGMENT = "?"

_SEGMENT_RE = re.compile(r"[a-z0-9]+")


def _check_segments(segments: tuple[str, ...], raw: object) -> None:
    if not segments:
        raise InvalidFlagFormat(raw, "flag is empty")
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment == WILDCARD:
            if index != last:
                raise InvalidFlagFormat(raw, "'*' is only allowed as the final segment")
        elif segment == ANY_SEGMENT:
            continue
        elif not segment:
            raise InvalidFlagFormat(raw, "empty segment")
        elif not _SEGMENT_RE.fullmatch(segment):
            raise InvalidFlagFormat(raw, f"segment {segment!r} must match [a-z0-9]+")


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Flag:
    """Validated, immutable permission flag.

    Equality, hashing and ordering use the canonical string, so a
    ``StrictFlag`` and a ``Flag`` with the same text are interchangeable.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))
        _check_segments(self.segments, SEPARATOR.join(self.segments))

    @classmethod
    def validate(cls, raw: str) -> Flag:
        """Parse ``raw`` into a flag or raise ``InvalidFlagFormat``."""
        if not isinstance(raw, str):
            raise InvalidFlagFormat(raw, "flag must be a string")
        if not raw:
            raise InvalidFlagFormat(raw, "flag is empty")
        return cls(tuple(raw.split(SEPARATOR)))

    @property
    def canonical(self) -> str:
        return SEPARATOR.join(self.segments)

    @property
    def is_wildcard(self) -> bool:
        return any(s in (WILDCARD, ANY_SEGMENT) for s in self.segments)

    @property
    def key(self) -> str:
        """Final segment, e.g. ``delete`` for ``forum.post.delete``."""
        return self.segments[-1]

    @property
    def path(self) -> str:
        """All but the final segment, e.g. ``forum.post``."""
        return SEPARATOR.join(self.segments[:-1])

    def __str__(self) -> str:
        return self.canonical

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.canonical!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Flag):
            return NotImplemented
        return self.canonical == other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Flag):
            return NotImplemented
        return self.canonical < other.canonical


class StrictFlag(Flag):
    """Flag guaranteed to contain no wildcard segments."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.is_wildcard:
            raise InvalidFlagFormat(self.canonical, "wildcards are not allowed here")


def validate_flag(raw: str) -> Flag:
    """Validate ``raw`` and return a ``Flag``."""
    return Flag.validate(raw)


def validate_strict_flag(raw: str) -> StrictFlag:
    """Validate ``raw`` and return a ``StrictFlag``; wildcards are rejected."""
    return StrictFlag.validate(raw)


def to_flags(
    raw: Iterable[str],
    *,
    ignore_invalid: bool = False,
    dedupe: bool = True,
    strict: bool = False,
) -> list[Flag]:
    """Batch-convert raw strings to flags.

    With ``ignore_invalid`` malformed entries are dropped instead of failing
    the whole batch. ``dedupe`` keeps the first occurrence of each canonical
    string, preserving input order.
    """
    factory = StrictFlag.validate if strict else Flag.validate
    flags: list[Flag] = []
    seen: set[str] = set()
    for item in raw:
        try:
            flag = factory(item)
        except InvalidFlagFormat:
            if ignore_invalid:
                continue
            raise
        if dedupe:
            if flag.canonical in seen:
                continue
            seen.add(flag.canonical)
        flags.append(flag)
    return flags
