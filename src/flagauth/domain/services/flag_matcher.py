"""Flag matching - decides whether a held flag satisfies a required one."""

from collections.abc import Iterable, Sequence

from flagauth.domain.value_objects import Flag
from flagauth.domain.value_objects.flag import ANY_SEGMENT, WILDCARD


def has(required: Flag, held: Flag) -> bool:
    """Return True if ``held`` grants ``required``.

    Segments are compared position by position. A held ``*`` satisfies the
    rest of ``required``; a held ``?`` satisfies exactly one segment. Without
    a trailing ``*`` both flags must have the same number of segments, so
    ``a.b.c`` does not grant ``a.b`` and ``a.b`` does not grant ``a.b.c``.
    """
    wanted = required.segments
    granted = held.segments
    if not wanted or not granted:
        return False

    for index, segment in enumerate(wanted):
        if index >= len(granted):
            return False
        held_segment = granted[index]
        if held_segment == WILDCARD:
            return True
        if held_segment == ANY_SEGMENT:
            continue
        if held_segment != segment:
            return False

    return len(granted) == len(wanted)


def most_specific_first(flags: Iterable[Flag]) -> list[Flag]:
    """Sort flags by canonical length, shortest first; ties break alphabetically."""
    return sorted(flags, key=lambda f: (len(f.canonical), f.canonical))


def first_match(required: Flag, held: Sequence[Flag]) -> Flag | None:
    """First flag in ``held`` that grants ``required``, in the given order."""
    for candidate in held:
        if has(required, candidate):
            return candidate
    return None
