"""Conversion between text[] columns and flag lists."""

import logging
from collections.abc import Iterable

from flagauth.domain.exceptions import InvalidFlagFormat
from flagauth.domain.value_objects import Flag

logger = logging.getLogger(__name__)


def load_flags(values: Iterable[str] | None, owner: str) -> list[Flag]:
    """Parse stored flag strings, dropping (and logging) malformed ones."""
    flags: dict[Flag, None] = {}
    for value in values or ():
        try:
            flags[Flag.validate(value)] = None
        except InvalidFlagFormat:
            logger.warning("Ignoring malformed stored flag %r on %s", value, owner)
    return list(flags)


def dump_flags(flags: Iterable[Flag]) -> list[str]:
    return [f.canonical for f in flags]
