"""Permission entity - catalog entry describing a flag."""

from dataclasses import dataclass
from datetime import timedelta

from flagauth.domain.exceptions import ValidationError
from flagauth.domain.value_objects import Flag


@dataclass
class Permission:
    """Catalog entry for a flag, optionally declaring a usage limit.

    A flag is throttled only when both ``usage_limit`` and
    ``cooldown_seconds`` are set: at most ``usage_limit`` uses per rolling
    ``cooldown_seconds`` window.
    """

    flag: Flag
    name: str
    description: str = ""
    creator: str | None = None
    usage_limit: int | None = None
    cooldown_seconds: int | None = None

    def __post_init__(self) -> None:
        if (self.usage_limit is None) != (self.cooldown_seconds is None):
            raise ValidationError("usage_limit and cooldown_seconds must be set together")
        if self.usage_limit is not None and self.usage_limit < 1:
            raise ValidationError("usage_limit must be at least 1")
        if self.cooldown_seconds is not None and self.cooldown_seconds < 1:
            raise ValidationError("cooldown_seconds must be at least 1")

    @property
    def key(self) -> str:
        return self.flag.key

    @property
    def path(self) -> str:
        return self.flag.path

    @property
    def has_limit(self) -> bool:
        return self.usage_limit is not None

    @property
    def window(self) -> timedelta | None:
        if self.cooldown_seconds is None:
            return None
        return timedelta(seconds=self.cooldown_seconds)
