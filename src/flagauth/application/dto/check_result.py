"""Authorization check DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from flagauth.domain.value_objects import Flag


@dataclass(frozen=True)
class CooldownStatus:
    """Throttle state of one held flag for one subject."""

    on_cooldown: bool
    cooldown_expires: datetime | None = None


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one required flag.

    ``matched_by`` is the held flag that satisfied the requirement. It stays
    in-process and is never serialized to clients.
    """

    flag: Flag
    passed: bool
    on_cooldown: bool = False
    cooldown_expires: datetime | None = None
    matched_by: Flag | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "flag": str(self.flag),
            "passed": self.passed,
            "on_cooldown": self.on_cooldown,
            "cooldown_expires": (
                self.cooldown_expires.isoformat() if self.cooldown_expires else None
            ),
        }


@dataclass(frozen=True)
class CheckSummary:
    """Aggregate of a batch of checks."""

    checks: list[CheckResult]

    @property
    def all_passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def on_cooldown(self) -> bool:
        return any(c.passed and c.on_cooldown for c in self.checks)

    def to_dict(self) -> dict:
        return {
            "all_passed": self.all_passed,
            "on_cooldown": self.on_cooldown,
            "checks": [c.to_dict() for c in self.checks],
        }
