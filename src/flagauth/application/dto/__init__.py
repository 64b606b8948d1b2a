"""Application DTOs."""

from flagauth.application.dto.check_result import CheckResult, CheckSummary, CooldownStatus
from flagauth.application.dto.request_context import RequestContext

__all__ = ["CheckResult", "CheckSummary", "CooldownStatus", "RequestContext"]
