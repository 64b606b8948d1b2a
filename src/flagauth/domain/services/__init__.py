"""Domain services."""

from flagauth.domain.services.flag_matcher import first_match, has, most_specific_first

__all__ = ["first_match", "has", "most_specific_first"]
