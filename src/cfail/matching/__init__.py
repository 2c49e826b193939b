from .compare import compare_messages, pattern_matches
from .verdict import MatchPass, MatchVerdict, MatchViolation, ViolationReason

__all__ = [
    "MatchPass",
    "MatchVerdict",
    "MatchViolation",
    "ViolationReason",
    "compare_messages",
    "pattern_matches",
]
