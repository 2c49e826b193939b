from __future__ import annotations

from collections.abc import Sequence

from cfail.diagnostics.models import Message
from cfail.expectations.models import Pattern

from .verdict import MatchPass, MatchVerdict, MatchViolation


def pattern_matches(pattern: Pattern, message: Message) -> bool:
    return (
        pattern.kind == message.kind
        and pattern.line == message.line
        and pattern.matcher.matches(message)
    )


def compare_messages(expected: Sequence[Pattern], actual: Sequence[Message]) -> MatchVerdict:
    """Reconcile expected patterns against the compiler's messages.

    Every pattern must match some message. Every error or warning must be
    matched by some pattern; notes, help, suggestions and untagged lines may
    be left out of the fixture.
    """
    actual_messages = tuple(actual)

    for pattern in expected:
        if not any(pattern_matches(pattern, message) for message in actual_messages):
            return MatchViolation(
                reason="missing_expected",
                actual=actual_messages,
                pattern=pattern,
            )

    for message in actual_messages:
        if not message.is_error_or_warning():
            continue
        if not any(pattern_matches(pattern, message) for pattern in expected):
            return MatchViolation(
                reason="unexpected_actual",
                actual=actual_messages,
                message=message,
            )

    return MatchPass()
