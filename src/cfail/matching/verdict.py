from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from cfail.diagnostics.models import Message
from cfail.expectations.models import Pattern

type ViolationReason = Literal["missing_expected", "unexpected_actual"]


@dataclass(frozen=True, slots=True)
class MatchPass:
    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class MatchViolation:
    reason: ViolationReason
    actual: tuple[Message, ...]
    pattern: Pattern | None = None
    message: Message | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "actual", tuple(self.actual))
        has_pattern = self.pattern is not None
        has_message = self.message is not None
        if self.reason == "missing_expected" and (not has_pattern or has_message):
            raise ValueError("missing_expected violation requires exactly a pattern")
        if self.reason == "unexpected_actual" and (not has_message or has_pattern):
            raise ValueError("unexpected_actual violation requires exactly a message")

    def __bool__(self) -> bool:
        return False

    def summary(self) -> str:
        if self.pattern is not None:
            return f"message not found in compiler output: {self.pattern.render()}"
        assert self.message is not None
        return (
            "unexpected error or warning in compiler output (all errors and warnings "
            f"must be matched by a pattern in the test): {self.message.render()}"
        )

    def describe(self) -> str:
        lines = [self.summary(), "", "compiler output:"]
        if self.actual:
            lines.extend(f"    {message.render()}" for message in self.actual)
        else:
            lines.append("    <no messages>")
        return "\n".join(lines)


type MatchVerdict = MatchPass | MatchViolation
