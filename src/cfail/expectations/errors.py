from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ExpectationErrorCode(StrEnum):
    E_PATTERN_OFFSET_INVALID = "E_PATTERN_OFFSET_INVALID"
    E_PATTERN_CONTINUATION_ORPHANED = "E_PATTERN_CONTINUATION_ORPHANED"
    E_PATTERN_KIND_INVALID = "E_PATTERN_KIND_INVALID"
    E_PATTERN_EMPTY = "E_PATTERN_EMPTY"
    E_PATTERN_TRAILING_TEXT = "E_PATTERN_TRAILING_TEXT"
    E_PATTERN_MALFORMED = "E_PATTERN_MALFORMED"
    E_FIXTURE_NO_PATTERNS = "E_FIXTURE_NO_PATTERNS"
    E_FIXTURE_READ_FAILED = "E_FIXTURE_READ_FAILED"


@dataclass(frozen=True, slots=True)
class ExpectationParseErrorDetail:
    code: str
    message: str
    source: str
    line: int | None = None
    remaining: str | None = None


class ExpectationParseError(ValueError):
    def __init__(self, detail: ExpectationParseErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


def build_expectation_error(
    code: ExpectationErrorCode,
    message: str,
    *,
    source: str,
    line: int | None = None,
    remaining: str | None = None,
) -> ExpectationParseError:
    located = message if line is None else f"in {source} line {line}: {message}"
    return ExpectationParseError(
        ExpectationParseErrorDetail(
            code=code.value,
            message=located,
            source=source,
            line=line,
            remaining=remaining,
        )
    )
