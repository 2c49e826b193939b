"""Extraction of expected diagnostics from ``//~`` annotations.

Supported forms, one per physical line::

    //~ KIND: text        diagnostic on this line, message contains ``text``
    //~^^ KIND: text      diagnostic two lines above
    //~ KIND[CODE]        diagnostic with the given code
    //~| KIND: text       same target line as the pattern on the previous line

``KIND`` is one of error, warning (or warn), note, help, suggestion, in any
letter case.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Final

from cfail.diagnostics.models import MessageKind
from cfail.lines import split_lines

from .errors import ExpectationErrorCode, ExpectationParseError, build_expectation_error
from .models import CodeMatcher, Matcher, Pattern, TestExpectation, TextMatcher

logger = logging.getLogger(__name__)

_MARKER: Final[str] = "//~"
_CONTINUATION: Final[str] = "|"
_CARET: Final[str] = "^"
_KIND_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")


def parse_expectations(text: str, *, source: str = "<fixture>") -> TestExpectation:
    parser = _ExpectationParser(source)
    for lineno, line in enumerate(split_lines(text), start=1):
        parser.feed(lineno, line)
    if not parser.patterns:
        raise build_expectation_error(
            ExpectationErrorCode.E_FIXTURE_NO_PATTERNS,
            f"no error patterns found in {source}",
            source=source,
        )
    return TestExpectation(source=source, patterns=tuple(parser.patterns))


def load_expectation(path: str | Path) -> TestExpectation:
    target = Path(path)
    try:
        content = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise build_expectation_error(
            ExpectationErrorCode.E_FIXTURE_READ_FAILED,
            f"unable to read fixture '{target}': {exc}",
            source=str(target),
        ) from exc
    return parse_expectations(content, source=str(target))


class _ExpectationParser:
    def __init__(self, source: str) -> None:
        self.source = source
        self.patterns: list[Pattern] = []
        # 0 until the first pattern has been parsed.
        self._last_pattern_line = 0

    def feed(self, lineno: int, line: str) -> None:
        start = line.find(_MARKER)
        if start < 0:
            return

        rest = line[start + len(_MARKER) :]
        logger.debug("%s:%d: found pattern marker: %s", self.source, lineno, line.strip())
        if rest.startswith(_CONTINUATION):
            target_line = self._continuation_target(lineno)
            rest = rest[len(_CONTINUATION) :]
        else:
            stripped = rest.lstrip(_CARET)
            offset = len(rest) - len(stripped)
            target_line = lineno - offset
            if target_line < 1:
                raise self._error(
                    ExpectationErrorCode.E_PATTERN_OFFSET_INVALID,
                    "invalid line offset before line 1",
                    lineno,
                )
            rest = stripped

        kind, matcher = self._parse_body(lineno, rest)
        pattern = Pattern(kind=kind, matcher=matcher, line=target_line)
        logger.debug("%s: parsed message pattern: %s", self.source, pattern.render())
        self.patterns.append(pattern)
        self._last_pattern_line = lineno

    def _continuation_target(self, lineno: int) -> int:
        if not self.patterns or self._last_pattern_line != lineno - 1:
            raise self._error(
                ExpectationErrorCode.E_PATTERN_CONTINUATION_ORPHANED,
                "a `//~|` pattern must be directly preceded by another pattern",
                lineno,
            )
        return self.patterns[-1].line

    def _parse_body(self, lineno: int, rest: str) -> tuple[MessageKind, Matcher]:
        body = rest.lstrip()
        if body == rest:
            raise self._error(
                ExpectationErrorCode.E_PATTERN_MALFORMED,
                "expected whitespace between the pattern marker and the message kind",
                lineno,
                remaining=rest,
            )

        kind_match = _KIND_PATTERN.match(body)
        if kind_match is None:
            raise self._error(
                ExpectationErrorCode.E_PATTERN_MALFORMED,
                f"expected a message kind, found '{body}'",
                lineno,
                remaining=body,
            )
        token = kind_match.group(0)
        kind = MessageKind.parse(token)
        if kind is None:
            raise self._error(
                ExpectationErrorCode.E_PATTERN_KIND_INVALID,
                f"invalid message type '{token}'",
                lineno,
                remaining=body,
            )

        after_kind = body[kind_match.end() :]
        if after_kind.startswith(":"):
            text = after_kind[1:].strip()
            if not text:
                raise self._error(ExpectationErrorCode.E_PATTERN_EMPTY, "empty pattern", lineno)
            return kind, TextMatcher(text)

        if after_kind.startswith("["):
            close = after_kind.find("]")
            if close < 0:
                raise self._error(
                    ExpectationErrorCode.E_PATTERN_MALFORMED,
                    f"unterminated error code in '{after_kind}'",
                    lineno,
                    remaining=after_kind,
                )
            code = after_kind[1:close]
            if not code:
                raise self._error(ExpectationErrorCode.E_PATTERN_EMPTY, "empty pattern", lineno)
            if code != code.strip():
                raise self._error(
                    ExpectationErrorCode.E_PATTERN_MALFORMED,
                    f"error code must not be padded with whitespace: '[{code}]'",
                    lineno,
                    remaining=after_kind,
                )
            trailing = after_kind[close + 1 :]
            if trailing.strip():
                raise self._error(
                    ExpectationErrorCode.E_PATTERN_TRAILING_TEXT,
                    f"unexpected text after pattern: '{trailing.strip()}'",
                    lineno,
                    remaining=trailing,
                )
            return kind, CodeMatcher(code)

        raise self._error(
            ExpectationErrorCode.E_PATTERN_TRAILING_TEXT,
            f"expected ':' or '[' after message kind, found '{after_kind}'",
            lineno,
            remaining=after_kind,
        )

    def _error(
        self,
        code: ExpectationErrorCode,
        message: str,
        lineno: int,
        *,
        remaining: str | None = None,
    ) -> ExpectationParseError:
        return build_expectation_error(
            code,
            message,
            source=self.source,
            line=lineno,
            remaining=remaining,
        )
