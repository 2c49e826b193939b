from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import PurePath

from pydantic import ValidationError

from cfail.lines import split_lines

from .models import Message, MessageKind
from .raw import RawDiagnostic, RawMacroExpansion, RawSpan

logger = logging.getLogger(__name__)

_RECORD_OPENING = "{"


@dataclass(frozen=True, slots=True)
class DiagnosticDecodeErrorDetail:
    code: str
    message: str
    output_line: int
    raw_text: str


class DiagnosticDecodeError(ValueError):
    def __init__(self, detail: DiagnosticDecodeErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


def decode_diagnostic(line: str, *, output_line: int = 1) -> RawDiagnostic:
    try:
        return RawDiagnostic.model_validate_json(line)
    except ValidationError as exc:
        raise DiagnosticDecodeError(
            DiagnosticDecodeErrorDetail(
                code="E_DIAG_RECORD_INVALID",
                message=f"undecodable diagnostic record on output line {output_line}: {exc}",
                output_line=output_line,
                raw_text=line,
            )
        ) from exc


def normalize_output(file_name: str, output: str) -> list[Message]:
    """Flatten every structured record in ``output`` that concerns ``file_name``.

    Compilers interleave incidental text with their JSON records, so lines
    that do not open a record are skipped. A line that opens a record but
    does not decode fails the whole pass.
    """
    messages: list[Message] = []
    for index, line in enumerate(split_lines(output), start=1):
        if not line.startswith(_RECORD_OPENING):
            if line.strip():
                logger.debug("skipping non-record output line %d: %s", index, line)
            continue
        diagnostic = decode_diagnostic(line, output_line=index)
        messages.extend(flatten_diagnostic(diagnostic, file_name))
    logger.debug("normalized %d messages for %s", len(messages), file_name)
    return messages


def flatten_diagnostic(
    diagnostic: RawDiagnostic,
    file_name: str,
    default_spans: Sequence[RawSpan] = (),
) -> list[Message]:
    """Turn one diagnostic tree into positioned messages for ``file_name``.

    ``default_spans`` are the primary spans selected by the parent; children
    without a primary span of their own inherit them.
    """
    target = PurePath(file_name)
    spans_in_file = [span for span in diagnostic.spans if _positioned_in(span, target)]

    # Toolchains occasionally repeat the primary span; the first one wins.
    primary_spans: tuple[RawSpan, ...] = tuple(
        span for span in spans_in_file if span.is_primary
    )[:1]
    if not primary_spans:
        primary_spans = tuple(default_spans)

    code = diagnostic.code.code if diagnostic.code is not None else None
    messages: list[Message] = []

    message_lines = split_lines(diagnostic.message)
    if message_lines:
        kind = MessageKind.parse(diagnostic.level)
        for span in primary_spans:
            messages.append(
                Message(kind=kind, code=code, text=message_lines[0], line=span.line_start)
            )
    for next_line in message_lines[1:]:
        for span in primary_spans:
            messages.append(Message(kind=None, code=code, text=next_line, line=span.line_start))

    for span in primary_spans:
        if span.suggested_replacement is None:
            continue
        for offset, replacement_line in enumerate(split_lines(span.suggested_replacement)):
            messages.append(
                Message(
                    kind=MessageKind.SUGGESTION,
                    code=code,
                    text=replacement_line,
                    line=span.line_start + offset,
                )
            )

    for span in primary_spans:
        if span.expansion is not None:
            messages.extend(_backtrace_notes(span.expansion, target, code))

    for span in spans_in_file:
        if span.label is not None:
            messages.append(
                Message(kind=MessageKind.NOTE, code=code, text=span.label, line=span.line_start)
            )

    for child in diagnostic.children:
        messages.extend(flatten_diagnostic(child, file_name, primary_spans))

    return messages


def _backtrace_notes(
    expansion: RawMacroExpansion,
    target: PurePath,
    code: str | None,
) -> list[Message]:
    notes: list[Message] = []
    current: RawMacroExpansion | None = expansion
    while current is not None:
        if _positioned_in(current.span, target):
            notes.append(
                Message(
                    kind=MessageKind.NOTE,
                    code=code,
                    text=f"in this expansion of {current.macro_decl_name}",
                    line=current.span.line_start,
                )
            )
        current = current.span.expansion
    return notes


def _positioned_in(span: RawSpan, target: PurePath) -> bool:
    # Zero-line spans carry no source position and cannot become messages.
    return span.line_start >= 1 and PurePath(span.file_name) == target
