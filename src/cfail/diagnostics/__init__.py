from cfail.lines import split_lines

from .models import Message, MessageKind
from .normalize import (
    DiagnosticDecodeError,
    DiagnosticDecodeErrorDetail,
    decode_diagnostic,
    flatten_diagnostic,
    normalize_output,
)
from .raw import RawDiagnostic, RawDiagnosticCode, RawMacroExpansion, RawSpan

__all__ = [
    "DiagnosticDecodeError",
    "DiagnosticDecodeErrorDetail",
    "Message",
    "MessageKind",
    "RawDiagnostic",
    "RawDiagnosticCode",
    "RawMacroExpansion",
    "RawSpan",
    "decode_diagnostic",
    "flatten_diagnostic",
    "normalize_output",
    "split_lines",
]
