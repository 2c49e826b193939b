from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Subset of the compiler's JSON diagnostic schema. Unknown keys are ignored
# because toolchains keep adding fields (byte offsets, span text, ...).


class RawDiagnosticCode(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    code: str
    explanation: str | None = None


class RawSpan(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    file_name: str
    # Dummy spans in other files may report zero positions.
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    is_primary: bool
    label: str | None = None
    suggested_replacement: str | None = None
    expansion: RawMacroExpansion | None = None


class RawMacroExpansion(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    span: RawSpan
    macro_decl_name: str


class RawDiagnostic(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str
    code: RawDiagnosticCode | None = None
    level: str
    spans: tuple[RawSpan, ...]
    children: tuple[RawDiagnostic, ...]
    rendered: str | None = None


RawSpan.model_rebuild()
RawMacroExpansion.model_rebuild()
RawDiagnostic.model_rebuild()
