from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, PositiveInt

_KIND_ALIASES: dict[str, str] = {
    "warn": "warning",
}


class MessageKind(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"
    SUGGESTION = "suggestion"

    @classmethod
    def parse(cls, token: str) -> MessageKind | None:
        normalized = token.lower()
        normalized = _KIND_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


class Message(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: MessageKind | None
    code: str | None = None
    text: str
    line: PositiveInt

    def is_error_or_warning(self) -> bool:
        return self.kind is MessageKind.ERROR or self.kind is MessageKind.WARNING

    def render(self) -> str:
        kind = "-" if self.kind is None else self.kind.value
        code = "" if self.code is None else f"[{self.code}]"
        return f"line {self.line}: {kind}{code}: {self.text}"
