from __future__ import annotations

from dataclasses import dataclass

from cfail.diagnostics.models import Message, MessageKind


@dataclass(frozen=True, slots=True)
class CodeMatcher:
    code: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code matcher must be non-empty")

    def matches(self, message: Message) -> bool:
        return message.code == self.code

    def render(self) -> str:
        return f"[{self.code}]"


@dataclass(frozen=True, slots=True)
class TextMatcher:
    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("text matcher must be non-empty")

    def matches(self, message: Message) -> bool:
        return self.text in message.text

    def render(self) -> str:
        return f": {self.text}"


type Matcher = CodeMatcher | TextMatcher


@dataclass(frozen=True, slots=True)
class Pattern:
    kind: MessageKind | None
    matcher: Matcher
    line: int

    def __post_init__(self) -> None:
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise ValueError("pattern line must be an integer")
        if self.line < 1:
            raise ValueError(f"pattern line must be >= 1, got {self.line}")
        if not isinstance(self.matcher, CodeMatcher | TextMatcher):
            raise ValueError("pattern matcher must be a CodeMatcher or TextMatcher")

    def render(self) -> str:
        kind = "-" if self.kind is None else self.kind.value
        return f"line {self.line}: {kind}{self.matcher.render()}"


@dataclass(frozen=True, slots=True)
class TestExpectation:
    source: str
    patterns: tuple[Pattern, ...]

    __test__ = False

    def __post_init__(self) -> None:
        patterns = tuple(self.patterns)
        if not patterns:
            raise ValueError(f"no error patterns found in {self.source}")
        object.__setattr__(self, "patterns", patterns)
