from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import SOURCE_PLACEHOLDER, CompilerConfig

type Command = tuple[str, ...]


class InvocationError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class InvocationTemplate:
    """Compiler command line with one slot for the fixture to compile."""

    program: str
    args: tuple[str, ...]
    source_index: int
    out_dir_flag: str | None = None
    out_dir: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        if not self.program:
            raise InvocationError("compiler program must be non-empty")
        if not 0 <= self.source_index < len(self.args):
            raise InvocationError(
                f"source argument index {self.source_index} is out of range "
                f"for {len(self.args)} arguments"
            )
        if self.out_dir is not None and self.out_dir_flag is None:
            raise InvocationError("an output directory requires an out_dir_flag")
        if self.out_dir_flag is not None:
            self._check_out_dir_flag_positions(self.out_dir_flag)

    def _check_out_dir_flag_positions(self, flag: str) -> None:
        # The argument after the flag is replaced, so it must exist and must
        # not be the source slot.
        last = len(self.args) - 1
        for index, arg in enumerate(self.args):
            if arg != flag or index == self.source_index:
                continue
            if index == last:
                raise InvocationError(
                    f"the {flag} argument is the last argument of the compiler command line "
                    "and has no value"
                )
            if index + 1 == self.source_index:
                raise InvocationError(
                    f"the {flag} argument is directly followed by the source argument "
                    f"(argument #{index + 1})"
                )

    def with_out_dir(self, out_dir: Path) -> InvocationTemplate:
        return replace(self, out_dir=Path(out_dir))

    def build_command(self, source: Path) -> Command:
        command: list[str] = [self.program]
        replace_next = False
        saw_out_dir_flag = False
        for index, arg in enumerate(self.args):
            if index == self.source_index:
                command.append(str(source))
            elif replace_next:
                assert self.out_dir is not None
                command.append(str(self.out_dir))
                replace_next = False
            else:
                if self.out_dir is not None and arg == self.out_dir_flag:
                    replace_next = True
                    saw_out_dir_flag = True
                command.append(arg)
        if self.out_dir is not None and not saw_out_dir_flag:
            assert self.out_dir_flag is not None
            command.extend((self.out_dir_flag, str(self.out_dir)))
        return tuple(command)


@runtime_checkable
class InvocationProvider(Protocol):
    def obtain(self) -> InvocationTemplate: ...


@dataclass(frozen=True, slots=True)
class ConfiguredInvocationProvider:
    compiler: CompilerConfig

    def obtain(self) -> InvocationTemplate:
        matches = [
            index for index, arg in enumerate(self.compiler.args) if arg == SOURCE_PLACEHOLDER
        ]
        if not matches:
            raise InvocationError(
                f"couldn't find the {SOURCE_PLACEHOLDER} argument in the compiler command line"
            )
        if len(matches) > 1:
            positions = ", ".join(f"argument #{index + 1}" for index in matches)
            raise InvocationError(
                f"found multiple {SOURCE_PLACEHOLDER} arguments in the compiler command line: "
                f"{positions}"
            )
        return InvocationTemplate(
            program=self.compiler.program,
            args=self.compiler.args,
            source_index=matches[0],
            out_dir_flag=self.compiler.out_dir_flag,
        )
