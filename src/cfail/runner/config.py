from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

SOURCE_PLACEHOLDER: Final[str] = "{source}"
DEFAULT_FIXTURES_DIR: Final[Path] = Path("tests/compile-fail")
DEFAULT_EXTENSION: Final[str] = ".rs"
DEFAULT_OUT_DIR_FLAG: Final[str] = "--out-dir"
DEFAULT_COMPILER_PROGRAM: Final[str] = "rustc"
DEFAULT_COMPILER_ARGS: Final[tuple[str, ...]] = (
    "--error-format",
    "json",
    "--crate-type",
    "lib",
    DEFAULT_OUT_DIR_FLAG,
    ".",
    SOURCE_PLACEHOLDER,
)


class HarnessConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    program: str = DEFAULT_COMPILER_PROGRAM
    args: tuple[str, ...] = DEFAULT_COMPILER_ARGS
    out_dir_flag: str | None = DEFAULT_OUT_DIR_FLAG

    def __post_init__(self) -> None:
        if not self.program:
            raise HarnessConfigError("E_CONFIG_INVALID", "compiler program must be non-empty")
        object.__setattr__(self, "args", tuple(self.args))
        if self.out_dir_flag is not None and not self.out_dir_flag:
            raise HarnessConfigError(
                "E_CONFIG_INVALID", "compiler out_dir_flag must be non-empty when provided"
            )


@dataclass(frozen=True, slots=True)
class HarnessConfig:
    fixtures_dir: Path = DEFAULT_FIXTURES_DIR
    extension: str = DEFAULT_EXTENSION
    quiet: bool = False
    compiler: CompilerConfig = field(default_factory=CompilerConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fixtures_dir", Path(self.fixtures_dir))
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise HarnessConfigError(
                "E_CONFIG_INVALID",
                f"fixture extension must look like '.rs', got '{self.extension}'",
            )

    def with_overrides(
        self,
        *,
        fixtures_dir: Path | None = None,
        extension: str | None = None,
        quiet: bool | None = None,
    ) -> HarnessConfig:
        return replace(
            self,
            fixtures_dir=self.fixtures_dir if fixtures_dir is None else fixtures_dir,
            extension=self.extension if extension is None else extension,
            quiet=self.quiet if quiet is None else quiet,
        )


def load_harness_config(path: str | Path) -> HarnessConfig:
    """Read a harness YAML file; relative ``fixtures_dir`` resolves against it.

    Example::

        fixtures_dir: tests/compile-fail
        extension: .rs
        quiet: false
        compiler:
          program: rustc
          args: [--error-format, json, --crate-type, lib, --out-dir, ., "{source}"]
          out_dir_flag: --out-dir
    """
    target = Path(path)
    raw = _read_yaml_file(target)
    defaults = HarnessConfig()

    fixtures_dir = defaults.fixtures_dir
    if "fixtures_dir" in raw:
        fixtures_dir = Path(_require_string(raw, "fixtures_dir"))
        if not fixtures_dir.is_absolute():
            fixtures_dir = target.parent / fixtures_dir

    compiler = defaults.compiler
    if "compiler" in raw:
        compiler = _parse_compiler_block(_require_mapping(raw, "compiler"))

    return HarnessConfig(
        fixtures_dir=fixtures_dir,
        extension=_require_string(raw, "extension") if "extension" in raw else defaults.extension,
        quiet=_require_bool(raw, "quiet") if "quiet" in raw else defaults.quiet,
        compiler=compiler,
    )


def _parse_compiler_block(block: dict[str, object]) -> CompilerConfig:
    defaults = CompilerConfig()
    out_dir_flag: str | None = defaults.out_dir_flag
    if "out_dir_flag" in block:
        out_dir_flag = (
            None if block["out_dir_flag"] is None else _require_string(block, "out_dir_flag")
        )
    return CompilerConfig(
        program=_require_string(block, "program") if "program" in block else defaults.program,
        args=_require_string_tuple(block, "args") if "args" in block else defaults.args,
        out_dir_flag=out_dir_flag,
    )


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HarnessConfigError(
            "E_CONFIG_READ_FAILED",
            f"unable to read harness config '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise HarnessConfigError(
            "E_CONFIG_PARSE_FAILED",
            f"invalid harness config yaml in '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise HarnessConfigError("E_CONFIG_INVALID", "harness config root must be a mapping")
    return cast(dict[str, object], payload)


def _require_mapping(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    raise HarnessConfigError("E_CONFIG_INVALID", f"missing or invalid mapping for key '{key}'")


def _require_string(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    raise HarnessConfigError("E_CONFIG_INVALID", f"missing or invalid string for key '{key}'")


def _require_bool(data: dict[str, object], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    raise HarnessConfigError("E_CONFIG_INVALID", f"missing or invalid bool for key '{key}'")


def _require_string_tuple(data: dict[str, object], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        raise HarnessConfigError("E_CONFIG_INVALID", f"missing or invalid list for key '{key}'")
    out: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise HarnessConfigError(
                "E_CONFIG_INVALID", f"invalid string at index {index} for key '{key}'"
            )
        out.append(item)
    return tuple(out)
