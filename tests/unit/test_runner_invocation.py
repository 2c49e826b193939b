from __future__ import annotations

from pathlib import Path

import pytest

from cfail.runner import (
    CompilerConfig,
    ConfiguredInvocationProvider,
    InvocationError,
    InvocationProvider,
    InvocationTemplate,
)

pytestmark = pytest.mark.unit


def test_default_compiler_template_builds_rustc_command() -> None:
    template = ConfiguredInvocationProvider(CompilerConfig()).obtain()

    assert isinstance(ConfiguredInvocationProvider(CompilerConfig()), InvocationProvider)
    assert template.build_command(Path("tests/compile-fail/a.rs")) == (
        "rustc",
        "--error-format",
        "json",
        "--crate-type",
        "lib",
        "--out-dir",
        ".",
        "tests/compile-fail/a.rs",
    )


def test_out_dir_replaces_value_after_flag() -> None:
    template = ConfiguredInvocationProvider(CompilerConfig()).obtain()
    with_out_dir = template.with_out_dir(Path("/tmp/out"))

    command = with_out_dir.build_command(Path("a.rs"))

    assert command[command.index("--out-dir") + 1] == "/tmp/out"
    assert "." not in command
    assert template.out_dir is None


def test_out_dir_flag_is_appended_when_absent() -> None:
    template = InvocationTemplate(
        program="cc",
        args=("-fsyntax-only", "{source}"),
        source_index=1,
        out_dir_flag="-o",
    ).with_out_dir(Path("/tmp/out"))

    assert template.build_command(Path("a.c")) == ("cc", "-fsyntax-only", "a.c", "-o", "/tmp/out")


def test_missing_source_placeholder_is_rejected() -> None:
    provider = ConfiguredInvocationProvider(CompilerConfig(args=("--error-format", "json")))
    with pytest.raises(InvocationError, match="couldn't find"):
        provider.obtain()


def test_multiple_source_placeholders_are_rejected() -> None:
    provider = ConfiguredInvocationProvider(CompilerConfig(args=("{source}", "-x", "{source}")))
    with pytest.raises(InvocationError, match="argument #1, argument #3"):
        provider.obtain()


def test_out_dir_flag_as_last_argument_is_rejected() -> None:
    provider = ConfiguredInvocationProvider(CompilerConfig(args=("{source}", "--out-dir")))
    with pytest.raises(InvocationError, match="last argument"):
        provider.obtain()


def test_out_dir_flag_followed_by_source_is_rejected() -> None:
    provider = ConfiguredInvocationProvider(
        CompilerConfig(args=("--out-dir", "{source}", "--crate-type", "lib"))
    )
    with pytest.raises(InvocationError, match="directly followed by the source argument"):
        provider.obtain()


def test_out_dir_flag_rules_apply_to_templates_built_directly() -> None:
    with pytest.raises(InvocationError):
        InvocationTemplate(
            program="rustc",
            args=("--out-dir", "{source}", "--crate-type", "lib"),
            source_index=1,
            out_dir_flag="--out-dir",
        )


def test_out_dir_flag_check_ignores_configs_without_flag() -> None:
    template = ConfiguredInvocationProvider(
        CompilerConfig(args=("{source}", "--out-dir"), out_dir_flag=None)
    ).obtain()

    assert template.build_command(Path("a.rs")) == ("rustc", "a.rs", "--out-dir")


def test_template_validates_source_index() -> None:
    with pytest.raises(InvocationError):
        InvocationTemplate(program="rustc", args=("a",), source_index=1)


def test_out_dir_without_flag_is_rejected() -> None:
    template = InvocationTemplate(program="rustc", args=("{source}",), source_index=0)
    with pytest.raises(InvocationError):
        template.with_out_dir(Path("/tmp/out"))
