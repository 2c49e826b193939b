from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path

import typer

from cfail.expectations import (
    CodeMatcher,
    ExpectationParseError,
    Pattern,
    TestExpectation,
    load_expectation,
)
from cfail.runner import (
    ConfiguredInvocationProvider,
    FixtureDiscoveryError,
    HarnessConfig,
    HarnessConfigError,
    InvocationError,
    InvocationProvider,
    ProcessRunner,
    ProcessSpawnError,
    RunFailedError,
    SubprocessRunner,
    load_harness_config,
    run_fixtures,
)

app = typer.Typer(help="Compile-fail test harness")

EXIT_FIXTURES_FAILED = 1
EXIT_HARNESS_ERROR = 2
_LOG_FORMAT = "{asctime} - {name} - {levelname} - {message}"
_LOGGER_NAME = "cfail"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(logging.Formatter(_LOG_FORMAT, style="{"))


def _build_provider(config: HarnessConfig) -> InvocationProvider:
    return ConfiguredInvocationProvider(config.compiler)


def _build_runner() -> ProcessRunner:
    return SubprocessRunner()


def _configure_logging(level: str) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"unknown log level '{level}'")
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(numeric_level)
    if _stream_handler not in logger.handlers:
        logger.addHandler(_stream_handler)


@app.command()
def run(
    fixtures_dir: Path | None = typer.Argument(
        None,
        help="Directory containing compile-fail fixtures",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Harness YAML configuration file",
    ),
    extension: str | None = typer.Option(
        None,
        "--extension",
        help="Fixture file extension, e.g. .rs",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Buffer the per-fixture report and print it only on failure",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Harness log level"),
) -> None:
    """Compile every fixture and check its expected diagnostics."""
    _configure_logging(log_level)
    try:
        config = load_harness_config(config_path) if config_path is not None else HarnessConfig()
        config = config.with_overrides(
            fixtures_dir=fixtures_dir,
            extension=extension,
            quiet=True if quiet else None,
        )
        summary = run_fixtures(config, provider=_build_provider(config), runner=_build_runner())
    except RunFailedError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_FIXTURES_FAILED) from exc
    except (
        HarnessConfigError,
        FixtureDiscoveryError,
        InvocationError,
        ProcessSpawnError,
    ) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_HARNESS_ERROR) from exc

    if not config.quiet:
        return
    typer.echo(f"{summary.passed} compile-fail tests passed")


@app.command()
def check(
    fixture: Path,
    format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        help="Output format: text|json",
        show_default=True,
    ),
) -> None:
    """Parse one fixture and print its expected diagnostics."""
    try:
        expectation = load_expectation(fixture)
    except ExpectationParseError as exc:
        if format is OutputFormat.JSON:
            typer.echo(
                json.dumps(
                    {
                        "fixture": str(fixture),
                        "status": "fail",
                        "error": {
                            "code": exc.detail.code,
                            "message": exc.detail.message,
                            "line": exc.detail.line,
                        },
                    },
                    ensure_ascii=True,
                    separators=(",", ":"),
                )
            )
        else:
            typer.echo(f"error: {exc}")
        raise typer.Exit(code=EXIT_HARNESS_ERROR) from exc

    if format is OutputFormat.JSON:
        typer.echo(_build_check_json_output(expectation))
        return
    for pattern in expectation.patterns:
        typer.echo(f"PATTERN {pattern.render()}")


def _pattern_payload(pattern: Pattern) -> dict[str, object]:
    payload: dict[str, object] = {
        "line": pattern.line,
        "kind": None if pattern.kind is None else pattern.kind.value,
    }
    if isinstance(pattern.matcher, CodeMatcher):
        payload["code"] = pattern.matcher.code
    else:
        payload["text"] = pattern.matcher.text
    return payload


def _build_check_json_output(expectation: TestExpectation) -> str:
    payload: dict[str, object] = {
        "fixture": expectation.source,
        "status": "pass",
        "patterns": [_pattern_payload(pattern) for pattern in expectation.patterns],
    }
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


def main() -> None:
    app()
