from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from cfail.diagnostics import DiagnosticDecodeError, normalize_output
from cfail.expectations import ExpectationErrorCode, ExpectationParseError, load_expectation
from cfail.matching import MatchViolation, compare_messages

from .config import HarnessConfig
from .discovery import discover_fixtures
from .invocation import InvocationProvider, InvocationTemplate
from .process import ProcessRunner
from .report import ConsoleReporter, Reporter
from .status import FixtureFailure, RunStatus, RunSummary

logger = logging.getLogger(__name__)

_OUT_DIR_PREFIX = "cfail-"


def run_fixture(
    template: InvocationTemplate,
    runner: ProcessRunner,
    path: Path,
) -> FixtureFailure | None:
    """Compile one fixture and check its diagnostics; ``None`` means it passed.

    Collaborator errors (spawn failures) propagate; everything attributable
    to the fixture itself comes back as a ``FixtureFailure``.
    """
    try:
        expectation = load_expectation(path)
    except ExpectationParseError as exc:
        unreadable = exc.detail.code == ExpectationErrorCode.E_FIXTURE_READ_FAILED
        reason = "read" if unreadable else "parse"
        return FixtureFailure(reason=reason, description=str(exc))

    command = template.build_command(path)
    output = runner.run(command)
    if output.succeeded:
        return FixtureFailure(
            reason="unexpected_success",
            description=(
                f"compilation of compile-fail test {path} succeeded but was expected to fail"
            ),
        )

    try:
        stderr = output.stderr.decode("utf-8")
    except UnicodeDecodeError as exc:
        return FixtureFailure(
            reason="non_utf8_output",
            description=f"compiler output for {path} is not valid UTF-8: {exc}",
        )

    try:
        messages = normalize_output(str(path), stderr)
    except DiagnosticDecodeError as exc:
        return FixtureFailure(reason="decode", description=str(exc))
    logger.info("%s: %d compiler messages", path, len(messages))

    verdict = compare_messages(expectation.patterns, messages)
    if isinstance(verdict, MatchViolation):
        return FixtureFailure(reason="mismatch", description=verdict.describe())
    return None


def run_fixtures(
    config: HarnessConfig,
    *,
    provider: InvocationProvider,
    runner: ProcessRunner,
    reporter: Reporter | None = None,
) -> RunSummary:
    """Run every fixture under ``config.fixtures_dir``.

    Raises ``RunFailedError`` when any fixture fails. Discovery, invocation
    and spawn errors abort the run before or during execution.
    """
    fixtures = discover_fixtures(config.fixtures_dir, config.extension)
    template = provider.obtain()
    active_reporter = reporter if reporter is not None else ConsoleReporter(quiet=config.quiet)

    with tempfile.TemporaryDirectory(prefix=_OUT_DIR_PREFIX) as out_dir:
        logger.info("temporary output directory at %s", out_dir)
        if template.out_dir_flag is not None:
            template = template.with_out_dir(Path(out_dir))

        with RunStatus(len(fixtures), active_reporter) as status:
            status.print_header()
            for path in fixtures:
                status.record(path.name, run_fixture(template, runner, path))
            return status.finalize()
