from __future__ import annotations

import gc

import pytest

from cfail.runner import (
    AbandonedRunError,
    AbandonedRunWarning,
    ConsoleReporter,
    FixtureFailure,
    RunFailedError,
    RunInvariantError,
    RunStatus,
)

pytestmark = pytest.mark.unit

_MISMATCH = FixtureFailure(reason="mismatch", description="message not found")


def test_all_passing_run_finalizes_to_summary() -> None:
    reporter = ConsoleReporter(quiet=True)
    with RunStatus(2, reporter) as status:
        status.print_header()
        status.record("a.rs", None)
        status.record("b.rs", None)
        summary = status.finalize()

    assert summary.total == 2
    assert summary.passed == 2
    assert summary.failures == ()
    assert summary.success
    assert reporter.buffered_text() == (
        "running 2 compile-fail tests\n"
        "test a.rs ... ok\n"
        "test b.rs ... ok\n"
        "test result: ok. 2 passed; 0 failed\n\n"
    )


def test_failures_raise_with_buffered_report_in_quiet_mode() -> None:
    reporter = ConsoleReporter(quiet=True)
    status = RunStatus(2, reporter)
    status.print_header()
    status.record("a.rs", None)
    status.record("b.rs", _MISMATCH)

    with pytest.raises(RunFailedError) as exc_info:
        status.finalize()

    error = exc_info.value
    assert str(error).startswith("1 compile-fail tests failed\n\n")
    assert "test b.rs ... FAILED" in str(error)
    assert "---- test b.rs ----\nmessage not found\n" in str(error)
    assert error.summary.passed == 1
    assert [result.name for result in error.summary.failures] == ["b.rs"]


def test_live_mode_failure_message_has_no_report(capsys: pytest.CaptureFixture[str]) -> None:
    status = RunStatus(1, ConsoleReporter(quiet=False))
    status.record("a.rs", _MISMATCH)

    with pytest.raises(RunFailedError) as exc_info:
        status.finalize()

    assert str(exc_info.value) == "1 compile-fail tests failed"
    assert exc_info.value.report is None
    captured = capsys.readouterr()
    assert "test a.rs ... " in captured.out
    assert "FAILED" in captured.out


def test_zero_fixtures_is_not_success() -> None:
    status = RunStatus(0, ConsoleReporter(quiet=True))
    with pytest.raises(RunFailedError, match="no compile-fail tests were run"):
        status.finalize()


def test_duplicate_result_is_invariant_violation() -> None:
    status = RunStatus(2, ConsoleReporter(quiet=True))
    status.record("a.rs", None)

    with pytest.raises(RunInvariantError, match="duplicate result"):
        status.record("a.rs", None)

    status.record("b.rs", None)
    status.finalize()


def test_finalize_is_single_use() -> None:
    status = RunStatus(1, ConsoleReporter(quiet=True))
    status.record("a.rs", None)
    status.finalize()

    with pytest.raises(RunInvariantError, match="already been finalized"):
        status.finalize()
    with pytest.raises(RunInvariantError):
        status.record("b.rs", None)


def test_finalize_with_missing_results_is_invariant_violation() -> None:
    status = RunStatus(2, ConsoleReporter(quiet=True))
    status.record("a.rs", None)

    with pytest.raises(RunInvariantError, match="1 of 2"):
        status.finalize()

    status.record("b.rs", None)
    status.finalize()


def test_leaving_block_without_finalize_raises() -> None:
    with pytest.raises(AbandonedRunError):
        with RunStatus(1, ConsoleReporter(quiet=True)) as status:
            status.record("a.rs", None)


def test_exception_inside_block_is_not_masked() -> None:
    with pytest.raises(KeyError):
        with RunStatus(1, ConsoleReporter(quiet=True)):
            raise KeyError("collaborator failure")


def test_discarding_unfinalized_status_warns() -> None:
    status = RunStatus(1, ConsoleReporter(quiet=True))

    with pytest.warns(AbandonedRunWarning):
        del status
        gc.collect()


def test_negative_total_is_rejected() -> None:
    with pytest.raises(ValueError):
        RunStatus(-1, ConsoleReporter(quiet=True))
