from __future__ import annotations

import warnings
from dataclasses import dataclass
from types import TracebackType
from typing import Literal

from .report import Reporter

type FailureReason = Literal[
    "parse",
    "read",
    "decode",
    "non_utf8_output",
    "unexpected_success",
    "mismatch",
]


@dataclass(frozen=True, slots=True)
class FixtureFailure:
    reason: FailureReason
    description: str

    def __post_init__(self) -> None:
        if not self.description:
            raise ValueError("fixture failure description must be non-empty")


@dataclass(frozen=True, slots=True)
class FixtureResult:
    name: str
    failure: FixtureFailure | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("fixture name must be non-empty")

    @property
    def passed(self) -> bool:
        return self.failure is None


@dataclass(frozen=True, slots=True)
class RunSummary:
    total: int
    passed: int
    failures: tuple[FixtureResult, ...]

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def success(self) -> bool:
        return self.total > 0 and not self.failures


class RunFailedError(RuntimeError):
    def __init__(self, summary: RunSummary, report: str | None = None) -> None:
        if summary.total == 0:
            headline = "no compile-fail tests were run"
        else:
            headline = f"{summary.failed} compile-fail tests failed"
        message = headline if not report else f"{headline}\n\n{report}"
        super().__init__(message)
        self.summary = summary
        self.report = report


class RunInvariantError(RuntimeError):
    pass


class AbandonedRunError(RunInvariantError):
    pass


class AbandonedRunWarning(RuntimeWarning):
    pass


class RunStatus:
    """Collects per-fixture verdicts; ``finalize`` is the only way to read the outcome.

    Use as a context manager: leaving the block without finalizing raises
    ``AbandonedRunError``.
    """

    def __init__(self, total: int, reporter: Reporter) -> None:
        # Guards __del__ when validation below raises.
        self._finalized = True
        if isinstance(total, bool) or total < 0:
            raise ValueError("fixture total must be a non-negative integer")
        self.total = total
        self.reporter = reporter
        self._results: dict[str, FixtureResult] = {}
        self._finalized = False
        self._released = False

    def __enter__(self) -> RunStatus:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._finalized:
            return
        self._released = True
        if exc_type is None:
            raise AbandonedRunError("RunStatus.finalize was not called")

    def __del__(self) -> None:
        if not self._finalized and not getattr(self, "_released", True):
            warnings.warn(
                "RunStatus was discarded without calling finalize",
                AbandonedRunWarning,
                stacklevel=2,
            )

    @property
    def num_passed(self) -> int:
        return sum(1 for result in self._results.values() if result.passed)

    @property
    def failures(self) -> tuple[FixtureResult, ...]:
        return tuple(result for result in self._results.values() if not result.passed)

    def print_header(self) -> None:
        plural = "" if self.total == 1 else "s"
        self.reporter.write(f"running {self.total} compile-fail test{plural}\n")

    def record(self, name: str, failure: FixtureFailure | None) -> FixtureResult:
        self._ensure_open()
        if name in self._results:
            raise RunInvariantError(f"duplicate result recorded for fixture '{name}'")
        result = FixtureResult(name=name, failure=failure)
        self._results[name] = result
        self.reporter.write(f"test {name} ... ")
        self.reporter.write_status(result.passed)
        self.reporter.write("\n")
        return result

    def finalize(self) -> RunSummary:
        self._ensure_open()
        if len(self._results) != self.total:
            raise RunInvariantError(
                f"finalize called after recording {len(self._results)} of {self.total} fixtures"
            )
        self._finalized = True

        summary = RunSummary(total=self.total, passed=self.num_passed, failures=self.failures)
        self._print_result(summary)
        if summary.success:
            return summary
        raise RunFailedError(summary, self.reporter.buffered_text())

    def _print_result(self, summary: RunSummary) -> None:
        self.reporter.write("test result: ")
        self.reporter.write_status(summary.success)
        self.reporter.write(f". {summary.passed} passed; {summary.failed} failed\n\n")
        for result in summary.failures:
            assert result.failure is not None
            self.reporter.write(f"---- test {result.name} ----\n")
            self.reporter.write(f"{result.failure.description}\n\n")

    def _ensure_open(self) -> None:
        if self._finalized:
            raise RunInvariantError("RunStatus has already been finalized")
