from __future__ import annotations

import pytest

import cfail.diagnostics as diagnostics_api
import cfail.expectations as expectations_api
import cfail.matching as matching_api
import cfail.runner as runner_api

pytestmark = pytest.mark.unit


def test_diagnostics_public_api_surface_is_explicit_and_stable() -> None:
    assert diagnostics_api.__all__ == [
        "DiagnosticDecodeError",
        "DiagnosticDecodeErrorDetail",
        "Message",
        "MessageKind",
        "RawDiagnostic",
        "RawDiagnosticCode",
        "RawMacroExpansion",
        "RawSpan",
        "decode_diagnostic",
        "flatten_diagnostic",
        "normalize_output",
        "split_lines",
    ]


def test_expectations_public_api_surface_is_explicit_and_stable() -> None:
    assert expectations_api.__all__ == [
        "CodeMatcher",
        "ExpectationErrorCode",
        "ExpectationParseError",
        "ExpectationParseErrorDetail",
        "Matcher",
        "Pattern",
        "TestExpectation",
        "TextMatcher",
        "load_expectation",
        "parse_expectations",
    ]
    assert not hasattr(expectations_api, "_ExpectationParser")


def test_matching_public_api_surface_is_explicit_and_stable() -> None:
    assert matching_api.__all__ == [
        "MatchPass",
        "MatchVerdict",
        "MatchViolation",
        "ViolationReason",
        "compare_messages",
        "pattern_matches",
    ]


def test_runner_public_api_surface_is_explicit_and_stable() -> None:
    assert runner_api.__all__ == [
        "AbandonedRunError",
        "AbandonedRunWarning",
        "Command",
        "CompilerConfig",
        "ConfiguredInvocationProvider",
        "ConsoleReporter",
        "DEFAULT_COMPILER_ARGS",
        "FixtureDiscoveryError",
        "FixtureFailure",
        "FixtureResult",
        "HarnessConfig",
        "HarnessConfigError",
        "InvocationError",
        "InvocationProvider",
        "InvocationTemplate",
        "ProcessOutput",
        "ProcessRunner",
        "ProcessSpawnError",
        "Reporter",
        "RunFailedError",
        "RunInvariantError",
        "RunStatus",
        "RunSummary",
        "SOURCE_PLACEHOLDER",
        "SubprocessRunner",
        "discover_fixtures",
        "load_harness_config",
        "run_fixture",
        "run_fixtures",
    ]
    assert not hasattr(runner_api, "DEFAULT_OUT_DIR_FLAG")
