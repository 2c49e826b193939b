from .config import (
    DEFAULT_COMPILER_ARGS,
    SOURCE_PLACEHOLDER,
    CompilerConfig,
    HarnessConfig,
    HarnessConfigError,
    load_harness_config,
)
from .discovery import FixtureDiscoveryError, discover_fixtures
from .invocation import (
    Command,
    ConfiguredInvocationProvider,
    InvocationError,
    InvocationProvider,
    InvocationTemplate,
)
from .process import ProcessOutput, ProcessRunner, ProcessSpawnError, SubprocessRunner
from .report import ConsoleReporter, Reporter
from .run import run_fixture, run_fixtures
from .status import (
    AbandonedRunError,
    AbandonedRunWarning,
    FixtureFailure,
    FixtureResult,
    RunFailedError,
    RunInvariantError,
    RunStatus,
    RunSummary,
)

__all__ = [
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
