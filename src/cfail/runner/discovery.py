from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FixtureDiscoveryError(RuntimeError):
    pass


def discover_fixtures(directory: str | Path, extension: str) -> tuple[Path, ...]:
    """List fixture files with ``extension`` in ``directory``, sorted by name.

    An empty result usually means the wrong directory was configured, so it
    is an error rather than a vacuous pass.
    """
    root = Path(directory)
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        raise FixtureDiscoveryError(f"couldn't open {root}: {exc}") from exc

    fixtures: list[Path] = []
    for entry in entries:
        if entry.suffix != extension:
            continue
        if not entry.is_file():
            raise FixtureDiscoveryError(f"unsupported file type of compile-fail test '{entry}'")
        logger.info("found compile-fail test at %s", entry)
        fixtures.append(entry)

    if not fixtures:
        raise FixtureDiscoveryError(f"no compile-fail test found in {root}")
    return tuple(fixtures)
