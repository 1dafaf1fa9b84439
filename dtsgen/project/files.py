"""Discovery of TypeScript sources under a root directory."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Directories always skipped during discovery
DEFAULT_IGNORE = {
    ".git",
    "node_modules",
    "dist",
    "build",
    "coverage",
}

DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


def _matches_any(path: Path, patterns: set[str]) -> bool:
    """Check whether any component of *path* matches one of *patterns*."""
    return any(part in patterns for part in path.parts)


def is_declaration_file(path: Path) -> bool:
    return path.name.endswith(DECLARATION_SUFFIXES)


def find_source_files(
    root: str | Path,
    entrypoints: list[str] | None = None,
    ignore_patterns: list[str] | None = None,
) -> list[Path]:
    """Return absolute paths of sources matching *entrypoints* under *root*.

    Entrypoints are glob patterns relative to *root*. Declaration files and
    anything under an ignored directory are skipped. The result is sorted
    so repeated runs process files in the same order.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        logger.warning("source root is not a directory: %s", root)
        return []

    ignore = set(DEFAULT_IGNORE)
    if ignore_patterns:
        ignore.update(ignore_patterns)

    found: set[Path] = set()
    for pattern in entrypoints or ["**/*.ts"]:
        for p in root.glob(pattern):
            if not p.is_file() or is_declaration_file(p):
                continue
            if _matches_any(p.relative_to(root), ignore):
                continue
            found.add(p)

    return sorted(found)
