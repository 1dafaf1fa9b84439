"""DtsWriter — writes generated declaration text to mirrored .d.ts paths."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# source suffix -> declaration suffix
_DECLARATION_SUFFIXES = {
    ".ts": ".d.ts",
    ".tsx": ".d.ts",
    ".mts": ".d.mts",
    ".cts": ".d.cts",
}


def declaration_path(source: Path, root: Path, outdir: Path) -> Path:
    """Mirror *source* (under *root*) into *outdir* with a declaration suffix.

    Raises ValueError if *source* is not inside *root*.
    """
    rel = source.resolve().relative_to(root.resolve())
    suffix = _DECLARATION_SUFFIXES.get(rel.suffix, ".d.ts")
    return outdir / rel.with_suffix(suffix)


class DtsWriter:
    """Writes declaration text under an output root.

    Handles path mirroring, directory creation, cleaning and dry-run mode.
    """

    def __init__(self, root: str | Path, outdir: str | Path) -> None:
        self.root = Path(root)
        self.outdir = Path(outdir)

    def path_for(self, source: str | Path) -> Path:
        return declaration_path(Path(source), self.root, self.outdir)

    def write(self, source: str | Path, content: str, *, dry_run: bool = False) -> Path:
        """Write *content* as the declaration file for *source*.

        Returns the Path of the written (or would-be) file.
        """
        dest = self.path_for(source)

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(content))
        return dest

    def clean(self) -> None:
        """Remove the output root recursively. A missing directory is fine."""
        if not self.outdir.exists():
            return
        logger.info("cleaning output directory %s", self.outdir)
        shutil.rmtree(self.outdir)
