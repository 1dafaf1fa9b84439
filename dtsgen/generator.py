"""Generation orchestrator: drives extraction over a project and writes .d.ts files."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from dtsgen.config import DtsConfig
from dtsgen.extract import generate_dts
from dtsgen.output import DtsWriter
from dtsgen.project import check_isolated_declarations, find_source_files

logger = logging.getLogger(__name__)


class GenerationReport(BaseModel):
    """Outcome of one generation run."""

    written: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return not self.aborted and not self.failed


class DeclarationGenerator:
    """Generates declaration files for every source under ``config.root``.

    Pipeline:
        precondition → optional clean → per file: read → extract → write
    """

    def __init__(self, config: DtsConfig, writer: DtsWriter | None = None) -> None:
        self.config = config
        self.writer = writer or DtsWriter(config.root, config.outdir)

    async def generate(
        self,
        files: list[Path] | None = None,
        *,
        dry_run: bool = False,
    ) -> GenerationReport:
        """Run the whole pipeline.

        Steps:
            1. Check that tsconfig enables isolatedDeclarations (abort if not)
            2. Remove the output directory when ``clean`` is set
            3. Generate one declaration file per source, sequentially
        """
        report = GenerationReport()

        if not check_isolated_declarations(self.config):
            logger.error(
                "isolatedDeclarations must be set to true in %s; nothing was generated",
                self.config.tsconfig_path,
            )
            report.aborted = True
            return report

        if self.config.clean and not dry_run:
            self.writer.clean()

        if files is None:
            files = find_source_files(self.config.root, self.config.entrypoints)
        logger.info("found %d source file(s) under %s", len(files), self.config.root)

        for path in files:
            await self._process_file(Path(path), report, dry_run=dry_run)

        logger.info(
            "declaration generation complete: %d written, %d skipped, %d failed",
            len(report.written),
            len(report.skipped),
            len(report.failed),
        )
        return report

    async def _process_file(
        self, path: Path, report: GenerationReport, *, dry_run: bool
    ) -> None:
        logger.debug("processing %s", path)
        try:
            source = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("failed to read %s: %s", path, e)
            report.failed.append(str(path))
            return

        content = generate_dts(
            source,
            fallback=self.config.fallback_type,
            keep_comments=self.config.keep_comments,
        )
        if not content.strip():
            logger.warning("no declarations extracted for %s", path)
            report.skipped.append(str(path))
            return

        try:
            dest = await asyncio.to_thread(self.writer.write, path, content, dry_run=dry_run)
        except (OSError, ValueError) as e:
            logger.error("failed to write declarations for %s: %s", path, e)
            report.failed.append(str(path))
            return
        report.written.append(str(dest))


async def generate_declarations(config: DtsConfig, *, dry_run: bool = False) -> GenerationReport:
    """Convenience wrapper: build a DeclarationGenerator and run it."""
    return await DeclarationGenerator(config).generate(dry_run=dry_run)
