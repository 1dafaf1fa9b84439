"""Line-oriented scanner that cuts TypeScript source into raw blocks."""

from __future__ import annotations

import logging
import re
from enum import Enum

from dtsgen.extract.lexer import BracketCounter
from dtsgen.extract.models import RawBlock, ScanResult

logger = logging.getLogger(__name__)

_DECLARATION_START_RE = re.compile(r"^(?:export|import|interface)\b")

# A line ending in one of these keeps the block open even at depth 0.
_CONTINUATION_SUFFIXES = (",", "=", "|", "&", "=>")
# ...and so does a following line starting with one of these.
_CONTINUATION_PREFIXES = ("|", "&")


class ScanState(Enum):
    IDLE = "idle"
    IN_COMMENT = "in_comment"
    IN_DECLARATION = "in_declaration"


def _is_continued(line: str, next_line: str) -> bool:
    if line.rstrip().endswith(_CONTINUATION_SUFFIXES):
        return True
    return next_line.lstrip().startswith(_CONTINUATION_PREFIXES)


class DeclarationScanner:
    """Partitions source text into RawBlocks plus raw import statements.

    Only the documentation comment immediately preceding a declaration is
    attached to it. Plain code at the top level is skipped.
    """

    def __init__(self, keep_comments: bool = True) -> None:
        self.keep_comments = keep_comments

    def scan(self, source: str) -> ScanResult:
        result = ScanResult()
        state = ScanState.IDLE
        comment_lines: list[str] = []
        pending_comment: str | None = None
        body_lines: list[str] = []
        counter = BracketCounter()

        lines = source.splitlines()
        for i, line in enumerate(lines):
            stripped = line.strip()

            if state is ScanState.IN_COMMENT:
                end = line.find("*/")
                if end == -1:
                    comment_lines.append(line)
                    continue
                comment_lines.append(line[: end + 2])
                pending_comment = "\n".join(comment_lines).rstrip()
                comment_lines = []
                state = ScanState.IDLE
                # Code may follow the closing `*/` on the same line.
                line = line[end + 2 :]
                stripped = line.strip()
                if not stripped:
                    continue

            if state is ScanState.IDLE:
                if stripped.startswith("/*"):
                    # A new comment replaces whatever was pending.
                    pending_comment = None
                    start = line.index("/*")
                    end = line.find("*/", start + 2)
                    if end == -1:
                        comment_lines = [line]
                        state = ScanState.IN_COMMENT
                        continue
                    pending_comment = line[: end + 2].rstrip()
                    line = line[end + 2 :]
                    stripped = line.strip()
                    if not stripped:
                        continue
                if stripped.startswith("//"):
                    continue
                if not _DECLARATION_START_RE.match(stripped):
                    if stripped:
                        pending_comment = None
                    continue
                state = ScanState.IN_DECLARATION
                counter = BracketCounter()
                body_lines = []

            body_lines.append(line)
            depth = counter.feed(line)
            next_line = lines[i + 1] if i + 1 < len(lines) else ""
            if depth > 0 or _is_continued(line, next_line):
                continue

            self._emit(result, body_lines, pending_comment)
            pending_comment = None
            body_lines = []
            state = ScanState.IDLE

        if state is ScanState.IN_DECLARATION and body_lines:
            logger.debug("input ended inside a declaration (depth %d)", counter.depth)
            self._emit(result, body_lines, pending_comment)

        return result

    def _emit(
        self,
        result: ScanResult,
        body_lines: list[str],
        comment: str | None,
    ) -> None:
        body = "\n".join(body_lines).strip()
        if body.startswith("import"):
            result.imports.append(body)
            return
        result.blocks.append(
            RawBlock(
                body=body,
                keyword=body.split(None, 1)[0],
                preceding_comment=comment if self.keep_comments else None,
            )
        )


def scan_declarations(source: str, keep_comments: bool = True) -> ScanResult:
    """Convenience wrapper around DeclarationScanner.scan."""
    return DeclarationScanner(keep_comments=keep_comments).scan(source)
