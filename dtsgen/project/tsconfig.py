"""Reading tsconfig.json and checking the isolated-declarations precondition."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from dtsgen.config.models import DtsConfig
from dtsgen.extract.lexer import strip_line_comments

logger = logging.getLogger(__name__)

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

# Guard against `extends` cycles
_MAX_EXTENDS_DEPTH = 10


def _parse_jsonc(text: str) -> dict:
    """Parse tsconfig-flavoured JSON (comments and trailing commas allowed)."""
    text = strip_line_comments(text)
    text = _BLOCK_COMMENT_RE.sub("", text)
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("tsconfig root must be an object")
    return data


def load_compiler_options(path: str | Path) -> dict:
    """Merged compilerOptions of *path* and the relative configs it extends.

    Package-name `extends` (e.g. `@tsconfig/node20`) is not resolved.
    """
    path = Path(path)
    chain: list[dict] = []
    for _ in range(_MAX_EXTENDS_DEPTH):
        data = _parse_jsonc(path.read_text(encoding="utf-8"))
        chain.append(data.get("compilerOptions") or {})
        parent = data.get("extends")
        if not isinstance(parent, str) or not parent.startswith("."):
            break
        parent_path = (path.parent / parent).resolve()
        if parent_path.suffix != ".json":
            parent_path = parent_path.with_name(parent_path.name + ".json")
        if not parent_path.is_file():
            logger.warning("tsconfig %s extends missing file %s", path, parent_path)
            break
        path = parent_path

    merged: dict = {}
    for options in reversed(chain):
        merged.update(options)
    return merged


def check_isolated_declarations(config: DtsConfig) -> bool:
    """True when the project's tsconfig enables isolatedDeclarations."""
    path = Path(config.tsconfig_path)
    try:
        options = load_compiler_options(path)
    except (OSError, ValueError) as e:
        logger.error("Could not read tsconfig %s: %s", path, e)
        return False
    return options.get("isolatedDeclarations") is True
