"""Import parsing and usage-filtered `import type` reconstruction.

Imports in the source are parsed into module -> bound names. After the
declarations have been rendered, only the names those declarations actually
reference survive, and every surviving import is emitted as type-only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from dtsgen.extract.lexer import mask_strings, split_top_level
from dtsgen.extract.models import BindingForm, ImportBinding, ImportedName

logger = logging.getLogger(__name__)

_IMPORT_RE = re.compile(
    r"^import\s+(?:type\s+)?(?P<clause>.+?)\s*\bfrom\s*(?P<quote>['\"])(?P<module>[^'\"]+)(?P=quote)",
    re.DOTALL,
)
_NAMESPACE_RE = re.compile(r"^\*\s*as\s+(?P<local>[\w$]+)$")
_NAMED_RE = re.compile(r"^(?:type\s+)?(?P<imported>[\w$]+)(?:\s+as\s+(?P<local>[\w$]+))?$")
_TYPE_REF_RE = re.compile(r"(?<![\w$.])[A-Z][\w$]*")


def parse_import(statement: str) -> tuple[str, list[ImportedName]] | None:
    """Parse one import statement into (module, names).

    Returns None for statements that bind nothing (e.g. `import './side-effect'`)
    or that cannot be understood.
    """
    m = _IMPORT_RE.match(statement.strip())
    if m is None:
        return None

    clause = m.group("clause").strip()
    names: list[ImportedName] = []

    named_part = ""
    brace = clause.find("{")
    if brace != -1:
        close = clause.rfind("}")
        named_part = clause[brace + 1 : close if close != -1 else len(clause)]
        clause = clause[:brace]

    for piece in split_top_level(clause):
        ns = _NAMESPACE_RE.match(piece)
        if ns:
            names.append(ImportedName(ns.group("local"), "*", BindingForm.NAMESPACE))
        elif re.fullmatch(r"[\w$]+", piece):
            names.append(ImportedName(piece, "default", BindingForm.DEFAULT))
        else:
            logger.debug("unrecognized import clause %r", piece)

    for piece in split_top_level(named_part):
        named = _NAMED_RE.match(" ".join(piece.split()))
        if named is None:
            logger.debug("unrecognized import binding %r", piece)
            continue
        imported = named.group("imported")
        names.append(ImportedName(named.group("local") or imported, imported))

    return m.group("module"), names


def parse_imports(statements: Iterable[str]) -> list[ImportBinding]:
    """Build module bindings in first-encountered module order."""
    bindings: dict[str, ImportBinding] = {}
    for statement in statements:
        parsed = parse_import(statement)
        if parsed is None:
            continue
        module, names = parsed
        binding = bindings.setdefault(module, ImportBinding(module))
        for name in names:
            binding.add(name)
    return list(bindings.values())


def collect_used_types(texts: Iterable[str]) -> set[str]:
    """Capitalized identifiers referenced anywhere in *texts*.

    String literal contents are ignored, so a key like `'Content-Type'`
    does not count as a reference to `Content`.
    """
    used: set[str] = set()
    for text in texts:
        used.update(_TYPE_REF_RE.findall(mask_strings(text)))
    return used


def render_import_block(bindings: Iterable[ImportBinding], used: set[str]) -> list[str]:
    """Render `import type` lines for the bindings that are actually used."""
    lines: list[str] = []
    for binding in bindings:
        kept = [n for n in binding.names if n.local in used]
        if not kept:
            continue
        module = binding.module
        for name in kept:
            if name.form is BindingForm.DEFAULT:
                lines.append(f"import type {name.local} from '{module}'")
            elif name.form is BindingForm.NAMESPACE:
                lines.append(f"import type * as {name.local} from '{module}'")
        named = [n.specifier for n in kept if n.form is BindingForm.NAMED]
        if named:
            lines.append(f"import type {{ {', '.join(named)} }} from '{module}'")
    return lines
