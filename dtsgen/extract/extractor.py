"""Per-file pipeline: source text -> .d.ts text."""

from __future__ import annotations

import logging
from pathlib import Path

from dtsgen.extract.classifier import classify
from dtsgen.extract.imports import collect_used_types, parse_imports, render_import_block
from dtsgen.extract.inference import FallbackType
from dtsgen.extract.models import DeclaredSymbol, ExtractionError, SymbolKind
from dtsgen.extract.scanner import DeclarationScanner

logger = logging.getLogger(__name__)


def extract_declarations(
    source: str,
    *,
    fallback: FallbackType = "any",
    keep_comments: bool = True,
) -> tuple[list[str], list[DeclaredSymbol]]:
    """Run scanner, classifier and resolver over *source*.

    Returns (import lines, declarations), both in source order.
    """
    scan = DeclarationScanner(keep_comments=keep_comments).scan(source)

    symbols: list[DeclaredSymbol] = []
    for block in scan.blocks:
        symbol = classify(block, fallback)
        if symbol is None:
            logger.debug("dropped unrecognized block: %.60r", block.body)
            continue
        if _is_overload_implementation(symbol, symbols[-1] if symbols else None):
            logger.debug("dropped overload implementation: %s", symbol.name)
            continue
        symbols.append(symbol)

    bindings = parse_imports(scan.imports)
    used = collect_used_types(s.text for s in symbols)
    return render_import_block(bindings, used), symbols


def _is_overload_implementation(symbol: DeclaredSymbol, previous: DeclaredSymbol | None) -> bool:
    """A bodied function right after a bodiless signature of the same name."""
    return (
        previous is not None
        and symbol.kind is SymbolKind.FUNCTION
        and previous.kind is SymbolKind.FUNCTION
        and symbol.has_body
        and not previous.has_body
        and symbol.name == previous.name
    )


def compose_document(import_lines: list[str], symbols: list[DeclaredSymbol]) -> str:
    """Join imports and declarations into the final .d.ts text.

    An empty string means there is nothing worth writing.
    """
    if not symbols:
        return ""
    body = "\n".join(s.render() for s in symbols)
    if import_lines:
        return "\n".join(import_lines) + "\n\n" + body + "\n"
    return body + "\n"


def generate_dts(
    source: str,
    *,
    fallback: FallbackType = "any",
    keep_comments: bool = True,
) -> str:
    """Generate declaration text for one TypeScript module."""
    import_lines, symbols = extract_declarations(
        source, fallback=fallback, keep_comments=keep_comments
    )
    return compose_document(import_lines, symbols)


def extract(
    path: str | Path,
    *,
    fallback: FallbackType = "any",
    keep_comments: bool = True,
) -> str:
    """Read *path* and return its declaration text.

    Raises ExtractionError if the file cannot be read.
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ExtractionError(path, e) from e
    return generate_dts(source, fallback=fallback, keep_comments=keep_comments)
