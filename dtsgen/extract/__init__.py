"""Extraction subsystem — turns TypeScript source into declaration text."""

from dtsgen.extract.classifier import classify, object_literal_type
from dtsgen.extract.extractor import (
    compose_document,
    extract,
    extract_declarations,
    generate_dts,
)
from dtsgen.extract.imports import (
    collect_used_types,
    parse_import,
    parse_imports,
    render_import_block,
)
from dtsgen.extract.inference import infer_value_type
from dtsgen.extract.models import (
    DeclaredSymbol,
    ExtractionError,
    ImportBinding,
    ImportedName,
    RawBlock,
    ScanResult,
    SymbolKind,
)
from dtsgen.extract.scanner import DeclarationScanner, scan_declarations

__all__ = [
    "DeclarationScanner",
    "DeclaredSymbol",
    "ExtractionError",
    "ImportBinding",
    "ImportedName",
    "RawBlock",
    "ScanResult",
    "SymbolKind",
    "classify",
    "collect_used_types",
    "compose_document",
    "extract",
    "extract_declarations",
    "generate_dts",
    "infer_value_type",
    "object_literal_type",
    "parse_import",
    "parse_imports",
    "render_import_block",
    "scan_declarations",
]
