"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SymbolKind(str, Enum):
    CONST = "const"
    LET = "let"
    VAR = "var"
    FUNCTION = "function"
    INTERFACE = "interface"
    TYPE = "type"
    REEXPORT = "reexport"
    OTHER = "other"


class BindingForm(str, Enum):
    NAMED = "named"
    DEFAULT = "default"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class RawBlock:
    """One top-level construct as cut out of the source by the scanner."""

    body: str
    keyword: str
    preceding_comment: str | None = None


@dataclass
class ScanResult:
    """Output of scanning one source file."""

    blocks: list[RawBlock] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeclaredSymbol:
    """A block rendered into its canonical declaration text."""

    kind: SymbolKind
    text: str
    comment: str | None = None
    # Functions only: the declared name and whether the source had a body.
    name: str | None = None
    has_body: bool = False

    def render(self) -> str:
        if self.comment:
            return f"{self.comment}\n{self.text}"
        return self.text


@dataclass(frozen=True)
class ImportedName:
    """A single name bound by an import statement."""

    local: str
    imported: str
    form: BindingForm = BindingForm.NAMED

    @property
    def specifier(self) -> str:
        """Text of the binding inside `{ ... }`."""
        if self.imported != self.local:
            return f"{self.imported} as {self.local}"
        return self.local


@dataclass
class ImportBinding:
    """Module path and the names a file binds from it, in source order."""

    module: str
    names: list[ImportedName] = field(default_factory=list)

    def add(self, name: ImportedName) -> None:
        if all(n.local != name.local for n in self.names):
            self.names.append(name)

    @property
    def local_names(self) -> list[str]:
        return [n.local for n in self.names]


class ExtractionError(Exception):
    """Wraps a failure to read or process a source file."""

    def __init__(self, path: str | Path, cause: Exception) -> None:
        self.path = str(path)
        super().__init__(f"failed to extract declarations from {path}: {cause}")
        self.__cause__ = cause
