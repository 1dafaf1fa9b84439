"""Output subsystem — writes .d.ts files."""

from dtsgen.output.writer import DtsWriter, declaration_path

__all__ = [
    "DtsWriter",
    "declaration_path",
]
