"""Project collaborators: source discovery and tsconfig checks."""

from dtsgen.project.files import find_source_files, is_declaration_file
from dtsgen.project.tsconfig import check_isolated_declarations, load_compiler_options

__all__ = [
    "check_isolated_declarations",
    "find_source_files",
    "is_declaration_file",
    "load_compiler_options",
]
