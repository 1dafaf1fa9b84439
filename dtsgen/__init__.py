"""dtsgen — declaration file generation from TypeScript source text."""

from dtsgen.config import DtsConfig, load_config
from dtsgen.extract import extract, generate_dts
from dtsgen.generator import DeclarationGenerator, GenerationReport, generate_declarations

__version__ = "0.1.0"

__all__ = [
    "DeclarationGenerator",
    "DtsConfig",
    "GenerationReport",
    "extract",
    "generate_declarations",
    "generate_dts",
    "load_config",
]
