"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DtsConfig, OptionsResult


def validate_options(options: object) -> OptionsResult:
    """Validate raw options without raising.

    Accepts a mapping of option values (or an existing DtsConfig) and
    returns a tagged result the caller can branch on.
    """
    if isinstance(options, DtsConfig):
        return OptionsResult(ok=True, config=options)
    if not isinstance(options, dict):
        return OptionsResult(ok=False, error=f"Invalid options: expected a mapping, got {type(options).__name__}")
    try:
        return OptionsResult(ok=True, config=DtsConfig(**options))
    except ValidationError as e:
        return OptionsResult(ok=False, error=f"Invalid options: {e}")


def load_config(cli_path: str | None = None) -> DtsConfig:
    """Load config with resolution order: CLI > project-local > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./dtsgen.yaml"),
    ]

    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            if raw is None:
                continue
            result = validate_options(_expand_env_vars(raw))
            if not result.ok:
                raise ValueError(f"Invalid config in {path}: {result.error}")
            return result.config

    return DtsConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `dtsgen config init`
DEFAULT_CONFIG_TEMPLATE = """\
# dtsgen.yaml

# Sources
root: "./src"
entrypoints:
  - "**/*.ts"

# Output
outdir: "./dist"
clean: false                   # wipe outdir before generating

# Precondition: compilerOptions.isolatedDeclarations must be true here
tsconfig_path: "./tsconfig.json"

# Extraction
fallback_type: "any"           # any | string — type for non-literal initializers
keep_comments: true

# Logging
log_level: "info"              # debug | info | warn | error
"""
