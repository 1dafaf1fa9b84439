from pydantic import BaseModel, Field
from typing import Literal


class DtsConfig(BaseModel):
    root: str = "./src"
    outdir: str = "./dist"
    clean: bool = False
    entrypoints: list[str] = Field(default_factory=lambda: ["**/*.ts"])
    tsconfig_path: str = "./tsconfig.json"
    fallback_type: Literal["any", "string"] = "any"
    keep_comments: bool = True
    log_level: Literal["debug", "info", "warn", "error"] = "info"


class OptionsResult(BaseModel):
    """Outcome of validating user-supplied options.

    Exactly one of ``config`` / ``error`` is set, matching ``ok``.
    """

    ok: bool
    config: DtsConfig | None = None
    error: str | None = None
