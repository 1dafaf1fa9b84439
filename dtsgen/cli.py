"""CLI entry point for dtsgen."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from dtsgen.config import DtsConfig, load_config, validate_options
from dtsgen.config.loader import DEFAULT_CONFIG_TEMPLATE
from dtsgen.extract import ExtractionError, extract
from dtsgen.generator import DeclarationGenerator, GenerationReport

app = typer.Typer(
    name="dtsgen",
    help="Generate .d.ts declaration files from TypeScript sources without a type checker.",
)

config_app = typer.Typer(help="Manage dtsgen configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


def _get_config(ctx: typer.Context) -> DtsConfig:
    if isinstance(ctx.obj, DtsConfig):
        return ctx.obj
    return load_config()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to dtsgen.yaml")
    ] = None,
) -> None:
    """Global options."""
    try:
        cfg = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _setup_logging(cfg.log_level)
    ctx.obj = cfg


def _display_report(report: GenerationReport, dry_run: bool) -> None:
    title = "Declarations (dry run)" if dry_run else "Declarations"
    table = Table(title=f"{title} ({len(report.written)})")
    table.add_column("Status", style="bold")
    table.add_column("Path")
    for path in report.written:
        table.add_row("[green]written[/green]" if not dry_run else "[yellow]planned[/yellow]", path)
    for path in report.skipped:
        table.add_row("[dim]skipped[/dim]", path)
    for path in report.failed:
        table.add_row("[red]failed[/red]", path)
    rprint(table)


@app.command()
def generate(
    ctx: typer.Context,
    root: str | None = typer.Option(None, "--root", help="Source directory"),
    outdir: str | None = typer.Option(None, "--outdir", "-o", help="Output directory"),
    clean: bool | None = typer.Option(
        None, "--clean/--no-clean", help="Remove the output directory first"
    ),
    entrypoint: list[str] | None = typer.Option(
        None, "--entrypoint", "-e", help="Glob (relative to root) selecting sources; repeatable"
    ),
    tsconfig: str | None = typer.Option(None, "--tsconfig", help="Path to tsconfig.json"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Generate declaration files for every source under the root."""
    cfg = _get_config(ctx)
    overrides = {
        "root": root,
        "outdir": outdir,
        "clean": clean,
        "entrypoints": entrypoint or None,
        "tsconfig_path": tsconfig,
    }
    result = validate_options(
        {**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
    )
    if not result.ok:
        rprint(f"[red]Error:[/red] {result.error}")
        raise typer.Exit(1)
    cfg = result.config

    rprint(f"[bold]Generating[/bold] {cfg.root} → {cfg.outdir}")
    try:
        report = asyncio.run(DeclarationGenerator(cfg).generate(dry_run=dry_run))
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if report.aborted:
        rprint(
            f"[red]Error:[/red] isolatedDeclarations must be true in {cfg.tsconfig_path}"
        )
        raise typer.Exit(1)

    _display_report(report, dry_run)
    if report.failed:
        raise typer.Exit(1)


@app.command(name="extract")
def extract_cmd(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="TypeScript source file"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write declarations to file"),
) -> None:
    """Print (or write) the declarations of a single file."""
    cfg = _get_config(ctx)
    try:
        content = extract(file, fallback=cfg.fallback_type, keep_comments=cfg.keep_comments)
    except ExtractionError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not content:
        rprint(f"[yellow]No declarations extracted for {file}[/yellow]")
        return

    if output:
        out = Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        rprint(f"[green]Wrote[/green] {out}")
    else:
        rprint(Syntax(content, "typescript", theme="monokai"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Write a default dtsgen.yaml to the current directory."""
    dest = Path("dtsgen.yaml")
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    cfg = _get_config(ctx)
    text = yaml.safe_dump(cfg.model_dump(), default_flow_style=False, sort_keys=False)
    rprint(Syntax(text, "yaml", theme="monokai"))


if __name__ == "__main__":
    app()
