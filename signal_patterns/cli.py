"""
signal-patterns CLI

Usage:
    signal-patterns lint src/ --fix
    signal-patterns lint App.tsx --preset strict --format json
    signal-patterns rules
    signal-patterns presets

Exit status: 0 clean, 1 errors found (or a file could not be analysed),
2 invalid configuration.
"""

import json
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from signal_patterns.config import LintConfig, Settings, discover_config, load_config
from signal_patterns.errors import ConfigurationError
from signal_patterns.linter import Linter
from signal_patterns.models import LintResult, Severity
from signal_patterns.observability import configure_logging
from signal_patterns.presets import PRESETS
from signal_patterns.rules import RULES

app = typer.Typer(help="Static checks for Preact signal usage patterns", no_args_is_help=True)


class OutputFormat(str, Enum):
    STYLISH = "stylish"
    JSON = "json"


def _build_config(
    config_path: Path | None,
    preset: str | None,
    naming_convention: bool | None,
    settings: Settings,
) -> LintConfig:
    path = config_path or settings.config or discover_config(Path.cwd())
    config = load_config(path) if path is not None else LintConfig()

    overrides = {}
    if preset is not None:
        overrides["extends"] = preset
    if naming_convention is not None:
        overrides["namingConvention"] = naming_convention
    if not overrides:
        return config

    data = config.model_dump(by_alias=True)
    data.update(overrides)
    return LintConfig.from_mapping(data)


def _render_stylish(results: list[LintResult]) -> None:
    errors = warnings = fixable = 0

    for result in results:
        if not result.diagnostics and result.error is None:
            continue

        typer.echo(typer.style(result.file_path, underline=True))
        if result.error is not None:
            typer.echo(f"  {typer.style('fatal', fg=typer.colors.RED)}  {result.error}")
            errors += 1
        for d in result.diagnostics:
            color = typer.colors.RED if d.severity == Severity.ERROR else typer.colors.YELLOW
            location = f"{d.span.start_line}:{d.span.start_col}"
            typer.echo(f"  {location:<8} {typer.style(d.severity.value, fg=color):<7}  {d.message}  {d.rule_id}")
        typer.echo()

        errors += result.error_count
        warnings += result.warning_count
        fixable += result.fixable_count

    total = errors + warnings
    if total:
        summary = f"✖ {total} problem{'s' if total != 1 else ''} ({errors} errors, {warnings} warnings)"
        typer.echo(typer.style(summary, fg=typer.colors.RED if errors else typer.colors.YELLOW, bold=True))
        if fixable:
            typer.echo(f"  {fixable} potentially fixable with the `--fix` option.")


@app.command()
def lint(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    preset: str | None = typer.Option(None, "--preset", "-p", help="Preset to extend"),
    fix: bool = typer.Option(False, "--fix", help="Write automatic fixes back to the files"),
    output_format: OutputFormat = typer.Option(OutputFormat.STYLISH, "--format", "-f", help="Output format"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Parallel workers"),
    naming_convention: bool | None = typer.Option(
        None,
        "--naming-convention/--no-naming-convention",
        help="Treat names ending in $ as signals",
    ),
):
    """Lint JS/TS/JSX/TSX files."""
    settings = Settings()
    configure_logging(settings.log_level, settings.log_json)

    try:
        lint_config = _build_config(config, preset, naming_convention, settings)
        linter = Linter(lint_config)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e.message}", err=True)
        raise typer.Exit(code=2) from e

    results = linter.lint_paths(paths, jobs=jobs or settings.jobs, fix=fix)

    if fix:
        for result in results:
            if result.fixed_source is not None:
                Path(result.file_path).write_text(result.fixed_source, encoding="utf-8", newline="")

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    else:
        _render_stylish(results)

    failed = any(r.error is not None or r.error_count for r in results)
    raise typer.Exit(code=1 if failed else 0)


@app.command()
def rules():
    """List available rules."""
    table = Table(title="signal-patterns rules")
    table.add_column("Rule", no_wrap=True)
    table.add_column("Type")
    table.add_column("Fixable")
    table.add_column("Recommended")
    table.add_column("Description")

    for rule_id, rule in RULES.items():
        meta = rule.meta
        table.add_row(
            rule_id,
            meta.type,
            "yes" if meta.fixable else "",
            "yes" if meta.recommended else "",
            meta.description,
        )

    Console().print(table)


@app.command()
def presets():
    """List presets and their severities."""
    table = Table(title="signal-patterns presets")
    table.add_column("Preset", no_wrap=True)
    for rule_id in RULES:
        table.add_column(rule_id)

    for name, preset in PRESETS.items():
        table.add_row(name, *(preset.rules.get(rule_id, Severity.OFF).value for rule_id in RULES))

    Console().print(table)


if __name__ == "__main__":
    app()
