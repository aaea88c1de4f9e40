"""Typer CLI application."""

from pathlib import Path
from typing import Optional
import typer

from erdfix.cdm.registry import NullCdmRegistry
from erdfix.config.logging import setup_logging
from erdfix.ir.results import ValidationResult
from erdfix.utils.erd_io import load_erd_text, save_erd_text, save_result_json
from erdfix.validation.orchestrator import ValidationOrchestrator

app = typer.Typer(help="erdfix: validate and auto-fix Mermaid ERD diagrams")


def _read_erd(erd_file: Path) -> str:
    try:
        return load_erd_text(erd_file)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


def _print_result(result: ValidationResult) -> None:
    for warning in result.warnings:
        fixable = " (auto-fixable)" if warning.auto_fixable else ""
        typer.echo(f"[{warning.severity}] {warning.id} {warning.type}: {warning.message}{fixable}")
    summary = result.summary
    typer.echo(
        f"{summary.entity_count} entities, {summary.relationship_count} relationships: "
        f"{summary.error_count} errors, {summary.warning_count} warnings, {summary.info_count} info"
    )


@app.command()
def validate(
    erd_file: Path,
    fix: bool = typer.Option(False, "--fix", help="Apply every available automatic fix"),
    out: Optional[Path] = typer.Option(None, "--out", help="Where to write the corrected ERD"),
    report: Optional[Path] = typer.Option(None, "--report", help="Where to write the JSON result"),
    no_cdm: bool = typer.Option(False, "--no-cdm", help="Disable Common Data Model detection"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug diagnostics to stderr"),
):
    """
    Validate a Mermaid ERD file.

    Exits with status 1 when the diagram has error-level findings.
    """
    setup_logging(verbose=verbose)
    text = _read_erd(erd_file)

    orchestrator = ValidationOrchestrator(registry=NullCdmRegistry() if no_cdm else None)
    result = orchestrator.validate(text, auto_fix=fix)

    if not result.success:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)

    _print_result(result)

    if report:
        save_result_json(result, report)
        typer.echo(f"Report written to {report}")

    if fix:
        if result.corrected_erd is None:
            typer.echo("No fixes applied")
        elif out:
            save_erd_text(result.corrected_erd, out)
            typer.echo(f"✓ Applied {result.summary.fixes_applied} fixes; corrected ERD written to {out}")
        else:
            typer.echo(result.corrected_erd)

    if not result.summary.is_valid:
        raise typer.Exit(1)


@app.command()
def fix(
    erd_file: Path,
    warning_id: str,
    out: Optional[Path] = typer.Option(None, "--out", help="Where to write the fixed ERD"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug diagnostics to stderr"),
):
    """
    Apply the fix for one warning, identified by its id.
    """
    setup_logging(verbose=verbose)
    text = _read_erd(erd_file)

    result = ValidationOrchestrator().fix_by_id(text, warning_id)
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)

    if out:
        save_erd_text(result.data, out)
        typer.echo(f"✓ {result.message}; ERD written to {out}")
    else:
        typer.echo(result.data)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
