"""Typer CLI application."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from oiml_ir.config.logging import setup_logging
from oiml_ir.config.settings import get_settings
from oiml_ir.ir.union import ir_json_schema
from oiml_ir.transform.dispatch import transform_document
from oiml_ir.transform.errors import IntentLoadError, IRTransformError
from oiml_ir.utils.ir_io import load_intent_document, load_ir_from_json, save_ir_to_json

app = typer.Typer(help="OIML IR: turn intent documents into validated IR")


def _echo_diagnostic(diagnostic) -> None:
    typer.echo(
        f"  {diagnostic.severity.upper():7} {diagnostic.code} "
        f"{diagnostic.path}: {diagnostic.message}",
        err=diagnostic.severity == "error",
    )


@app.command()
def transform(
    intent_file: Path,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output path for the IR JSON list"),
    project_id: Optional[str] = typer.Option(None, "--project-id", help="Project identifier"),
    intent_id: Optional[str] = typer.Option(None, "--intent-id", help="Provenance intent id"),
    entity: Optional[List[str]] = typer.Option(
        None, "--entity", "-e", help="Existing entity name (repeatable); enables existence checks"
    ),
    model: Optional[str] = typer.Option(None, "--model", help="AI model that authored the intents"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    """
    Transform an intent document (YAML or JSON) into IR.

    Args:
        intent_file: Path to the intent document
        out: Output path, defaults to <output_dir>/<intent file stem>.ir.json
    """
    setup_logging(quiet=quiet or None)
    settings = get_settings()

    typer.echo(f"Reading intents from {intent_file}")
    try:
        document = load_intent_document(intent_file)
        result = transform_document(
            document,
            project_id=project_id,
            intent_id=intent_id,
            existing_entities=entity or None,
            model=model,
        )
    except IntentLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except IRTransformError as e:
        typer.echo(f"Error: {e}", err=True)
        for diagnostic in e.diagnostics:
            _echo_diagnostic(diagnostic)
        raise typer.Exit(1)

    for ir in result.irs:
        typer.echo(f"{ir.kind}: {len(ir.diagnostics)} diagnostic(s)")
        for diagnostic in ir.diagnostics:
            _echo_diagnostic(diagnostic)
    for failure in result.failures:
        typer.echo(f"Intent #{failure.index} ({failure.kind}) failed", err=True)
        for diagnostic in failure.diagnostics:
            _echo_diagnostic(diagnostic)

    out_path = Path(out) if out else settings.output_dir / f"{intent_file.stem}.ir.json"
    typer.echo(f"Writing IR to {out_path}")
    save_ir_to_json(result.irs, out_path)

    if not result.ok:
        typer.echo(f"✗ {len(result.failures)} intent(s) failed", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Complete! {len(result.irs)} IR envelope(s) written to {out_path}")


@app.command("validate-ir")
def validate_ir(
    ir_file: Path,
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    """
    Validate an IR JSON file (one envelope or a list) against the IR schema.

    Args:
        ir_file: Path to the IR JSON file
    """
    setup_logging(quiet=quiet or None)

    typer.echo(f"Loading IR from {ir_file}")
    try:
        loaded = load_ir_from_json(ir_file)
    except ValidationError as e:
        typer.echo(f"✗ Invalid IR: {e.error_count()} issue(s)", err=True)
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            typer.echo(f"  {location}: {err['msg']}", err=True)
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    irs = loaded if isinstance(loaded, list) else [loaded]
    for ir in irs:
        typer.echo(f"  {ir.kind} (irVersion {ir.ir_version})")
    typer.echo(f"✓ Valid: {len(irs)} IR envelope(s)")


@app.command("export-schema")
def export_schema(out: Path):
    """
    Write the JSON Schema of the IR union.

    Args:
        out: Output path for the JSON Schema
    """
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(ir_json_schema(), indent=2) + "\n", encoding="utf-8")
    typer.echo(f"✓ Schema written to {out}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
