"""Dependency audit commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from dep_auditor.commands.common import (
    get_state,
    load_manifest_or_exit,
    print_json_payload,
    resolve_mode,
)
from dep_auditor.core.classify import classify, classify_all
from dep_auditor.core.constants import OUTPUT_FORMATS
from dep_auditor.core.models import ConfigKind, Declaration, declaration_to_dict
from dep_auditor.core.parser import parse_declarations
from dep_auditor.core.report import removal_patch, summarize
from dep_auditor.exporters.json_export import report_payload, write_json
from dep_auditor.exporters.markdown import report_to_markdown, write_report_markdown
from dep_auditor.utils.formatting import (
    category_markup,
    format_confidence,
    format_recommendation,
    format_size,
    format_verdict,
)


def audit_command(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Path to the build script, e.g. build.gradle.kts"),
    evidence: Optional[Path] = typer.Option(
        None,
        "--evidence",
        help="File listing resolved group:artifact:version coordinates",
    ),
    mode: Optional[str] = typer.Option(None, help="Classification mode: auto|heuristic|evidence"),
    show_all: Optional[bool] = typer.Option(
        None,
        "--all/--flagged-only",
        help="Show every declaration or only those flagged for removal",
    ),
    output_format: Optional[str] = typer.Option(None, "--format", help="Output format: table|markdown|json"),
    output_file: Optional[Path] = typer.Option(None, help="Write the report to a file"),
    patch: bool = typer.Option(False, help="Print a diff that would delete flagged lines"),
) -> None:
    """Audit declared dependencies for likely unused or oversized entries."""
    state = get_state(ctx)
    report_cfg = state.config.get("report", {})

    fmt = output_format or report_cfg.get("output_format", "table")
    if fmt not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"--format must be one of: {', '.join(OUTPUT_FORMATS)}")
    if show_all is None:
        show_all = bool(report_cfg.get("show_all", True))

    lines = load_manifest_or_exit(manifest)
    chosen_mode, resolved, evidence_path = resolve_mode(state, mode, evidence)

    declarations = parse_declarations(lines)
    results = classify_all(
        declarations,
        evidence=resolved,
        families=state.families,
        size_table=state.size_table,
    )
    if state.verbose and not state.json_output:
        state.console.log(
            f"{len(declarations)} declarations in {manifest.name}, mode={chosen_mode}"
        )
        for result in results:
            state.console.log(format_verdict(result), markup=False)

    shown = results if show_all else [item for item in results if item.is_flagged_for_removal]
    evidence_name = str(evidence_path) if evidence_path else None
    json_report = state.json_output or fmt == "json"
    payload = report_payload(str(manifest), results, chosen_mode, evidence_name)
    if patch:
        payload["patch"] = removal_patch(lines, results, manifest.name)

    if output_file:
        if json_report:
            write_json(output_file, payload)
        else:
            write_report_markdown(
                output_file,
                report_to_markdown(
                    str(manifest), results, chosen_mode, evidence_name, flagged_only=not show_all
                ),
            )

    if json_report:
        print_json_payload(state, payload)
        return

    summary = summarize(results)

    if state.plain_output:
        typer.echo("line\tcoordinate\tkind\tusage\tconfidence\tsize_mb\tflagged\trecommendation")
        for result in shown:
            typer.echo(
                "\t".join(
                    [
                        str(result.line_number),
                        result.coordinate,
                        result.config_kind.value,
                        result.usage_category.value,
                        str(result.confidence),
                        f"{result.estimated_size_mb:.1f}",
                        "yes" if result.is_flagged_for_removal else "no",
                        result.recommendation.value if result.recommendation else "-",
                    ]
                )
            )
        typer.echo(f"total\t{summary['total']}")
        typer.echo(f"flagged\t{summary['flagged']}")
        typer.echo(f"savings_mb\t{summary['estimated_savings_mb']:.1f}")
        if patch:
            typer.echo(removal_patch(lines, results, manifest.name), nl=False)
        return

    if fmt == "markdown":
        state.console.print(
            report_to_markdown(
                str(manifest), results, chosen_mode, evidence_name, flagged_only=not show_all
            ),
            markup=False,
            highlight=False,
        )
    else:
        table = Table(title=f"Dependencies in {manifest.name} ({summary['total']} declared)")
        table.add_column("Line", justify="right")
        table.add_column("Dependency")
        table.add_column("Kind")
        table.add_column("Usage")
        table.add_column("Confidence", justify="right")
        table.add_column("Size", justify="right")
        if chosen_mode == "evidence":
            table.add_column("Recommendation")

        for result in shown:
            row = [
                str(result.line_number),
                result.coordinate,
                result.config_kind.value,
                category_markup(result.usage_category),
                format_confidence(result.confidence),
                format_size(result.estimated_size_mb),
            ]
            if chosen_mode == "evidence":
                row.append(format_recommendation(result.recommendation))
            table.add_row(*row)

        state.console.print(table)
        state.console.print(
            f"Flagged {summary['flagged']} of {summary['total']} declarations, "
            f"estimated savings {format_size(summary['estimated_savings_mb'])}"
        )

    if patch:
        diff = removal_patch(lines, results, manifest.name)
        state.console.print(diff or "Nothing to remove.", markup=False, highlight=False)
    if output_file:
        state.console.print(f"Report written to: {output_file}")


def declarations_command(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Path to the build script"),
) -> None:
    """List dependency declarations found in a manifest."""
    state = get_state(ctx)
    lines = load_manifest_or_exit(manifest)
    declarations = parse_declarations(lines)

    if state.json_output:
        print_json_payload(state, [declaration_to_dict(item) for item in declarations])
        return

    if state.plain_output:
        typer.echo("line\tkind\tgroup\tartifact\tversion")
        for item in declarations:
            typer.echo(
                f"{item.line_number}\t{item.config_kind.value}\t{item.group}\t{item.artifact}\t{item.version}"
            )
        return

    table = Table(title=f"Declarations in {manifest.name} ({len(declarations)} total)")
    table.add_column("Line", justify="right")
    table.add_column("Kind")
    table.add_column("Group")
    table.add_column("Artifact")
    table.add_column("Version")
    for item in declarations:
        table.add_row(str(item.line_number), item.config_kind.value, item.group, item.artifact, item.version)
    state.console.print(table)


def explain_command(
    ctx: typer.Context,
    coordinate: str = typer.Argument(..., help="Coordinate as group:artifact:version"),
    kind: str = typer.Option("implementation", help="Configuration kind of the declaration"),
    evidence: Optional[Path] = typer.Option(None, "--evidence", help="Resolved coordinates file"),
    mode: Optional[str] = typer.Option(None, help="Classification mode: auto|heuristic|evidence"),
) -> None:
    """Classify a single coordinate and show how it was scored."""
    state = get_state(ctx)

    parts = coordinate.split(":")
    if len(parts) != 3 or not all(parts):
        raise typer.BadParameter("coordinate must look like group:artifact:version")
    try:
        config_kind = ConfigKind(kind)
    except ValueError:
        choices = ", ".join(item.value for item in ConfigKind)
        raise typer.BadParameter(f"--kind must be one of: {choices}")

    chosen_mode, resolved, _ = resolve_mode(state, mode, evidence)
    declaration = Declaration(
        group=parts[0],
        artifact=parts[1],
        version=parts[2],
        line_number=0,
        raw_line=coordinate,
        config_kind=config_kind,
    )
    result = classify(declaration, resolved, state.families, state.size_table)

    if state.json_output:
        print_json_payload(state, result.to_dict())
        return

    if state.plain_output:
        for key, value in result.to_dict().items():
            typer.echo(f"{key}\t{value}")
        return

    table = Table(title=f"{coordinate} ({chosen_mode})")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Kind", config_kind.value)
    table.add_row("Usage", category_markup(result.usage_category))
    table.add_row("Confidence", format_confidence(result.confidence))
    table.add_row("Estimated size", format_size(result.estimated_size_mb))
    table.add_row("Flagged for removal", "yes" if result.is_flagged_for_removal else "no")
    if result.recommendation is not None:
        table.add_row("Recommendation", format_recommendation(result.recommendation))
    state.console.print(table)
