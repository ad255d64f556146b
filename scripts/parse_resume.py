#!/usr/bin/env python3
"""
Command-line interface for resume text <-> YAML conversion.

Subcommands:
- parse: Convert resume text to structured YAML with roundtrip validation
- reconstruct: Convert structured YAML back to canonical resume text
- preview: Render a resume as markdown in the terminal
- sections: Show the coarse section split of a resume
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from resume_aligner.contexts.editing import (
    parse_resume,
    parse_resume_file,
    reconstruct_resume,
    reconstruct_resume_file,
)
from resume_aligner.contexts.editing.defaults import DEFAULT_RESUME
from resume_aligner.contexts.editing.editor import suggest_sections
from resume_aligner.contexts.editing.markdown_formatter import format_resume_markdown
from resume_aligner.contexts.editing.sectioning import split_sections
from resume_aligner.utils.text_processing import truncate_display

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Convert resume text to structured YAML and back",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def read_resume_text(resume_file: Path) -> str:
    """Read a resume file, or return the template resume when no file is given."""
    if resume_file is None:
        typer.secho("No resume file given; using the template resume", fg=typer.colors.YELLOW, err=True)
        return DEFAULT_RESUME
    return resume_file.read_text(encoding="utf-8")


def print_conversion_result(result) -> None:
    """Helper to print a ConversionResult."""
    if result.structure_matches is not None:
        status = "✓" if result.structure_matches else "✗"
        typer.echo(f"Structure roundtrip: {status}")
    if result.text_diffs is not None:
        typer.echo(f"Text diffs vs canonical form: {result.text_diffs}")
    typer.echo(f"Time: {result.time_s:.2f}s")

    if result.success:
        typer.secho(f"\n✓ Success! Output saved to: {result.output_path}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"\n✗ Error: {result.error}", fg=typer.colors.RED, err=True)
        typer.echo(f"Logs saved to: {result.log_dir}")


@app.command("parse")
def parse_command(
    resume_file: Path = typer.Argument(
        ...,
        help="Path to resume text file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output YAML path (default: alongside input with .yaml extension)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        "-s",
        help="Fail when the parsed structure does not survive a roundtrip",
    ),
):
    """
    Parse resume text into structured YAML.

    Examples:\n

        $ parse_resume.py parse resume.txt                 # Writes resume.yaml

        $ parse_resume.py parse resume.txt -o out.yaml     # Custom output path

        $ parse_resume.py parse resume.txt --strict        # Fail on roundtrip mismatch
    """
    typer.secho(f"\nParsing: {resume_file.name}", fg=typer.colors.BLUE, bold=True)

    result = parse_resume_file(resume_file, output_path=output, strict=strict)
    print_conversion_result(result)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("reconstruct")
def reconstruct_command(
    yaml_file: Path = typer.Argument(
        ...,
        help="Path to structured .yaml file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output text path (default: alongside input with .txt extension)",
    ),
):
    """
    Reconstruct canonical resume text from structured YAML.

    Examples:\n

        $ parse_resume.py reconstruct resume.yaml                  # Writes resume.txt

        $ parse_resume.py reconstruct resume.yaml -o edited.txt    # Custom output path
    """
    if yaml_file.suffix != ".yaml":
        typer.secho(f"Error: File must have .yaml extension: {yaml_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nReconstructing: {yaml_file.name}", fg=typer.colors.BLUE, bold=True)

    result = reconstruct_resume_file(yaml_file, output_path=output)
    print_conversion_result(result)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("preview")
def preview_command(
    resume_file: Path = typer.Argument(
        None,
        help="Path to resume text file (default: template resume)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    canonical: bool = typer.Option(
        False,
        "--canonical",
        "-c",
        help="Print canonical resume text instead of markdown",
    ),
):
    """
    Preview a parsed resume.

    Examples:\n

        $ parse_resume.py preview resume.txt        # Markdown preview

        $ parse_resume.py preview resume.txt -c     # Canonical text

        $ parse_resume.py preview                   # Preview the template resume
    """
    document = parse_resume(read_resume_text(resume_file))

    if canonical:
        typer.echo(reconstruct_resume(document), nl=False)
    else:
        typer.echo(format_resume_markdown(document), nl=False)


@app.command("sections")
def sections_command(
    resume_file: Path = typer.Argument(
        None,
        help="Path to resume text file (default: template resume)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    List the sections of a resume without parsing their contents.

    Example:\n

        $ parse_resume.py sections resume.txt
    """
    text = read_resume_text(resume_file)
    sections = split_sections(text)

    if not sections:
        typer.secho("No content found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nSections ({len(sections)}):", fg=typer.colors.BLUE, bold=True)
    for section in sections:
        lines = section.content.count("\n") + 1 if section.content else 0
        first_line = section.content.split("\n", 1)[0] if section.content else ""
        typer.echo(f"  • {section.title} ({lines} lines)  {truncate_display(first_line, 60)}")

    suggestions = suggest_sections(parse_resume(text))
    if suggestions:
        typer.echo(f"\nNot yet included: {', '.join(title for title, _ in suggestions)}")


if __name__ == "__main__":
    app()
