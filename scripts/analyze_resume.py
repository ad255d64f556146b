#!/usr/bin/env python3
"""
Command-line interface for resume vs job description alignment analysis.

Subcommands:
- analyze: Ask an LLM how well a resume aligns with a job description
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from resume_aligner.contexts.analysis import InvalidAnalysisError, analyze_document
from resume_aligner.contexts.analysis.logger import setup_analysis_logger
from resume_aligner.contexts.analysis.markdown_formatter import format_analysis_markdown
from resume_aligner.contexts.editing import document_from_yaml, parse_resume
from resume_aligner.contexts.editing.exceptions import InvalidDocumentStructureError
from resume_aligner.utils.config import load_config
from resume_aligner.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Analyze resume alignment with a job description",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("analyze")
def analyze_command(
    resume_file: Annotated[
        Path,
        typer.Argument(
            help="Resume text file, or a structured .yaml document",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    job_file: Annotated[
        Path,
        typer.Argument(
            help="Job description text file",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="LLM provider: gemini, openai or anthropic"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model name (default: provider default)"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML config override file"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Also save the analysis as JSON to this path"),
    ] = None,
):
    """
    Analyze how well a resume aligns with a job description.

    The resume is parsed and reconstructed first so the model always sees
    canonical resume text.

    Examples:\n

        $ analyze_resume.py analyze resume.txt job.txt

        $ analyze_resume.py analyze resume.yaml job.txt -p openai -m gpt-4o-mini

        $ analyze_resume.py analyze resume.txt job.txt -o analysis.json
    """
    try:
        config = load_config(config_file)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    provider_name = provider or config["llm"]["provider"]
    log_dir = LOGS_PATH / f"analyze_{now()}"
    setup_analysis_logger(log_dir, provider_name=provider_name)

    try:
        if resume_file.suffix == ".yaml":
            document = document_from_yaml(resume_file)
        else:
            document = parse_resume(resume_file.read_text(encoding="utf-8"))
        job_description = job_file.read_text(encoding="utf-8")
    except (OSError, InvalidDocumentStructureError, OmegaConfBaseException) as e:
        typer.secho(f"✗ Could not load input: {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"Logs saved to: {log_dir}")
        raise typer.Exit(code=1)

    typer.secho(f"\nAnalyzing: {resume_file.name} vs {job_file.name}", fg=typer.colors.BLUE, bold=True)

    try:
        analysis = analyze_document(
            document,
            job_description,
            provider=provider_name,
            model=model,
            config=config,
        )
    except (ValueError, ImportError, InvalidAnalysisError) as e:
        typer.secho(f"\n✗ Error: {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"Logs saved to: {log_dir}")
        raise typer.Exit(code=1)

    typer.echo("")
    typer.echo(format_analysis_markdown(analysis))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        typer.secho(f"✓ Analysis saved to: {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
