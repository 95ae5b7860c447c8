"""
Command-line interface for the keyword density toolkit.

Provides analyze, optimize and validate commands for text loaded from
URLs, Word documents, HTML, text or Markdown files.
"""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .analyzer import DensityAnalyzer
from .config import DEFAULT_LANGUAGE, PRIMARY_KEYWORDS, SUPPORTED_LANGUAGES, DensityConfig
from .content_sources import ContentExtractionError, load_content
from .keyword_loader import KeywordLoadError, deduplicate_keywords, load_keywords
from .models import AnalysisReport, DensityRange, Keyword, ValidationResult
from .optimizer import DensityOptimizer
from .page_config import generate_keyword_list
from .validator import DensityValidator

console = Console()

_common_keyword_options = [
    click.option(
        "--keyword",
        "-k",
        "keywords",
        multiple=True,
        help="Keyword to track. Repeat for several keywords.",
    ),
    click.option(
        "--keywords-file",
        type=click.Path(exists=True, path_type=Path),
        help="Path to keyword file (CSV or Excel).",
    ),
    click.option(
        "--page-type",
        type=str,
        help="Track the configured keyword plan of a page type.",
    ),
    click.option(
        "--language",
        type=click.Choice(SUPPORTED_LANGUAGES),
        default=DEFAULT_LANGUAGE,
        show_default=True,
        help="Phrase variant of the page keyword plan.",
    ),
    click.option("--min", "min_density", type=float, default=3.0, help="Minimum density in percent (default: 3)."),
    click.option("--max", "max_density", type=float, default=5.0, help="Maximum density in percent (default: 5)."),
    click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON output."),
    click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output."),
]


def keyword_options(func):
    """Attach the shared keyword and output options to a command."""
    for option in reversed(_common_keyword_options):
        func = option(func)
    return func


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _resolve_keywords(
    keywords: tuple[str, ...],
    keywords_file: Optional[Path],
    page_type: Optional[str],
    language: str = DEFAULT_LANGUAGE,
) -> list:
    """Collect tracked keywords from flags, a keyword file or a page plan."""
    collected: list = list(keywords)
    if keywords_file:
        collected.extend(load_keywords(keywords_file))
    if page_type:
        collected.extend(generate_keyword_list(page_type, language))
    if any(isinstance(k, Keyword) for k in collected):
        collected = deduplicate_keywords(
            [k if isinstance(k, Keyword) else Keyword(phrase=k) for k in collected]
        )
    return collected


def _load_source(source: str, verbose: bool) -> str:
    with console.status("[bold green]Loading content..."):
        content = load_content(source)
    if verbose:
        console.print(f"  Loaded content from: {source}")
    return content


@click.group()
@click.version_option(package_name="keyword-density")
def main() -> None:
    """
    Keyword Density Toolkit - analyze, optimize and validate keyword density.

    Examples:

        keyword-density analyze page.html -k "usb device not recognized"

        keyword-density optimize draft.docx --page-type usb-not-recognized -o out.txt

        keyword-density validate landing.md --category usb-recognized
    """


@main.command()
@click.argument("source")
@keyword_options
def analyze(
    source: str,
    keywords: tuple[str, ...],
    keywords_file: Optional[Path],
    page_type: Optional[str],
    language: str,
    min_density: float,
    max_density: float,
    as_json: bool,
    verbose: bool,
) -> None:
    """Analyze keyword density of SOURCE (URL or file path)."""
    _setup_logging(verbose)
    try:
        tracked = _resolve_keywords(keywords, keywords_file, page_type, language)
        analyzer = DensityAnalyzer(tracked, DensityRange(min=min_density, max=max_density))
        content = _load_source(source, verbose)
        report = analyzer.analyze(content)
    except (ContentExtractionError, KeywordLoadError, ValueError) as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return

    console.print(Panel.fit(
        "[bold blue]Keyword Density Analysis[/bold blue]\n"
        f"Source: {escape(source)}",
        border_style="blue",
    ))
    _display_report(analyzer, report)


@main.command()
@click.argument("source")
@keyword_options
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the optimized text to this file instead of stdout.",
)
@click.option("--seed", type=int, help="Seed for insertion point selection.")
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Insert at most one phrase per keyword.",
)
def optimize(
    source: str,
    keywords: tuple[str, ...],
    keywords_file: Optional[Path],
    page_type: Optional[str],
    language: str,
    min_density: float,
    max_density: float,
    as_json: bool,
    verbose: bool,
    output: Optional[Path],
    seed: Optional[int],
    strict: bool,
) -> None:
    """Rewrite SOURCE so keyword densities move into range."""
    _setup_logging(verbose)
    try:
        tracked = _resolve_keywords(keywords, keywords_file, page_type, language)
        picker = random.Random(seed).choice if seed is not None else None
        target = DensityRange(min=min_density, max=max_density)
        config = DensityConfig.strict(target_density=target) if strict else DensityConfig(target_density=target)
        optimizer = DensityOptimizer.from_config(config, tracked, picker=picker)
        content = _load_source(source, verbose)
        result = optimizer.optimize(content)
    except (ContentExtractionError, KeywordLoadError, ValueError) as e:
        _fail(e)
        return

    if output:
        output.write_text(result.content, encoding="utf-8")

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    _display_report(optimizer, result.analysis)

    if result.changes:
        changes_table = Table(title="Changes", show_header=True)
        changes_table.add_column("Type", style="cyan")
        changes_table.add_column("Keyword", style="green")
        changes_table.add_column("Position", justify="right")
        changes_table.add_column("Text", style="yellow")
        for change in result.changes:
            text = change.text if change.text is not None else f"{change.original} -> {change.replacement}"
            changes_table.add_row(change.type.value, change.keyword, str(change.position), text.strip())
        console.print(changes_table)
    else:
        console.print("[dim]No changes were needed.[/dim]")

    if result.improvement:
        delta = result.improvement.score_improvement
        console.print(
            f"\n[bold]Score change:[/bold] {delta:+d} ({result.improvement.overall_improvement})"
        )

    if output:
        console.print(f"\n[bold green]Success![/bold green] Output saved to: {output}")
    else:
        console.print("\n[bold]Optimized text[/bold]")
        click.echo(result.content)


@main.command()
@click.argument("source")
@click.option(
    "--category",
    "-c",
    required=True,
    type=click.Choice(sorted(PRIMARY_KEYWORDS)),
    help="Content category whose primary keyword is checked.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON output.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def validate(source: str, category: str, as_json: bool, verbose: bool) -> None:
    """Check the primary keyword density of SOURCE against the 3-5% band."""
    _setup_logging(verbose)
    validator = DensityValidator()
    try:
        content = _load_source(source, verbose)
    except ContentExtractionError as e:
        _fail(e)
        return

    result = validator.validate(category, content)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _display_validation(validator, result)

    if not result.is_valid:
        sys.exit(2)


def _fail(error: Exception) -> None:
    """Print an error and exit with status 1."""
    if isinstance(error, ContentExtractionError):
        label = "Content extraction error"
    elif isinstance(error, KeywordLoadError):
        label = "Keyword loading error"
    else:
        label = "Configuration error"
    console.print(f"[red]{label}:[/red] {escape(str(error))}")
    sys.exit(1)


def _display_report(analyzer: DensityAnalyzer, report: AnalysisReport) -> None:
    """Display an analysis report as tables."""
    console.print(f"\n[cyan]Word count:[/cyan] {report.word_count}")

    table = Table(title="Keyword Density", show_header=True)
    table.add_column("Keyword", style="green")
    table.add_column("Count", justify="right")
    table.add_column("Density", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Recommendation", style="yellow")

    for kw in analyzer.target_keywords:
        target = analyzer.range_for(kw)
        rec = report.recommendation_for(kw)
        table.add_row(
            kw,
            str(report.keyword_counts.get(kw, 0)),
            f"{report.densities.get(kw, 0.0):.2f}%",
            f"{target.min:g}-{target.max:g}%",
            rec.action if rec else "-",
        )

    console.print(table)

    style = "green" if report.is_optimal else "yellow"
    console.print(f"[{style}]Overall score: {report.overall_score}/100[/{style}]")


def _display_validation(validator: DensityValidator, result: ValidationResult) -> None:
    """Display a validation verdict."""
    border = "green" if result.is_valid else "red"
    console.print(Panel(Text(validator.generate_report(result).rstrip()), border_style=border))


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
