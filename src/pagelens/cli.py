"""Command-line interface for PageLens."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
import structlog
from bs4 import BeautifulSoup, Tag
from rich.console import Console
from rich.table import Table

from pagelens import __version__
from pagelens.config import Config, load_config
from pagelens.metadata import MetadataExtractor, SchemaPathResolver, collect_meta_tags, collect_schema_org_data
from pagelens.observability import configure_logging
from pagelens.scoring import ContentScorer

console = Console()
logger = structlog.get_logger(__name__)

DEFAULT_CANDIDATES = "article, main, section, div, td"


def _load_document(path: str) -> BeautifulSoup:
    html = Path(path).read_text(encoding="utf-8", errors="replace")
    return BeautifulSoup(html, "html.parser")


def _describe(element: Tag) -> str:
    """Short human label such as ``div#main.post-body``."""
    label = element.name or "?"
    element_id = element.get("id")
    if element_id:
        label += f"#{element_id}"
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    label += "".join(f".{name}" for name in classes)
    return label


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """PageLens - page metadata extraction and main-content scoring."""
    ctx.ensure_object(dict)
    settings: Config = load_config(Path(config) if config else None)
    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)
    ctx.obj["config"] = settings


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--url", default=None, help="Location the document was loaded from")
@click.pass_context
def metadata(ctx: click.Context, html_file: str, url: Optional[str]) -> None:
    """Extract page metadata from HTML_FILE and print it as JSON."""
    settings: Config = ctx.obj["config"]
    structlog.contextvars.bind_contextvars(document=html_file)
    try:
        doc = _load_document(html_file)
        extractor = MetadataExtractor(SchemaPathResolver(settings.resolver))
        result = extractor.extract(doc, collect_schema_org_data(doc), collect_meta_tags(doc), url=url)
        logger.info("Metadata extracted", title=result.title, domain=result.domain)
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    finally:
        structlog.contextvars.unbind_contextvars("document")


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--selector", default=DEFAULT_CANDIDATES, show_default=True, help="CSS selector for candidates")
@click.option("--min-score", type=float, default=None, help="Threshold the best candidate must exceed")
@click.option("--top", default=10, show_default=True, help="Number of candidates to list")
@click.pass_context
def score(ctx: click.Context, html_file: str, selector: str, min_score: Optional[float], top: int) -> None:
    """Score content candidates in HTML_FILE and report the best one."""
    settings: Config = ctx.obj["config"]
    structlog.contextvars.bind_contextvars(document=html_file)
    try:
        doc = _load_document(html_file)
        candidates = doc.select(selector)
        scorer = ContentScorer(settings.scoring)

        scored = sorted(scorer.score_candidates(candidates), key=lambda item: item.score, reverse=True)
        table = Table(title=f"Content candidates ({len(candidates)})")
        table.add_column("Score", justify="right", style="cyan")
        table.add_column("Element", style="magenta")
        table.add_column("Text", style="green")
        for item in scored[:top]:
            snippet = " ".join(item.element.get_text().split())[:60]
            table.add_row(f"{item.score:.1f}", _describe(item.element), snippet)
        console.print(table)

        best = scorer.find_best_element(candidates, min_score=min_score)
        if best is None:
            console.print("[yellow]No candidate cleared the score threshold[/yellow]")
            ctx.exit(1)
        console.print(f"[green]Best candidate:[/green] {_describe(best)}")
    finally:
        structlog.contextvars.unbind_contextvars("document")


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
