"""
Command-line entry point.

    profile-graph scrape https://example.com https://example.org
    profile-graph graph --title "Senior Product Manager" --company Acme --location NYC
"""

import argparse
import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from profile_graph.agents.profile_research import research_profile, scrape_urls
from profile_graph.models.config import AppSettings
from profile_graph.models.knowledge_graph import (
    ATTRIBUTE_FIELDS,
    TIER_FIELDS,
    KnowledgeGraph,
)
from profile_graph.models.profile import ProfileInput
from profile_graph.models.scrape import ScrapeResult
from profile_graph.utils.logger import configure_logging
from profile_graph.utils.text_fetcher import TextFetcherError

console = Console()
# Status and error messages; stdout is left to the rendered output
err_console = Console(stderr=True)

LEVEL_STYLES = {"Low": "red", "Medium": "yellow", "High": "green"}


def output_filename(title: str) -> str:
    """Download-style file name for a graph, e.g. knowledge-graph-senior-product-manager.json."""
    slug = re.sub(r"\s+", "-", title).lower()
    return f"knowledge-graph-{slug}.json"


def render_scrape_results(results: list[ScrapeResult]) -> None:
    """Print scrape results as a table."""
    table = Table(title="Scraping Results", show_lines=True)
    table.add_column("URL", overflow="fold")
    table.add_column("Status")
    table.add_column("Title")
    table.add_column("Content", overflow="fold")

    for result in results:
        if result.success:
            table.add_row(
                result.url,
                "[green]Success[/green]",
                result.title or "",
                result.text_content or "",
            )
        else:
            table.add_row(result.url, "[red]Failed[/red]", "", result.error or "")

    console.print(table)


def render_knowledge_graph(graph: KnowledgeGraph, profile: ProfileInput) -> None:
    """Print a knowledge graph as tables."""
    console.print(
        Panel(
            f"{profile.title} at {profile.company}, {profile.location}",
            title=f"Knowledge Graph: {profile.title}",
        )
    )

    for heading, tiers in (
        ("Tools Used", graph.tools_used),
        ("Biggest Pain Points", graph.biggest_pain_points),
    ):
        table = Table(title=heading)
        for tier_label in TIER_FIELDS.values():
            table.add_column(tier_label)
        columns = [getattr(tiers, tier_field) for tier_field in TIER_FIELDS]
        for row in range(max(len(column) for column in columns)):
            table.add_row(*(column[row] if row < len(column) else "" for column in columns))
        console.print(table)

    attributes = Table(title="Attribute Ranges")
    attributes.add_column("Attribute")
    attributes.add_column("Level")
    for attribute_field, attribute_label in ATTRIBUTE_FIELDS.items():
        level = getattr(graph.attribute_ranges, attribute_field)
        attributes.add_row(attribute_label, f"[{LEVEL_STYLES[level]}]{level}[/]")
    console.print(attributes)

    console.print(
        Panel(graph.education_level_and_learning, title="Education Level & Learning Approach")
    )


def _load_settings(args: argparse.Namespace) -> AppSettings:
    if args.config:
        return AppSettings.load(args.config)
    return AppSettings.from_env(args.env_file)


def run_scrape(args: argparse.Namespace, settings: AppSettings) -> int:
    try:
        results = asyncio.run(scrape_urls(args.urls, settings))
    except TextFetcherError as e:
        err_console.print(f"[red][X] {e}[/red]")
        return 1

    if args.json:
        print(json.dumps({"results": [r.model_dump(exclude_none=True) for r in results]}, indent=2))
    else:
        render_scrape_results(results)
    return 0


def run_graph(args: argparse.Namespace, settings: AppSettings) -> int:
    try:
        profile = ProfileInput(
            title=args.title,
            location=args.location,
            company=args.company,
            age=args.age,
            additional_context=args.context,
        )
    except ValidationError as e:
        err_console.print("[red][X] Invalid profile:[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            err_console.print(f"   {field}: {error['msg']}")
        return 2

    try:
        graph = asyncio.run(
            research_profile(profile, settings, skip_scraping=args.no_scrape)
        )
    except TextFetcherError as e:
        err_console.print(f"[red][X] {e}[/red]")
        return 1

    output_path: Optional[Path] = args.output
    if args.save and output_path is None:
        output_path = Path(output_filename(profile.title))
    if output_path is not None:
        output_path.write_text(graph.to_json(), encoding="utf-8")
        err_console.print(f"[green][+] Saved knowledge graph to {output_path}[/green]")

    if args.json:
        print(json.dumps({"knowledgeGraph": graph.model_dump(by_alias=True)}, indent=2))
    elif output_path is None:
        render_knowledge_graph(graph, profile)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profile-graph",
        description="Scrape web pages and generate role knowledge graphs.",
    )
    parser.add_argument("--config", type=Path, help="JSON settings file")
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help=".env file (default: .env)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape = subparsers.add_parser("scrape", help="Scrape the visible text of URLs")
    scrape.add_argument("urls", nargs="+", help="URLs to scrape")
    scrape.add_argument("--json", action="store_true", help="Print results as JSON")

    graph = subparsers.add_parser("graph", help="Generate a knowledge graph for a profile")
    graph.add_argument("--title", required=True, help='Job title, e.g. "Senior Product Manager"')
    graph.add_argument("--company", required=True, help="Company name")
    graph.add_argument("--location", required=True, help='Location, e.g. "San Francisco, CA"')
    graph.add_argument("--age", type=int, help="Age (optional)")
    graph.add_argument(
        "--context",
        action="append",
        help="Additional context; repeat for several entries",
    )
    graph.add_argument("--no-scrape", action="store_true", help="Skip scraping source pages")
    graph.add_argument("--json", action="store_true", help="Print the graph as JSON")
    output = graph.add_mutually_exclusive_group()
    output.add_argument("--output", type=Path, help="Write the graph JSON to this file")
    output.add_argument(
        "--save",
        action="store_true",
        help="Write the graph JSON to knowledge-graph-<title>.json",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Defaults first so settings loading already logs to file and stderr
    configure_logging()
    try:
        settings = _load_settings(args)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red][X] {e}[/red]")
        return 2

    configure_logging(log_file=settings.log_file, log_level=settings.log_level)

    if args.command == "scrape":
        return run_scrape(args, settings)
    return run_graph(args, settings)


if __name__ == "__main__":
    sys.exit(main())
