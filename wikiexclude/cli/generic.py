# wikiexclude/cli/generic.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from wikiexclude import config
from wikiexclude.datatypes import ExclusionConfig
from wikiexclude.errors import AliasFetchError, ConfigFileError, ConfigurationError
from wikiexclude.evaluator import ExclusionEvaluator
from wikiexclude.request import QueryRequest, title_from_url
from wikiexclude.settings import load_exclusion_config
from wikiexclude.special_pages import (
    AliasTable,
    default_alias_table,
    fetch_special_page_aliases,
)
from wikiexclude.title import TitleParser
from wikiexclude.utils import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Check which wiki requests a page-level feature is excluded from.
    """
    configure_logging(verbose)


def load_config_or_exit(path: Path) -> ExclusionConfig:
    try:
        return load_exclusion_config(path)
    except ConfigFileError as exc:
        print(Panel.fit(f"[bold red]Bad config:[/bold red] {escape(str(exc))}"))
        raise typer.Exit(code=1)


def load_aliases_or_exit(api_url: Optional[str]) -> AliasTable:
    """Built-in alias table unless an API URL is given."""
    if not api_url:
        return default_alias_table()
    try:
        return fetch_special_page_aliases(api_url)
    except AliasFetchError as exc:
        print(Panel.fit(f"[bold red]Alias lookup failed:[/bold red] {escape(str(exc))}"))
        raise typer.Exit(code=3)


@app.command()
def check(
    url: str = typer.Argument(
        ..., help="Request URL, e.g. https://en.wikipedia.org/wiki/Special:Search"
    ),
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="JSON file with the exclusion rules"
    ),
    main_page: str = typer.Option(
        config.DEFAULT_MAIN_PAGE, help="Title of the wiki's main page"
    ),
    article_path: str = typer.Option(
        config.DEFAULT_ARTICLE_PATH, help="Path prefix of article URLs"
    ),
    api_url: Optional[str] = typer.Option(
        None, help="Load special page aliases from this api.php (default: built-in)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of a panel"),
) -> None:
    """
    Decide whether the feature is disabled for a single request URL.
    """
    cfg = load_config_or_exit(config_path)
    resolver = load_aliases_or_exit(api_url)

    parser = TitleParser(main_page=main_page)
    page = title_from_url(url, parser, article_path=article_path)
    request = QueryRequest.from_url(url)

    evaluator = ExclusionEvaluator(resolver, parser)
    try:
        disabled = evaluator.should_disable(cfg, request, page)
    except ConfigurationError as exc:
        print(Panel.fit(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}"))
        raise typer.Exit(code=2)

    if json_out:
        result = {
            "url": url,
            "page": page.prefixed_text if page is not None else None,
            "disabled": disabled,
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return

    page_text = page.prefixed_text if page is not None else "(no page)"
    verdict = (
        "[bold red]disabled[/bold red]" if disabled else "[bold green]enabled[/bold green]"
    )
    print(Panel.fit(f"[bold]{escape(page_text)}[/bold]\n{escape(url)}\nFeature is {verdict}"))


@app.command()
def validate(
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="JSON file with the exclusion rules"
    ),
) -> None:
    """
    Compile every query pattern up front and show the parsed rules.
    """
    cfg = load_config_or_exit(config_path)
    try:
        cfg.validate()
    except ConfigurationError as exc:
        print(Panel.fit(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}"))
        raise typer.Exit(code=2)

    table = Table(title=f"Exclusion rules in {config_path}")
    table.add_column("Rule", style="bold")
    table.add_column("Value")
    table.add_row("mainpage", str(cfg.main_page_excluded))
    table.add_row(
        "namespaces", ", ".join(str(ns) for ns in sorted(cfg.excluded_namespaces))
    )
    for param, pattern in cfg.excluded_query_patterns.items():
        table.add_row(escape(f"querystring[{param}]"), escape(pattern))
    table.add_row("pagetitles", escape("\n".join(cfg.excluded_page_titles)))

    print(table)
    print("[bold green]Config OK[/bold green]")
