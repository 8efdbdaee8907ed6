# wikiexclude/cli/aliases.py
from __future__ import annotations

import json
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from wikiexclude.cli.generic import load_aliases_or_exit

aliases_app = typer.Typer(add_completion=False, no_args_is_help=True)


@aliases_app.command("resolve")
def aliases_resolve(
    name: str = typer.Argument(..., help="Special page name, e.g. Recent_changes/50"),
    api_url: Optional[str] = typer.Option(
        None, help="Load aliases from this api.php (default: built-in)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """
    Show the canonical name a special page alias resolves to.
    """
    table = load_aliases_or_exit(api_url)
    resolved = table.resolve_alias(name.replace(" ", "_"))

    if json_out:
        print(
            json.dumps(
                {
                    "name": name,
                    "canonical": resolved.canonical_name,
                    "subpage": resolved.subpage,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if resolved.canonical_name is None:
        print(Panel.fit(f"[bold red]Unknown special page:[/bold red] {escape(repr(name))}"))
        raise typer.Exit(code=1)

    text = f"[bold]Special:{resolved.canonical_name}[/bold]"
    if resolved.subpage:
        text += f"\nsubpage: {resolved.subpage}"
    print(Panel.fit(text))


@aliases_app.command("list")
def aliases_list(
    api_url: Optional[str] = typer.Option(
        None, help="Load aliases from this api.php (default: built-in)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    List known special pages and their aliases.
    """
    known = load_aliases_or_exit(api_url)
    rows = known.items()

    if json_out:
        print(json.dumps(dict(rows), indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Special page aliases ({api_url or 'built-in'})")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Canonical name")
    table.add_column("Aliases")
    for index, (canonical, aliases) in enumerate(rows, start=1):
        table.add_row(str(index), escape(canonical), escape(", ".join(aliases)))
    if not rows:
        table.caption = "[bold yellow]No special pages found.[/bold yellow]"
    print(table)
