# wikiexclude/special_pages.py
from __future__ import annotations

import logging
from typing import Iterable, Mapping

import requests

from wikiexclude import config
from wikiexclude.datatypes import ResolvedAlias
from wikiexclude.errors import AliasFetchError

logger = logging.getLogger(__name__)


def _fold(name: str) -> str:
    """Alias lookups ignore case and treat spaces as underscores."""
    return name.replace(" ", "_").casefold()


class AliasTable:
    """
    Static special page alias table (canonical name -> aliases).
    Implements PageNameResolver.
    """

    def __init__(self, aliases: Mapping[str, Iterable[str]] | None = None) -> None:
        self._canonical: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}
        for canonical, names in (aliases or {}).items():
            self.add(canonical, names)

    def add(self, canonical: str, aliases: Iterable[str] = ()) -> None:
        canonical = canonical.replace(" ", "_")
        known = self._aliases.setdefault(canonical, [])
        # the canonical name always resolves to itself
        for name in (canonical, *aliases):
            # first registration wins, like the wiki's own alias list
            self._canonical.setdefault(_fold(name), canonical)
            if name != canonical and name not in known:
                known.append(name)

    def resolve_alias(self, raw_key: str) -> ResolvedAlias:
        """
        "Recent_changes" -> ("RecentChanges", None)
        "Contribs/Example" -> ("Contributions", "Example")
        Unknown names -> (None, subpage)
        """
        name, sep, subpage = raw_key.partition("/")
        canonical = self._canonical.get(_fold(name))
        return ResolvedAlias(canonical_name=canonical, subpage=subpage if sep else None)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(name, list(aliases)) for name, aliases in self._aliases.items()]

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _fold(name) in self._canonical


def default_alias_table() -> AliasTable:
    return AliasTable(config.DEFAULT_ALIASES)


def fetch_special_page_aliases(
    api_url: str = config.DEFAULT_API_URL, *, timeout: float = config.DEFAULT_TIMEOUT
) -> AliasTable:
    """
    Load the wiki's special page aliases through the Action API:
    action=query&meta=siteinfo&siprop=specialpagealiases

    Sample: https://en.wikipedia.org/w/api.php?action=query&meta=siteinfo&siprop=specialpagealiases&format=json&formatversion=2
    """
    headers = {
        "User-Agent": config.DEFAULT_UA,
        "Accept": "application/json",
    }
    params = {
        "action": "query",
        "meta": "siteinfo",
        "siprop": "specialpagealiases",
        "format": "json",
        "formatversion": "2",
    }

    try:
        resp = requests.get(api_url, headers=headers, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise AliasFetchError(
            f"Failed to fetch special page aliases from {api_url}: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise AliasFetchError(f"Unexpected response from {api_url}: {type(data).__name__}")

    if "error" in data:
        error = data["error"]
        if isinstance(error, dict):
            info = error.get("info") or error.get("code") or "unknown"
        else:
            info = str(error)
        raise AliasFetchError(f"API error from {api_url}: {info}")

    entries = (data.get("query") or {}).get("specialpagealiases") or []

    table = AliasTable()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        # Fields per API docs: realname, aliases[]
        realname = entry.get("realname")
        if not isinstance(realname, str) or not realname:
            continue
        aliases = [a for a in entry.get("aliases") or [] if isinstance(a, str)]
        table.add(realname, aliases)

    logger.debug("Loaded %d special pages from %s", len(table), api_url)
    return table
