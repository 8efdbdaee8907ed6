# wikiexclude/title.py
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from wikiexclude import config

# MediaWiki's legal title characters, inverted
_ILLEGAL_RE = re.compile(r"[<>\[\]|{}\x00-\x1f\x7f]|%[0-9A-Fa-f]{2}")
_PREFIX_RE = re.compile(r"^(.+?)_*:_*(.*)$", flags=re.DOTALL)
_UNDERSCORES_RE = re.compile(r"_+")
_DIRECTION_MARKS_RE = re.compile("[\u200e\u200f\u202a-\u202e]")


def _canonical_namespace_names(namespaces: Mapping[str, int]) -> dict[int, str]:
    """First name registered for an id wins, aliases after it are ignored."""
    names: dict[int, str] = {config.NS_MAIN: ""}
    for name, ns in namespaces.items():
        names.setdefault(ns, name)
    return names


_NAMESPACE_NAMES = _canonical_namespace_names(config.DEFAULT_NAMESPACES)


@dataclass(frozen=True, slots=True, eq=False)
class PageTitle:
    """
    A normalized wiki page title.
    Special page titles compare case-insensitively, since special page
    names are resolved case-insensitively by the wiki.
    """

    namespace: int
    dbkey: str  # e.g. "Recent_changes"
    fragment: str | None = None
    main_page: bool = False
    has_subpages: bool = False

    @classmethod
    def make(
        cls, namespace: int, dbkey: str, fragment: str | None = None
    ) -> "PageTitle":
        """
        Build a title without validation or normalization beyond
        spaces -> underscores. Use TitleParser for user supplied text.
        """
        return cls(
            namespace=namespace,
            dbkey=dbkey.replace(" ", "_"),
            fragment=fragment,
            has_subpages=namespace in config.DEFAULT_SUBPAGE_NAMESPACES,
        )

    @property
    def text(self) -> str:
        return self.dbkey.replace("_", " ")

    @property
    def prefixed_text(self) -> str:
        prefix = _NAMESPACE_NAMES.get(self.namespace, "")
        return f"{prefix}:{self.text}" if prefix else self.text

    def is_main_page(self) -> bool:
        return self.main_page

    def is_special_page(self) -> bool:
        return self.namespace == config.NS_SPECIAL

    def root_title(self) -> "PageTitle":
        """
        Strip the fragment and, where subpages are enabled, every subpage level.
        "User:Example/Drafts/One#Intro" -> "User:Example"
        """
        dbkey = self.dbkey
        if self.has_subpages and "/" in dbkey:
            dbkey = dbkey.split("/", 1)[0] or dbkey
        if dbkey == self.dbkey and self.fragment is None:
            return self
        return PageTitle(
            namespace=self.namespace,
            dbkey=dbkey,
            main_page=self.main_page and dbkey == self.dbkey,
            has_subpages=self.has_subpages,
        )

    def _compare_key(self) -> tuple[int, str]:
        if self.is_special_page():
            return (self.namespace, self.dbkey.casefold())
        return (self.namespace, self.dbkey)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageTitle):
            return NotImplemented
        return self._compare_key() == other._compare_key()

    def __hash__(self) -> int:
        return hash(self._compare_key())

    def __str__(self) -> str:
        return self.prefixed_text


class TitleParser:
    """
    Turns user supplied title text into PageTitle objects, the way the
    wiki itself normalizes titles. Invalid text yields None.
    """

    def __init__(
        self,
        main_page: str = config.DEFAULT_MAIN_PAGE,
        namespaces: Mapping[str, int] = config.DEFAULT_NAMESPACES,
        subpage_namespaces: frozenset[int] = config.DEFAULT_SUBPAGE_NAMESPACES,
    ) -> None:
        self._namespaces = {
            name.replace("_", " ").casefold(): ns for name, ns in namespaces.items()
        }
        self._subpage_namespaces = frozenset(subpage_namespaces)
        parsed = self._parse(main_page)
        if parsed is None:
            raise ValueError(f"Invalid main page title: {main_page!r}")
        self._main_page: PageTitle = replace(parsed, fragment=None, main_page=True)

    @property
    def main_page(self) -> PageTitle:
        return self._main_page

    def parse(
        self, text: str | None, default_namespace: int = config.NS_MAIN
    ) -> Optional[PageTitle]:
        """
        Parse title text such as "special:recent changes" or "User:Example/Sub#History".
        Returns None for empty or malformed text.
        """
        title = self._parse(text, default_namespace)
        if title is not None and title == self._main_page:
            title = replace(title, main_page=True)
        return title

    def _parse(
        self, text: str | None, default_namespace: int = config.NS_MAIN
    ) -> Optional[PageTitle]:
        if not text:
            return None

        dbkey = _DIRECTION_MARKS_RE.sub("", text).replace(" ", "_")
        dbkey = _UNDERSCORES_RE.sub("_", dbkey).strip("_")

        fragment: str | None = None
        if "#" in dbkey:
            dbkey, raw_fragment = dbkey.split("#", 1)
            dbkey = dbkey.rstrip("_")
            fragment = raw_fragment.replace("_", " ")

        namespace = default_namespace
        if dbkey.startswith(":"):
            # leading colon means main namespace instead of the default,
            # an explicit prefix after it still applies
            namespace = config.NS_MAIN
            dbkey = dbkey[1:].lstrip("_")

        m = _PREFIX_RE.match(dbkey)
        if m:
            ns = self._namespaces.get(m.group(1).replace("_", " ").casefold())
            if ns is not None:
                namespace = ns
                dbkey = m.group(2)
                if not dbkey:
                    # "Talk:" alone is not a page
                    return None

        if not self._is_legal(dbkey, namespace):
            return None

        dbkey = dbkey[0].upper() + dbkey[1:]
        return PageTitle(
            namespace=namespace,
            dbkey=dbkey,
            fragment=fragment,
            has_subpages=namespace in self._subpage_namespaces,
        )

    @staticmethod
    def _is_legal(dbkey: str, namespace: int) -> bool:
        if not dbkey or _ILLEGAL_RE.search(dbkey):
            return False
        # relative path segments
        if dbkey in (".", "..") or dbkey.startswith(("./", "../")):
            return False
        if "/./" in dbkey or "/../" in dbkey or dbkey.endswith(("/.", "/..")):
            return False
        # signature magic
        if "~~~" in dbkey:
            return False
        limit = (
            config.MAX_SPECIAL_TITLE_LENGTH
            if namespace == config.NS_SPECIAL
            else config.MAX_TITLE_LENGTH
        )
        return len(dbkey.encode("utf-8")) <= limit
