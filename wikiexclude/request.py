# wikiexclude/request.py
from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import parse_qsl, unquote, urlsplit

from wikiexclude import config
from wikiexclude.title import PageTitle, TitleParser


class QueryRequest:
    """
    Read-only view of a request's query parameters.
    Values are percent-decoded but otherwise untouched (no Unicode or
    line break normalization). Implements RequestContext.
    """

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._params: dict[str, str] = dict(params or {})

    @classmethod
    def from_query_string(cls, query: str) -> "QueryRequest":
        query = query.lstrip("?")
        params: dict[str, str] = {}
        # last duplicate wins
        for name, value in parse_qsl(query, keep_blank_values=True):
            params[name] = value
        return cls(params)

    @classmethod
    def from_url(cls, url: str) -> "QueryRequest":
        return cls.from_query_string(urlsplit(url).query)

    def get_raw_val(self, name: str) -> Optional[str]:
        """
        Value of a parameter, or None when it is absent.
        An empty value ("?diff=") is present, not absent.
        Array parameters ("?ids[]=1") never match a plain name.
        """
        return self._params.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __repr__(self) -> str:
        return f"QueryRequest({self._params!r})"


def title_from_url(
    url: str,
    parser: TitleParser,
    *,
    article_path: str = config.DEFAULT_ARTICLE_PATH,
) -> Optional[PageTitle]:
    """
    Work out which page a wiki URL points at.
    - "/w/index.php?title=Foo&action=edit" -> Foo
    - "/wiki/Special:Search?search=x" -> Special:Search
    - "/wiki/" or "/w/index.php?title=" -> main page
    - "/w/api.php?action=query" -> None (no page)
    """
    parts = urlsplit(url)
    request = QueryRequest.from_query_string(parts.query)

    title_param = request.get_raw_val("title")
    if title_param is not None:
        # an empty title shows the main page
        return parser.parse(title_param) if title_param else parser.main_page

    path = parts.path or ""
    if article_path and path.startswith(article_path):
        remainder = unquote(path[len(article_path):])
        return parser.parse(remainder) if remainder else parser.main_page

    # index.php with no title shows the main page
    if path.endswith("/index.php"):
        return parser.main_page

    return None
