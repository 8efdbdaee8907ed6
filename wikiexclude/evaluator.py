# wikiexclude/evaluator.py
from __future__ import annotations

import logging
import re
from typing import Optional

from wikiexclude import config
from wikiexclude.datatypes import (
    ExclusionConfig,
    PageIdentity,
    PageNameResolver,
    RequestContext,
    compile_pattern,
)
from wikiexclude.title import PageTitle, TitleParser

logger = logging.getLogger(__name__)


class ExclusionEvaluator:
    """
    Decides whether a page-level feature is disabled for one request.

    Rules are checked in order and the first one that applies decides:
    main page, excluded titles, excluded namespaces, query string.
    """

    def __init__(
        self,
        resolver: PageNameResolver,
        parser: TitleParser | None = None,
    ) -> None:
        self._resolver = resolver
        self._parser = parser or TitleParser()

    def should_disable(
        self,
        cfg: ExclusionConfig,
        request: RequestContext,
        page: Optional[PageIdentity] = None,
    ) -> bool:
        if page is not None and page.is_main_page():
            # only one check to make
            logger.debug("Main page, excluded=%s", cfg.main_page_excluded)
            return cfg.main_page_excluded

        canonical = self._canonical_title(page)

        if canonical is not None and self._matches_excluded_title(cfg, canonical):
            return True

        if page is not None and page.namespace in cfg.excluded_namespaces:
            logger.debug("Namespace %d is excluded", page.namespace)
            return True

        return self._matches_query_string(cfg, request)

    def _canonical_title(
        self, page: Optional[PageIdentity]
    ) -> Optional[PageIdentity]:
        """Root title, with special page aliases resolved to their canonical name."""
        if page is None:
            return None

        root = page.root_title()
        if not root.is_special_page():
            return root

        resolved = self._resolver.resolve_alias(root.dbkey)
        if resolved.canonical_name:
            return PageTitle.make(config.NS_SPECIAL, resolved.canonical_name)
        return root

    def _matches_excluded_title(
        self, cfg: ExclusionConfig, canonical: PageIdentity
    ) -> bool:
        special = canonical.is_special_page()
        for title_text in cfg.excluded_page_titles:
            # special page names in config are case-insensitive
            text = title_text.lower() if special else title_text
            excluded = self._parser.parse(text)
            if excluded is not None and _same_page(canonical, excluded):
                logger.debug("Title %r is excluded", title_text)
                return True
        return False

    @staticmethod
    def _matches_query_string(cfg: ExclusionConfig, request: RequestContext) -> bool:
        # NOTE: only the first configured parameter present in the request is
        # tested; later entries are never reached. Kept for compatibility with
        # existing configs, though any-match is probably what was intended.
        for param, pattern in cfg.excluded_query_patterns.items():
            value = request.get_raw_val(param)
            if value is None:
                continue
            matched = _search(param, pattern, value)
            logger.debug("Query parameter %r matched=%s", param, matched)
            return matched
        return False


def _search(param: str, pattern: str, value: str) -> bool:
    compiled: re.Pattern[str] = compile_pattern(param, pattern)
    return compiled.search(value) is not None


def _same_page(a: PageIdentity, b: PageTitle) -> bool:
    if isinstance(a, PageTitle):
        return a == b
    # foreign PageIdentity implementations
    return PageTitle.make(a.namespace, a.dbkey) == b


def should_disable(
    cfg: ExclusionConfig,
    request: RequestContext,
    page: Optional[PageIdentity],
    resolver: PageNameResolver,
) -> bool:
    """Functional shortcut for a one-off ExclusionEvaluator."""
    return ExclusionEvaluator(resolver).should_disable(cfg, request, page)
