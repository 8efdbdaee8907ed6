# wikiexclude/datatypes.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from wikiexclude import config
from wikiexclude.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ResolvedAlias:
    """
    Result of a special page alias lookup.
    canonical_name is None when the alias is unknown.
    """

    canonical_name: str | None
    subpage: str | None = None  # e.g. "Example" for "Contributions/Example"


@runtime_checkable
class PageIdentity(Protocol):
    """The resolved page of the current request (read only)."""

    @property
    def namespace(self) -> int: ...

    @property
    def dbkey(self) -> str: ...

    def is_main_page(self) -> bool: ...

    def is_special_page(self) -> bool: ...

    def root_title(self) -> "PageIdentity": ...


@runtime_checkable
class RequestContext(Protocol):
    """Access to the raw request parameters."""

    def get_raw_val(self, name: str) -> Optional[str]: ...


@runtime_checkable
class PageNameResolver(Protocol):
    """Canonicalizes special page aliases, e.g. "Recent_changes" -> "RecentChanges"."""

    def resolve_alias(self, raw_key: str) -> ResolvedAlias: ...


def _frozen_patterns(patterns: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(patterns or {}))


@dataclass(frozen=True, slots=True)
class ExclusionConfig:
    """
    Declarative rules for where a page-level feature is disabled.
    All fields are optional; an empty config disables nothing.
    """

    main_page_excluded: bool = False
    excluded_namespaces: frozenset[int] = frozenset()
    # param name -> regex, evaluated in insertion order
    excluded_query_patterns: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    excluded_page_titles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # normalize so callers may pass lists/dicts
        object.__setattr__(
            self, "excluded_namespaces", frozenset(self.excluded_namespaces)
        )
        object.__setattr__(
            self,
            "excluded_query_patterns",
            _frozen_patterns(self.excluded_query_patterns),
        )
        object.__setattr__(
            self, "excluded_page_titles", tuple(self.excluded_page_titles)
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> "ExclusionConfig":
        """
        Build from wiki-style feature options:
            {"exclude": {"mainpage": bool, "namespaces": [int],
                         "querystring": {param: regex}, "pagetitles": [str]}}
        Missing keys fall back to the defaults.
        """
        exclusions = (options or {}).get(config.OPTIONS_KEY) or {}
        return cls(
            main_page_excluded=bool(exclusions.get("mainpage", False)),
            excluded_namespaces=frozenset(
                int(ns) for ns in exclusions.get("namespaces") or []
            ),
            excluded_query_patterns=dict(exclusions.get("querystring") or {}),
            excluded_page_titles=tuple(exclusions.get("pagetitles") or ()),
        )

    def to_options(self) -> dict[str, Any]:
        return {
            config.OPTIONS_KEY: {
                "mainpage": self.main_page_excluded,
                "namespaces": sorted(self.excluded_namespaces),
                "querystring": dict(self.excluded_query_patterns),
                "pagetitles": list(self.excluded_page_titles),
            }
        }

    def validate(self) -> None:
        """Eagerly compile every query pattern; raises ConfigurationError."""
        compile_query_patterns(self)


def expand_pattern(pattern: str) -> str:
    """Map the legacy "*" wildcard onto its regex equivalent."""
    if pattern == config.WILDCARD_PATTERN:
        return config.WILDCARD_REGEX
    return pattern


def compile_pattern(param: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(expand_pattern(pattern))
    except re.error as exc:
        raise ConfigurationError(param, pattern, str(exc)) from exc


def compile_query_patterns(cfg: ExclusionConfig) -> dict[str, re.Pattern[str]]:
    """
    Compile all excluded query patterns in order.
    Raises ConfigurationError for the first malformed entry.
    """
    return {
        param: compile_pattern(param, pattern)
        for param, pattern in cfg.excluded_query_patterns.items()
    }
