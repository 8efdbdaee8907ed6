# wikiexclude/errors.py
from __future__ import annotations


class WikiExcludeError(Exception):
    """Base class for all wikiexclude errors."""


class ConfigurationError(WikiExcludeError, ValueError):
    """
    An excluded query pattern is not a valid regular expression.
    This is a configuration bug, not a per-request condition.
    """

    def __init__(self, param: str, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid pattern {pattern!r} for query parameter {param!r}: {reason}"
        )
        self.param = param
        self.pattern = pattern
        self.reason = reason


class ConfigFileError(WikiExcludeError):
    """The exclusion config file is missing, unreadable or ill-typed."""


class AliasFetchError(WikiExcludeError):
    """Special page aliases could not be loaded from the wiki API."""
