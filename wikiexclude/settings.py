# wikiexclude/settings.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from wikiexclude import config
from wikiexclude.datatypes import ExclusionConfig
from wikiexclude.errors import ConfigFileError

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"mainpage", "namespaces", "querystring", "pagetitles"}


def _check_types(exclusions: Mapping[str, Any]) -> None:
    """Reject values that would silently change meaning, e.g. a string of titles."""
    mainpage = exclusions.get("mainpage", False)
    if not isinstance(mainpage, bool):
        raise ConfigFileError(f"'mainpage' must be a boolean, got {mainpage!r}")

    namespaces = exclusions.get("namespaces") or []
    if not isinstance(namespaces, list) or not all(
        isinstance(ns, int) and not isinstance(ns, bool) for ns in namespaces
    ):
        raise ConfigFileError(f"'namespaces' must be a list of integers, got {namespaces!r}")

    querystring = exclusions.get("querystring") or {}
    if not isinstance(querystring, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in querystring.items()
    ):
        raise ConfigFileError(
            f"'querystring' must map parameter names to patterns, got {querystring!r}"
        )

    pagetitles = exclusions.get("pagetitles") or []
    if not isinstance(pagetitles, list) or not all(
        isinstance(t, str) for t in pagetitles
    ):
        raise ConfigFileError(f"'pagetitles' must be a list of strings, got {pagetitles!r}")


def parse_exclusion_options(data: Any) -> ExclusionConfig:
    """
    Accept either the full feature options ({"exclude": {...}}) or the
    bare exclusion mapping ({"mainpage": ..., ...}).
    """
    if not isinstance(data, dict):
        raise ConfigFileError(f"Expected a JSON object, got {type(data).__name__}")

    exclusions = data[config.OPTIONS_KEY] if config.OPTIONS_KEY in data else data
    if exclusions is None:
        exclusions = {}
    if not isinstance(exclusions, dict):
        raise ConfigFileError(f"'{config.OPTIONS_KEY}' must be a JSON object")

    unknown = set(exclusions) - _KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown exclusion keys: %s", ", ".join(sorted(unknown)))

    _check_types(exclusions)
    return ExclusionConfig.from_options({config.OPTIONS_KEY: exclusions})


def load_exclusion_config(path: str | Path) -> ExclusionConfig:
    """Read an exclusion config from a JSON file. Patterns are not compiled here."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"Cannot read config file {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigFileError(f"Invalid JSON in {path}: {exc}") from exc

    cfg = parse_exclusion_options(data)
    logger.debug("Loaded exclusion config from %s", path)
    return cfg
