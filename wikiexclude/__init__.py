# wikiexclude/__init__.py
from __future__ import annotations
from wikiexclude.datatypes import ExclusionConfig, ResolvedAlias
from wikiexclude.errors import ConfigurationError
from wikiexclude.evaluator import ExclusionEvaluator, should_disable

__all__ = [
    "ExclusionConfig",
    "ExclusionEvaluator",
    "ConfigurationError",
    "ResolvedAlias",
    "should_disable",
]
