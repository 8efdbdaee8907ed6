"""Shared fixtures: a default title parser, alias table and evaluator."""

import pytest

from wikiexclude.evaluator import ExclusionEvaluator
from wikiexclude.special_pages import AliasTable, default_alias_table
from wikiexclude.title import TitleParser


@pytest.fixture
def parser() -> TitleParser:
    return TitleParser()


@pytest.fixture
def aliases() -> AliasTable:
    table = default_alias_table()
    table.add("MySpecialPage", ["My_special_page"])
    return table


@pytest.fixture
def evaluator(aliases, parser) -> ExclusionEvaluator:
    return ExclusionEvaluator(aliases, parser)
