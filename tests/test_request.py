"""Request parameters and URL -> page mapping."""

from wikiexclude import config
from wikiexclude.datatypes import ExclusionConfig
from wikiexclude.evaluator import ExclusionEvaluator
from wikiexclude.request import QueryRequest, title_from_url
from wikiexclude.special_pages import AliasTable


def test_missing_parameter_is_none():
    assert QueryRequest.from_query_string("a=1").get_raw_val("b") is None


def test_empty_value_is_present():
    request = QueryRequest.from_query_string("?diff=")
    assert request.get_raw_val("diff") == ""
    assert "diff" in request


def test_values_are_percent_decoded_and_last_wins():
    request = QueryRequest.from_query_string("q=a%20b&q=c+d")
    assert request.get_raw_val("q") == "c d"


def test_array_parameters_do_not_match_plain_name():
    assert QueryRequest.from_query_string("ids[]=1").get_raw_val("ids") is None


def test_from_url():
    request = QueryRequest.from_url("https://wiki.example/w/index.php?title=Foo&action=edit")
    assert request.get_raw_val("action") == "edit"


def test_title_from_article_path(parser):
    title = title_from_url("https://wiki.example/wiki/Special:Recent_changes?days=3", parser)
    assert title.namespace == config.NS_SPECIAL
    assert title.dbkey == "Recent_changes"


def test_title_from_encoded_article_path(parser):
    title = title_from_url("https://wiki.example/wiki/Caf%C3%A9", parser)
    assert title.dbkey == "Café"


def test_title_parameter_wins(parser):
    title = title_from_url("https://wiki.example/w/index.php?title=Talk:Foo&action=history", parser)
    assert title.prefixed_text == "Talk:Foo"


def test_bare_index_php_is_main_page(parser):
    assert title_from_url("https://wiki.example/w/index.php", parser).is_main_page()


def test_api_url_has_no_page(parser):
    assert title_from_url("https://wiki.example/w/api.php?action=query", parser) is None


def test_custom_article_path(parser):
    title = title_from_url("https://wiki.example/view/Foo", parser, article_path="/view/")
    assert title.dbkey == "Foo"


def test_empty_title_parameter_is_main_page(parser):
    assert title_from_url("https://wiki.example/w/index.php?title=", parser).is_main_page()


def test_bare_article_path_is_main_page(parser):
    assert title_from_url("https://wiki.example/wiki/", parser).is_main_page()


def test_root_urls_honor_main_page_rule(parser):
    cfg = ExclusionConfig(main_page_excluded=True)
    evaluator = ExclusionEvaluator(AliasTable(), parser)
    for url in ("https://wiki.example/wiki/", "https://wiki.example/w/index.php?title="):
        page = title_from_url(url, parser)
        assert evaluator.should_disable(cfg, QueryRequest.from_url(url), page) is True


def test_main_page_url_skips_other_rules(parser):
    url = "https://wiki.example/w/index.php?action=edit"
    cfg = ExclusionConfig(
        main_page_excluded=False,
        excluded_namespaces=frozenset({0}),
        excluded_query_patterns={"action": "edit"},
    )
    evaluator = ExclusionEvaluator(AliasTable(), parser)
    page = title_from_url(url, parser)
    assert evaluator.should_disable(cfg, QueryRequest.from_url(url), page) is False
