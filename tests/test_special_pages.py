"""Special page aliases: tests for the alias table and the API loader."""

from unittest.mock import Mock, patch

import pytest
import requests

from wikiexclude import config
from wikiexclude.datatypes import ResolvedAlias
from wikiexclude.errors import AliasFetchError
from wikiexclude.special_pages import (
    AliasTable,
    default_alias_table,
    fetch_special_page_aliases,
)


# --- AliasTable ---------------------------------------------------------------

def test_alias_resolves_to_canonical_name():
    table = AliasTable({"RecentChanges": ["Recent_changes"]})
    assert table.resolve_alias("Recent_changes") == ResolvedAlias("RecentChanges", None)


def test_lookup_ignores_case_and_spaces():
    table = AliasTable({"RecentChanges": ["Recent_changes"]})
    assert table.resolve_alias("recent changes").canonical_name == "RecentChanges"
    assert table.resolve_alias("RECENTCHANGES").canonical_name == "RecentChanges"


def test_subpage_is_returned():
    table = AliasTable({"Contributions": ["Contribs"]})
    resolved = table.resolve_alias("Contribs/Example/More")
    assert resolved == ResolvedAlias("Contributions", "Example/More")


def test_unknown_alias():
    table = AliasTable({"Search": []})
    assert table.resolve_alias("Nope/x") == ResolvedAlias(None, "x")
    assert table.resolve_alias("Nope") == ResolvedAlias(None, None)


def test_first_registration_wins():
    table = AliasTable({"Userlogin": ["Login"], "Other": ["Login"]})
    assert table.resolve_alias("Login").canonical_name == "Userlogin"
    assert "login" in table
    assert len(table) == 2


def test_default_table_has_core_pages():
    table = default_alias_table()
    assert table.resolve_alias("Recent_changes").canonical_name == "RecentChanges"
    assert len(table) == len(config.DEFAULT_ALIASES)


# --- fetch_special_page_aliases -----------------------------------------------

def _response(payload, status=200):
    resp = Mock()
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def test_fetch_builds_table():
    payload = {
        "batchcomplete": True,
        "query": {
            "specialpagealiases": [
                {"realname": "RecentChanges", "aliases": ["RecentChanges", "Recent_changes"]},
                {"realname": "Search", "aliases": ["Search"]},
                {"aliases": ["Broken"]},
            ]
        },
    }
    with patch("wikiexclude.special_pages.requests.get", return_value=_response(payload)) as get:
        table = fetch_special_page_aliases("https://wiki.example/w/api.php")

    assert table.resolve_alias("Recent_changes").canonical_name == "RecentChanges"
    assert len(table) == 2
    _, kwargs = get.call_args
    assert kwargs["params"]["siprop"] == "specialpagealiases"
    assert kwargs["headers"]["User-Agent"] == config.DEFAULT_UA


def test_fetch_http_error():
    with patch("wikiexclude.special_pages.requests.get", return_value=_response({}, 503)):
        with pytest.raises(AliasFetchError):
            fetch_special_page_aliases("https://wiki.example/w/api.php")


def test_fetch_connection_error():
    with patch(
        "wikiexclude.special_pages.requests.get",
        side_effect=requests.ConnectionError("no route"),
    ):
        with pytest.raises(AliasFetchError):
            fetch_special_page_aliases("https://wiki.example/w/api.php")


def test_fetch_api_error_payload():
    payload = {"error": {"code": "badvalue", "info": "Unrecognized value"}}
    with patch("wikiexclude.special_pages.requests.get", return_value=_response(payload)):
        with pytest.raises(AliasFetchError, match="Unrecognized value"):
            fetch_special_page_aliases("https://wiki.example/w/api.php")


def test_fetch_string_error_payload():
    with patch("wikiexclude.special_pages.requests.get", return_value=_response({"error": "readonly"})):
        with pytest.raises(AliasFetchError, match="readonly"):
            fetch_special_page_aliases("https://wiki.example/w/api.php")


def test_fetch_non_object_payload():
    with patch("wikiexclude.special_pages.requests.get", return_value=_response(["not", "an", "object"])):
        with pytest.raises(AliasFetchError, match="list"):
            fetch_special_page_aliases("https://wiki.example/w/api.php")


def test_fetch_skips_non_object_entries():
    payload = {"query": {"specialpagealiases": ["Search", {"realname": "Search", "aliases": []}]}}
    with patch("wikiexclude.special_pages.requests.get", return_value=_response(payload)):
        table = fetch_special_page_aliases("https://wiki.example/w/api.php")
    assert len(table) == 1


def test_user_agent_names_this_project():
    assert config.DEFAULT_UA.startswith("wikiexclude/")
    assert "knightchaser" not in config.DEFAULT_UA
