"""Tests for query-string helpers."""

import pytest


@pytest.mark.parametrize("raw", [None, "", {}, "?"])
def test_parse_data_params_empty(raw):
    from scrollfeed.utils.query_params import parse_data_params

    assert parse_data_params(raw) == {}


def test_parse_data_params_query_string():
    from scrollfeed.utils.query_params import parse_data_params

    params = parse_data_params("?q=books&sort=new&sort=old&flag=")

    assert params == {"q": "books", "sort": "old", "flag": ""}


def test_parse_data_params_collects_array_keys():
    from scrollfeed.utils.query_params import parse_data_params

    params = parse_data_params("tags[]=a&tags[]=b&q=x")

    assert params == {"tags[]": ["a", "b"], "q": "x"}


def test_parse_data_params_decodes_values():
    from scrollfeed.utils.query_params import parse_data_params

    assert parse_data_params("q=red+shoes&city=S%C3%A3o") == {"q": "red shoes", "city": "São"}


def test_parse_data_params_copies_mappings():
    from scrollfeed.utils.query_params import parse_data_params

    source = {"q": "books"}
    params = parse_data_params(source)
    params["segment"] = 2

    assert source == {"q": "books"}


def test_update_query_param_adds_key():
    from scrollfeed.utils.query_params import update_query_param

    assert update_query_param("https://a.test/list", "segment", 2) == "https://a.test/list?segment=2"


def test_update_query_param_replaces_key_and_keeps_others():
    from scrollfeed.utils.query_params import update_query_param

    url = update_query_param("https://a.test/list?segment=1&q=x#top", "segment", 3)

    assert url == "https://a.test/list?q=x&segment=3#top"
