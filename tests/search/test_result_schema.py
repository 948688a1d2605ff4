import pytest

from orama_actions.search.schema import (
    IndexSearchResult,
    MultiIndexSearchResult,
    SearchResult,
    coerce_count,
    coerce_hits,
    coerce_number,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, 3),
        (2.5, 2.5),
        ("7", 7),
        ("1.25", 1.25),
        (None, 0),
        ("many", 0),
        (True, 0),
        (float("nan"), 0),
        ({"raw": 12, "formatted": "12ms"}, 12),
        ({"formatted": "12ms"}, 0),
        ([1], 0),
        ("12345678901234567890", 12345678901234567890),
        (" 42 ", 42),
    ],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_search_result_defaults_when_fields_missing():
    result = SearchResult.from_response({})
    assert result.to_dict() == {"hits": [], "count": 0, "elapsed": 0}


def test_search_result_handles_null_response_fields():
    result = SearchResult.from_response({"hits": None, "count": None, "elapsed": None})
    assert result.hits == []
    assert result.count == 0


def test_search_result_with_facets_defaults_to_empty_mapping():
    result = SearchResult.from_response({"hits": [{"id": "1"}], "count": "1"}, with_facets=True)
    assert result.to_dict() == {"hits": [{"id": "1"}], "count": 1, "elapsed": 0, "facets": {}}


def test_index_search_result_dict_shape():
    entry = IndexSearchResult.from_response("docs", {"hits": [{"id": 1}], "count": 1, "elapsed": 4})
    assert entry.to_dict() == {"indexName": "docs", "hits": [{"id": 1}], "count": 1, "elapsed": 4}


def test_multi_index_result_omits_merged_hits_when_unmerged():
    result = MultiIndexSearchResult(results=[IndexSearchResult("docs")], total_count=0)
    assert result.is_merged is False
    assert "mergedHits" not in result.to_dict()


@pytest.mark.parametrize(
    "value, expected",
    [
        ([{"id": "1"}], [{"id": "1"}]),
        (({"id": "1"},), [{"id": "1"}]),
        (None, []),
        ("abc", []),
        ({"id": 1, "doc": 2}, []),
        (5, []),
    ],
)
def test_coerce_hits_only_accepts_sequences_of_records(value, expected):
    assert coerce_hits(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (4, 4),
        ("9", 9),
        (2.7, 2),
        (-5, 0),
        ("-3", 0),
        (None, 0),
    ],
)
def test_coerce_count_is_non_negative_integer(value, expected):
    count = coerce_count(value)
    assert count == expected
    assert isinstance(count, int)


def test_search_result_ignores_non_list_hits():
    result = SearchResult.from_response({"hits": "abc", "count": 1})
    assert result.hits == []
