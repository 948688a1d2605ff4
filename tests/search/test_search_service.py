import pytest

from orama_actions.errors import FacetParseError, IndexNotFoundError, SearchError


def test_search_builds_single_index_client(search_service, fake_client):
    fake_client.reset([{"hits": [{"id": "1"}], "count": 1, "elapsed": 3}])

    result = search_service.search("docs", "install", limit=5)

    client = fake_client.instances[0]
    assert client.endpoint == "https://cloud.orama.run/v1/indexes/docs"
    assert client.api_key == "docs-key"
    assert client.timeout == 12.0
    assert client.calls == [{"term": "install", "limit": 5}]
    assert result.to_dict() == {"hits": [{"id": "1"}], "count": 1, "elapsed": 3}


def test_search_passes_every_option(search_service, fake_client):
    search_service.search(
        "blog",
        "release",
        mode="fulltext",
        properties=["title"],
        limit=0,
        where_conditions='{"tag": "python"}',
        sort_by_property="date",
        sort_by_order="desc",
    )

    assert fake_client.all_calls() == [
        {
            "term": "release",
            "mode": "fulltext",
            "properties": ["title"],
            "limit": 0,
            "where": {"tag": "python"},
            "sortBy": {"property": "date", "order": "desc"},
        }
    ]


def test_search_with_malformed_filter_proceeds_without_where(search_service, fake_client):
    fake_client.reset([{"hits": [], "count": 0}])

    search_service.search("docs", "x", where_conditions="{not valid json")

    assert fake_client.all_calls() == [{"term": "x"}]


def test_search_with_empty_term(search_service, fake_client):
    search_service.search("docs", "")
    search_service.search("docs", None)

    assert fake_client.all_calls() == [{"term": ""}, {"term": ""}]


def test_search_coerces_count_and_defaults_hits(search_service, fake_client):
    fake_client.reset([{"count": "lots", "elapsed": {"raw": 8, "formatted": "8ms"}}])

    result = search_service.search("docs", "x")

    assert result.hits == []
    assert result.count == 0
    assert result.elapsed == 8


@pytest.mark.parametrize("hits", ["abc", {"id": 1, "doc": 2}, 5])
def test_search_treats_non_list_hits_as_empty(search_service, fake_client, hits):
    fake_client.reset([{"hits": hits, "count": 1}])

    result = search_service.search("docs", "x")

    assert result.hits == []
    assert result.count == 1


def test_search_unknown_index_makes_no_remote_call(search_service, fake_client):
    with pytest.raises(IndexNotFoundError):
        search_service.search("products", "x")
    assert fake_client.instances == []


def test_search_failure_message(search_service, fake_client):
    fake_client.reset([TimeoutError("read timed out")])

    with pytest.raises(SearchError, match="^Error performing search: read timed out$"):
        search_service.search("docs", "x")


def test_vector_search_forces_vector_mode(search_service, fake_client):
    fake_client.reset([{"hits": [{"id": "v"}], "count": 1, "elapsed": 2}])

    result = search_service.vector_search("docs", "how do I deploy", limit=3, where_conditions='{"v": 2}')

    assert fake_client.all_calls() == [
        {"term": "how do I deploy", "mode": "vector", "limit": 3, "where": {"v": 2}}
    ]
    assert result.count == 1


def test_vector_search_failure_message(search_service, fake_client):
    fake_client.reset([RuntimeError("embedding failed")])

    with pytest.raises(SearchError, match="^Error performing vector search: embedding failed$"):
        search_service.vector_search("docs", "x")


def test_search_with_facets_returns_facets(search_service, fake_client):
    facets = {"category": {"count": 2, "values": {"shoes": 3, "hats": 1}}}
    fake_client.reset([{"hits": [{"id": 1}], "count": 4, "elapsed": 6, "facets": facets}])

    result = search_service.search_with_facets(
        "docs", "red", '{"category": {"limit": 5}}', mode="hybrid", limit=10
    )

    assert fake_client.all_calls() == [
        {"term": "red", "mode": "hybrid", "limit": 10, "facets": {"category": {"limit": 5}}}
    ]
    assert result.to_dict() == {"hits": [{"id": 1}], "count": 4, "elapsed": 6, "facets": facets}


def test_search_with_facets_defaults_missing_facets(search_service, fake_client):
    fake_client.reset([{"hits": [], "count": 0}])

    result = search_service.search_with_facets("docs", "x", "{}")

    assert result.facets == {}


def test_malformed_facets_fail_without_remote_call(search_service, fake_client):
    with pytest.raises(FacetParseError):
        search_service.search_with_facets("docs", "x", "{not valid json")
    assert fake_client.instances == []


def test_facets_failure_message(search_service, fake_client):
    fake_client.reset([RuntimeError("bad facet property")])

    with pytest.raises(SearchError, match="^Error performing search with facets: bad facet property$"):
        search_service.search_with_facets("docs", "x", '{"category": {}}')


def test_list_indexes(search_service):
    assert search_service.list_indexes() == [
        {"name": "docs", "endpoint": "https://cloud.orama.run/v1/indexes/docs"},
        {"name": "blog", "endpoint": "https://cloud.orama.run/v1/indexes/blog"},
    ]
