import json

import pytest

from orama_actions.integrations.orama_client import OramaAPIError, OramaClient


class StubResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload or {}
        self.status_code = status_code
        self.reason = "OK" if status_code < 400 else "Unauthorized"
        self.text = json.dumps(self._payload)

    def json(self):
        return self._payload


class StubSession:
    def __init__(self, responses):
        self.headers = {}
        self.responses = list(responses)
        self.requests = []

    def post(self, url, params=None, data=None, timeout=None):
        self.requests.append({"url": url, "params": params, "data": data, "timeout": timeout})
        return self.responses.pop(0)


def test_single_index_search_posts_query():
    session = StubSession([StubResponse({"hits": [{"id": 1}], "count": 1, "elapsed": {"raw": 3}})])
    client = OramaClient(
        endpoint="https://cloud.orama.run/v1/indexes/docs/",
        api_key="docs-key",
        timeout=5,
        session=session,
    )

    result = client.search({"term": "install", "limit": 2})

    assert result == {"hits": [{"id": 1}], "count": 1, "elapsed": {"raw": 3}}
    request = session.requests[0]
    assert request["url"] == "https://cloud.orama.run/v1/indexes/docs/search"
    assert request["params"] == {"api-key": "docs-key"}
    assert json.loads(request["data"]["q"]) == {"term": "install", "limit": 2}
    assert request["timeout"] == 5
    assert session.headers["User-Agent"] == OramaClient.USER_AGENT


def test_multi_index_search_returns_one_result_per_index():
    session = StubSession([StubResponse({"count": 1}), StubResponse({"count": 2})])
    client = OramaClient(
        indexes=[{"endpoint": "https://a", "api_key": "ka"}, {"endpoint": "https://b", "api_key": "kb"}],
        session=session,
    )

    results = client.search({"term": "x"})

    assert results == [{"count": 1}, {"count": 2}]
    assert [r["url"] for r in session.requests] == ["https://a/search", "https://b/search"]
    assert [r["params"]["api-key"] for r in session.requests] == ["ka", "kb"]


def test_multi_index_merge_ranks_by_score():
    session = StubSession(
        [
            StubResponse({"hits": [{"id": "a", "score": 0.2}], "count": 1, "elapsed": {"raw": 4}}),
            StubResponse({"hits": [{"id": "b", "score": 0.9}], "count": 3, "elapsed": {"raw": 9}}),
        ]
    )
    client = OramaClient(
        indexes=[{"endpoint": "https://a", "api_key": "ka"}, {"endpoint": "https://b", "api_key": "kb"}],
        merge_results=True,
        session=session,
    )

    merged = client.search({"term": "x"})

    assert [hit["id"] for hit in merged["hits"]] == ["b", "a"]
    assert merged["count"] == 4
    assert merged["elapsed"] == 9


def test_http_error_carries_response():
    failed = StubResponse({"error": "invalid api key"}, status_code=401)
    client = OramaClient(endpoint="https://a", api_key="bad", session=StubSession([failed]))

    with pytest.raises(OramaAPIError) as excinfo:
        client.search({"term": "x"})

    assert excinfo.value.http_response is failed
    assert "401" in str(excinfo.value)


def test_client_requires_credentials():
    with pytest.raises(OramaAPIError):
        OramaClient(endpoint="https://a")
