"""
Pytest configuration and fixtures for the Orama actions test suite.

This file provides:
- Environment setup (telemetry export disabled)
- A recording fake Orama client
- Sample configuration dictionaries
- Lifecycle reset between tests
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add project root to path
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("TELEMETRY_DISABLED", "true")


class FakeOramaClient:
    """
    Stand-in for OramaClient that records how it was built and queried.

    `FakeOramaClient.responses` is consumed in order; each entry is either
    a response object/list or an exception to raise.
    """

    instances: List["FakeOramaClient"] = []
    responses: List[Any] = []

    def __init__(self, endpoint=None, api_key=None, *, indexes=None, merge_results=False, timeout=30.0):
        self.endpoint = endpoint
        self.api_key = api_key
        self.indexes = indexes
        self.merge_results = merge_results
        self.timeout = timeout
        self.calls: List[Dict[str, Any]] = []
        FakeOramaClient.instances.append(self)

    def search(self, params: Dict[str, Any]):
        self.calls.append(params)
        response = FakeOramaClient.responses.pop(0) if FakeOramaClient.responses else {}
        if isinstance(response, BaseException):
            raise response
        return response

    @classmethod
    def reset(cls, responses: Optional[List[Any]] = None):
        cls.instances = []
        cls.responses = list(responses or [])

    @classmethod
    def all_calls(cls) -> List[Dict[str, Any]]:
        return [call for instance in cls.instances for call in instance.calls]


@pytest.fixture
def fake_client():
    FakeOramaClient.reset()
    yield FakeOramaClient
    FakeOramaClient.reset()


@pytest.fixture
def app_config() -> Dict[str, Any]:
    """Configuration with two indexes, as load_config() would return it."""
    return {
        "orama": {
            "timeout_seconds": 12,
            "indexes": [
                {"name": "docs", "endpoint": "https://cloud.orama.run/v1/indexes/docs", "api_key": "docs-key"},
                {"name": "blog", "endpoint": "https://cloud.orama.run/v1/indexes/blog", "api_key": "blog-key"},
            ],
        },
        "logging": {"level": "INFO"},
    }


@pytest.fixture
def search_service(app_config, fake_client):
    from orama_actions.search.config import load_orama_settings
    from orama_actions.search.service import OramaSearchService

    return OramaSearchService.from_settings(load_orama_settings(app_config), client_factory=fake_client)


@pytest.fixture(autouse=True)
def reset_lifecycle():
    yield
    from orama_actions.agent import lifecycle

    lifecycle._active_service = None
    lifecycle._unregistered = False


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
