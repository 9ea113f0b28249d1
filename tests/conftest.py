"""
Fixtures and test configuration for the rhsm-exporter test suite.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import Mock

import pytest
import requests

from rhsm_exporter.settings import Settings


def make_subscription(number: str, quantity: str = "10", **overrides) -> Dict[str, Any]:
    """Build a subscription record as the API returns it."""
    record = {
        "contractNumber": f"C-{number}",
        "endDate": "2025-01-01T00:00:00Z",
        "quantity": quantity,
        "sku": "RH00001",
        "startDate": "2024-01-01T00:00:00Z",
        "status": "Active",
        "subscriptionName": f"Subscription {number}",
        "subscriptionNumber": number,
        "pools": [
            {"consumed": 2, "id": f"pool-{number}", "quantity": 5, "type": "NORMAL"}
        ],
    }
    record.update(overrides)
    return record


def make_page(records: List[Dict[str, Any]], offset: int = 0, limit: int = 50) -> Dict[str, Any]:
    """Wrap records in a page envelope."""
    return {
        "body": records,
        "pagination": {"count": len(records), "limit": limit, "offset": offset},
    }


def make_response(payload: Any) -> Mock:
    """Mock a requests response carrying ``payload`` as JSON."""
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return Mock(content=raw, status_code=200)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep RH_* variables from the outer environment out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("RH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings():
    """Settings for the live API with a dummy token."""
    return Settings(
        offline_token="offline-token",
        token_url="https://sso.example.com/token",
        api_url="https://api.example.com/subscriptions",
        log_level="DEBUG",
    )


@pytest.fixture
def import_settings():
    """Settings for importing from a JSON document."""
    return Settings(
        offline_token="offline-token",
        import_url="https://files.example.com/subscriptions.json",
    )


@pytest.fixture
def mock_session():
    """A requests session whose calls are recorded."""
    return Mock(spec=requests.Session)


@pytest.fixture
def sample_records():
    """Three records with a valid, an invalid and a fractional quantity."""
    return [
        make_subscription("100", quantity="10"),
        make_subscription("200", quantity="abc"),
        make_subscription("300", quantity="3.5"),
    ]
