"""Unit tests for the categorization API client"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch
from purchase_advisor.domain.exceptions import CategorizationAPIError
from purchase_advisor.infrastructure.clients.categorization import (
    CategorizationClient,
    build_classification_prompt,
)

API_URL = "http://categorizer.test/api/chat"


def api_response(status_code: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", API_URL), **kwargs)


@pytest.fixture
def categorization_client() -> CategorizationClient:
    return CategorizationClient(api_url=API_URL, timeout=1.0)


async def test_returns_raw_answer(categorization_client):
    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = api_response(json={"response": "ESSENTIAL_DAILY"})

        answer = await categorization_client.categorize("Toothpaste", 4.5)

    assert answer == "ESSENTIAL_DAILY"
    url = mock_post.call_args.args[0]
    payload = mock_post.call_args.kwargs["json"]
    assert url == API_URL
    assert 'Item: "Toothpaste"' in payload["message"]
    assert "Cost: $4.5" in payload["message"]


async def test_timeout_raises_api_error(categorization_client):
    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(CategorizationAPIError, match="timeout"):
            await categorization_client.categorize("Toothpaste", 4.5)


async def test_http_error_raises_api_error(categorization_client):
    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = api_response(503)

        with pytest.raises(CategorizationAPIError, match="503"):
            await categorization_client.categorize("Toothpaste", 4.5)


async def test_network_error_raises_api_error(categorization_client):
    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(CategorizationAPIError, match="unreachable"):
            await categorization_client.categorize("Toothpaste", 4.5)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {"answer": "ESSENTIAL_DAILY"}},
        {"json": {"response": 42}},
        {"json": ["ESSENTIAL_DAILY"]},
        {"text": "not json"},
    ],
)
async def test_malformed_body_raises_api_error(categorization_client, kwargs):
    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = api_response(**kwargs)

        with pytest.raises(CategorizationAPIError, match="Invalid categorization response"):
            await categorization_client.categorize("Toothpaste", 4.5)


def test_prompt_lists_all_categories():
    prompt = build_classification_prompt("Phone case", 19.99)

    for category in ("ESSENTIAL_DAILY", "DISCRETIONARY_SMALL", "HIGH_VALUE"):
        assert category in prompt
    assert "DISCRETIONARY_MEDIUM" not in prompt
