"""Categorization API HTTP client for classifying cheap purchases"""

import httpx
from purchase_advisor.domain.exceptions import CategorizationAPIError
from purchase_advisor.config import settings
from purchase_advisor.infrastructure.observability.metrics import categorization_failures_counter


def build_classification_prompt(item_name: str, cost: float) -> str:
    """Prompt asking the chat model for exactly one category name"""
    return f"""You are a purchase classification system. Classify this purchase into exactly one category:

ESSENTIAL_DAILY: Basic necessities under $50 (sanitizer, paper towels, toothpaste, basic food items)
DISCRETIONARY_SMALL: Non-essential items under $50 (coffee makers, phone cases, gadgets, entertainment)
HIGH_VALUE: Any item over $300 regardless of type

Item: "{item_name}"
Cost: ${cost}

Respond with ONLY the category name: ESSENTIAL_DAILY, DISCRETIONARY_SMALL, or HIGH_VALUE"""


class CategorizationClient:
    """Client for the external chat endpoint that categorizes purchases"""

    def __init__(self, api_url: str | None = None, timeout: float | None = None):
        self.api_url = api_url or settings.categorization_api_url
        self.timeout = timeout or settings.http_timeout_seconds

    async def categorize(self, item_name: str, cost: float) -> str:
        """
        Ask the chat endpoint for a category and return its raw answer.

        The answer is not validated here; callers map it onto known categories.

        Raises:
            CategorizationAPIError: On timeout, HTTP errors, or malformed response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json={"message": build_classification_prompt(item_name, cost)},
                )
                response.raise_for_status()
                data = response.json()
                answer = data["response"]
                if not isinstance(answer, str):
                    raise TypeError(f"expected string response, got {type(answer).__name__}")
                return answer

            except httpx.TimeoutException as e:
                categorization_failures_counter.labels(reason="timeout").inc()
                raise CategorizationAPIError(f"Categorization API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                categorization_failures_counter.labels(reason="http_status").inc()
                raise CategorizationAPIError(f"Categorization API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                categorization_failures_counter.labels(reason="network").inc()
                raise CategorizationAPIError(f"Categorization API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                categorization_failures_counter.labels(reason="malformed").inc()
                raise CategorizationAPIError(f"Invalid categorization response: {e}") from e
