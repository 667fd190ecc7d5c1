"""Purchase classification behind an LRU + TTL cache

Purchases of $300 or more are HIGH_VALUE by price alone. Cheaper purchases
are sent to an external categorization service; any failure there falls back
to DISCRETIONARY_SMALL. Successful and price-rule results are cached.
"""

import logging
import math
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Protocol
from purchase_advisor.domain.exceptions import CategorizationAPIError, InvalidClassificationInputError
from purchase_advisor.domain.models import CacheEntry, ClassificationResult, PurchaseCategory

HIGH_VALUE_THRESHOLD = 300
FALLBACK_CATEGORY = PurchaseCategory.DISCRETIONARY_SMALL
DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 30 * 60

# Categories the external service may answer with
CLASSIFIER_CATEGORIES = frozenset(
    {
        PurchaseCategory.ESSENTIAL_DAILY.value,
        PurchaseCategory.DISCRETIONARY_SMALL.value,
        PurchaseCategory.HIGH_VALUE.value,
    }
)


class Categorizer(Protocol):
    """External categorization call: returns the raw category text"""

    async def categorize(self, item_name: str, cost: float) -> str: ...


class ClassificationCache:
    """
    Process-wide classification store with TTL expiry and LRU eviction.

    Expired entries are purged lazily on every read and write. Reads move the
    entry to the most-recent end; inserting at capacity evicts the
    least-recently-touched entry. Access is serialised with a lock because
    reads reorder shared state.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            self._purge_expired()
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def set(self, key: str, category: PurchaseCategory) -> CacheEntry:
        with self._lock:
            self._purge_expired()
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)

            now = self._clock()
            entry = CacheEntry(key=key, category=category, timestamp=now, expires_at=now + self.ttl_seconds)
            self._entries[key] = entry
            return entry

    def evict(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            self._purge_expired()
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "entries": [
                    {
                        "key": entry.key,
                        "category": entry.category.value,
                        "timestamp": entry.timestamp,
                        "expires_at": entry.expires_at,
                    }
                    for entry in self._entries.values()
                ],
            }


def apply_price_rules(cost: float) -> Optional[PurchaseCategory]:
    """Hard override by price; None means no rule applies"""
    if cost >= HIGH_VALUE_THRESHOLD:
        return PurchaseCategory.HIGH_VALUE
    return None


def _format_cost(cost: float) -> str:
    if isinstance(cost, float) and cost.is_integer():
        return str(int(cost))
    return str(cost)


def cache_key(item_name: str, cost: float) -> str:
    """Normalised item name plus cost, e.g. 'macbook air m3-1299'"""
    return f"{item_name.strip().lower()}-{_format_cost(cost)}"


def validate_classification_input(item_name: Any, cost: Any) -> None:
    if not isinstance(item_name, str) or not item_name.strip():
        raise InvalidClassificationInputError("Item name is required and must be a non-empty string")
    if isinstance(cost, bool) or not isinstance(cost, (int, float)) or math.isnan(cost) or cost < 0:
        raise InvalidClassificationInputError("Cost must be a non-negative number")


def parse_category(raw: Optional[str]) -> Optional[PurchaseCategory]:
    """Map the service's answer onto a known category, None if unrecognised"""
    if not isinstance(raw, str):
        return None
    normalized = raw.strip().upper()
    if normalized in CLASSIFIER_CATEGORIES:
        return PurchaseCategory(normalized)
    return None


class PurchaseClassifier:
    """Classifies purchases into spend categories; never raises to the caller"""

    def __init__(self, cache: ClassificationCache, categorizer: Categorizer):
        self.cache = cache
        self.categorizer = categorizer

    async def classify(self, item_name: Any, cost: Any) -> ClassificationResult:
        try:
            validate_classification_input(item_name, cost)
        except InvalidClassificationInputError as e:
            logging.warning(f"Invalid classification input: {e}")
            return ClassificationResult(category=FALLBACK_CATEGORY, cached=False)

        key = cache_key(item_name, cost)

        cached = self.cache.get(key)
        if cached is not None:
            return ClassificationResult(category=cached.category, cached=True)

        price_category = apply_price_rules(cost)
        if price_category is not None:
            self.cache.set(key, price_category)
            return ClassificationResult(category=price_category, cached=False)

        try:
            raw = await self.categorizer.categorize(item_name.strip(), cost)
        except CategorizationAPIError as e:
            logging.warning(f"Classification failed for '{item_name}' (${cost}), using fallback: {e}")
            return ClassificationResult(category=FALLBACK_CATEGORY, cached=False)
        except Exception as e:
            logging.error(f"Unexpected categorizer error for '{item_name}' (${cost}), using fallback: {e}")
            return ClassificationResult(category=FALLBACK_CATEGORY, cached=False)

        category = parse_category(raw)
        if category is None:
            logging.warning(f"Invalid classification response for '{item_name}': {raw!r}, using fallback")
            return ClassificationResult(category=FALLBACK_CATEGORY, cached=False)

        self.cache.set(key, category)
        return ClassificationResult(category=category, cached=False)
