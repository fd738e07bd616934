"""
Product catalog accessor with an in-memory cache.

The catalog is read-only: products come from a backing source and are
parsed into Product models at this boundary.

Sources:
    StorageCatalogSource - products held by this server's MemStorage
    StaticCatalogSource  - JSON file shipped with the deployment
    ApiCatalogSource     - remote storefront API (StorefrontAPIClient)

Caching:
    - The most recent full product list is kept in memory
    - A cached list is fresh for ``stale_seconds`` (default 5 minutes)
    - get_by_id() and list_by_category() reuse a fresh cached list, else
      fetch the full list again

Retry policy:
    - A failed fetch is retried up to ``max_retries`` times with an
      exponential delay (retry_delay, 2x, 4x ... capped at 30 seconds)
    - 404 and 401 responses are never retried
    - Parse failures count as fetch failures

Errors:
    - CatalogFetchError:    the catalog could not be obtained (transient)
    - ProductNotFoundError: the catalog was obtained but has no such id

Usage:
    catalog = ProductCatalog(StaticCatalogSource("data/products.json"))
    products = catalog.list()
    product = catalog.get_by_id("raw-w320")
"""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from core.api_client import StorefrontAPIClient
from core.exceptions import APIRequestError, CatalogFetchError, ProductNotFoundError
from models.product import Product, ProductList
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Statuses that will not get better by asking again
NON_RETRYABLE_STATUSES = frozenset({401, 404})

MAX_RETRY_DELAY_SECONDS = 30.0


class StaticCatalogSource:
    """Reads raw product records from a JSON file."""

    def __init__(self, path):
        self._path = Path(path)

    @property
    def name(self) -> str:
        return f"static:{self._path.name}"

    def fetch_products(self) -> Any:
        """
        Load the raw product list.

        Raises:
            CatalogFetchError: If the file is missing or not valid JSON
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise CatalogFetchError(f"Catalog file not found: {self._path}", status_code=404) from e
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogFetchError(f"Failed to read catalog file {self._path}: {e}") from e


class StorageCatalogSource:
    """Reads products from server storage (the seeded MemStorage)."""

    def __init__(self, storage):
        self._storage = storage

    @property
    def name(self) -> str:
        return "storage"

    def fetch_products(self) -> Any:
        return self._storage.get_products()


class ApiCatalogSource:
    """Reads raw product records from a remote storefront API."""

    def __init__(self, client: StorefrontAPIClient):
        self._client = client

    @property
    def name(self) -> str:
        return f"api:{self._client.base_url}"

    def fetch_products(self) -> Any:
        """
        Fetch the raw product list.

        Raises:
            APIRequestError: On network failure or non-2xx status
        """
        return self._client.get_products()


class ProductCatalog:
    """
    Read-only product catalog with cache and bounded retry.

    Thread Safety:
        The cached list is replaced atomically; a lock serializes fetches
        so concurrent cache misses do not stampede the source.
    """

    def __init__(
        self,
        source,
        stale_seconds: float = 300.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        """
        Initialize the catalog.

        Args:
            source: Object with fetch_products() returning raw records
            stale_seconds: How long a fetched list is served from memory
            max_retries: Retries after the first failed attempt
            retry_delay_seconds: Delay before the first retry
        """
        self._source = source
        self._stale_seconds = stale_seconds
        self._max_retries = max_retries
        self._retry_delay = retry_delay_seconds

        self._products: Optional[List[Product]] = None
        self._fetched_at: float = 0.0
        self._fetch_lock = threading.Lock()

        logger.info(
            f"ProductCatalog initialized (source: {getattr(source, 'name', source)}, "
            f"stale after {stale_seconds}s)"
        )

    @property
    def source(self):
        """The backing source products are fetched from."""
        return self._source

    @property
    def is_cached(self) -> bool:
        """Whether a fresh product list is held in memory."""
        return self._products is not None and self.age_seconds < self._stale_seconds

    @property
    def age_seconds(self) -> float:
        """Seconds since the cached list was fetched (inf if never)."""
        if self._products is None:
            return float("inf")
        return time.monotonic() - self._fetched_at

    def list(self) -> List[Product]:
        """
        Get all products.

        Returns:
            A new list of products, in catalog order

        Raises:
            CatalogFetchError: If the catalog cannot be fetched or parsed
        """
        return list(self._get_products())

    def get_by_id(self, product_id: str) -> Product:
        """
        Get one product.

        Raises:
            ProductNotFoundError: If the catalog has no such product
            CatalogFetchError: If the catalog cannot be fetched
        """
        for product in self._get_products():
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def list_by_category(self, category: str) -> List[Product]:
        """Get products whose category matches exactly."""
        return [p for p in self._get_products() if p.category == category]

    def invalidate(self) -> None:
        """Drop the cached list; the next read fetches again."""
        self._products = None
        self._fetched_at = 0.0
        logger.debug("Catalog cache invalidated")

    def _get_products(self) -> List[Product]:
        products = self._products
        if products is not None and self.age_seconds < self._stale_seconds:
            return products

        with self._fetch_lock:
            # Another thread may have refreshed while we waited
            if self._products is not None and self.age_seconds < self._stale_seconds:
                return self._products

            products = self._fetch_with_retry()
            self._products = products
            self._fetched_at = time.monotonic()
            return products

    def _fetch_with_retry(self) -> List[Product]:
        """
        Fetch and parse the product list under the retry policy.

        Raises:
            CatalogFetchError: When all attempts fail or the failure is
                not retryable
        """
        failure_count = 0

        while True:
            try:
                products = self._fetch_once()
                if failure_count:
                    logger.info(f"Catalog fetch recovered after {failure_count} failures")
                logger.debug(f"Catalog fetched: {len(products)} products")
                return products

            except CatalogFetchError as e:
                failure_count += 1
                status = e.status_code

                if status in NON_RETRYABLE_STATUSES or failure_count > self._max_retries:
                    logger.error(
                        f"Catalog fetch failed after {failure_count} attempt(s): {e.message}"
                    )
                    raise CatalogFetchError(e.message, status_code=status, attempts=failure_count) from e

                delay = min(self._retry_delay * (2 ** (failure_count - 1)), MAX_RETRY_DELAY_SECONDS)
                logger.warning(
                    f"Catalog fetch failed ({failure_count}/{self._max_retries} retries): "
                    f"{e.message}; retrying in {delay:.1f}s"
                )
                if delay > 0:
                    time.sleep(delay)

    def _fetch_once(self) -> List[Product]:
        """One attempt: fetch raw records and parse them."""
        try:
            raw = self._source.fetch_products()
        except APIRequestError as e:
            raise CatalogFetchError(
                f"Failed to fetch products: {e.message}", status_code=e.status_code
            ) from e

        try:
            return ProductList.validate_python(raw)
        except ValidationError as e:
            raise CatalogFetchError(
                f"Catalog data is malformed ({e.error_count()} errors)"
            ) from e
