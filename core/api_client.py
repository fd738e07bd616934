"""
HTTP client for a remote storefront API.

Used when the catalog or order submission is delegated to another
deployment of the storefront API (CATALOG_SOURCE="api" or
ORDER_BACKEND="api"). Speaks the same JSON contract this server exposes
under /api.

Error handling:
    - Network failures (connection refused, timeout) raise APIRequestError
      with status_code None.
    - Non-2xx responses raise APIRequestError with the HTTP status and the
      decoded error body (JSON if possible, text otherwise).
    - 2xx responses without a JSON content type return None.

Usage:
    client = StorefrontAPIClient("http://localhost:5001/api", timeout=10)
    products = client.get_products()
    order = client.create_order(order_create)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from models.inquiry import Inquiry, InquiryCreate
from models.order import Order, OrderCreate
from .exceptions import APIRequestError


class StorefrontAPIClient:
    """
    Thin JSON client over ``requests``.

    Catalog methods return raw dictionaries; parsing into Product models
    happens in the catalog service so that parse failures are reported as
    catalog fetch errors. Order and inquiry methods return parsed models.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. "http://localhost:5001/api"
            timeout: Per-request timeout in seconds
            session: Optional requests.Session (injected in tests)
            logger: Logger instance (creates default if not provided)

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger("cashew_store.core.api_client")

    @property
    def base_url(self) -> str:
        return self._base_url

    # =========================================================================
    # CATALOG
    # =========================================================================

    def get_products(self) -> List[Dict[str, Any]]:
        """Fetch all products (raw records)."""
        return self._request("GET", "/products") or []

    # =========================================================================
    # ORDERS / INQUIRIES
    # =========================================================================

    def create_order(self, order: OrderCreate) -> Order:
        """
        Submit an order.

        Args:
            order: Validated order payload

        Returns:
            Created Order with server-assigned id

        Raises:
            APIRequestError: On network failure, non-2xx response, or a
                response body that is not a valid order
        """
        data = self._request("POST", "/orders", order.to_dict())
        return self._parse(Order, data, "/orders")

    def create_inquiry(self, inquiry: InquiryCreate) -> Inquiry:
        """Submit an inquiry; returns the created Inquiry."""
        data = self._request("POST", "/inquiries", inquiry.to_dict())
        return self._parse(Inquiry, data, "/inquiries")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _url(self, endpoint: str) -> str:
        if endpoint.startswith("http"):
            return endpoint
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return f"{self._base_url}{endpoint}"

    def _request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        """
        Perform one request and decode the JSON response.

        Raises:
            APIRequestError: On network failure or non-2xx status
        """
        url = self._url(endpoint)
        headers = {"Accept": "application/json"}
        if payload is not None:
            headers["Content-Type"] = "application/json"

        self._logger.debug(f"[API] {method} {url}")

        try:
            response = self._session.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            self._logger.error(f"[API Request Error] {method} {url}: {e}")
            raise APIRequestError(f"Request failed: {e}", url=url) from e

        if not response.ok:
            error_data = self._decode_error(response)
            message = "API request failed"
            if isinstance(error_data, dict):
                message = error_data.get("message") or error_data.get("error") or message
            elif error_data:
                message = str(error_data)

            self._logger.error(
                f"[API Error] {response.status_code} {response.reason} for {method} {url}"
            )
            raise APIRequestError(
                message,
                status_code=response.status_code,
                data=error_data,
                url=url,
            )

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise APIRequestError(
                "Invalid JSON in response", status_code=response.status_code, url=url
            ) from e

    @staticmethod
    def _decode_error(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _parse(self, model, data: Any, endpoint: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise APIRequestError(
                f"Unexpected response from {endpoint}", data=data, url=self._url(endpoint)
            ) from e
