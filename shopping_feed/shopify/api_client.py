"""
Shopify API Client

Client for the Shopify Admin REST API.
Handles authentication, rate limiting, retries and cursor pagination.
"""

import logging
import time
from typing import Dict, Optional, Tuple
from urllib.parse import parse_qsl, urljoin, urlparse

import requests

logger = logging.getLogger(__name__)


class ShopifyAPIError(Exception):
    """Request to the Admin API failed (transport, auth or HTTP error)."""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class ShopifyAPIClient:
    """
    Client for Shopify Admin REST API.

    Handles:
    - Authentication
    - Rate limiting (2 requests/second)
    - Retries on 429 and 5xx gateway errors
    - Link header pagination (page_info cursors)

    Every failure raises ShopifyAPIError; callers never get a
    partial or empty result in place of an error.

    Usage:
        with ShopifyAPIClient(shop="my-store", access_token="shpat_xxx") as client:
            body, next_query = client.get_page("products.json", {"limit": "250"})
    """

    API_VERSION = "2025-01"
    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}

    def __init__(self, shop: str, access_token: str):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com) or full domain
            access_token: Shopify Admin API access token
        """
        # Normalize shop name
        if ".myshopify.com" in shop:
            self.shop = shop.replace("https://", "").replace("http://", "").split(".myshopify.com")[0]
        else:
            self.shop = shop

        self.access_token = access_token
        self.base_url = f"https://{self.shop}.myshopify.com/admin/api/{self.API_VERSION}"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()

    def _retry_delay(self, response: requests.Response, attempt: int) -> int:
        """Seconds to wait before retrying; Retry-After wins when numeric."""
        default = 2 ** attempt
        try:
            return int(float(response.headers.get("Retry-After", default)))
        except (TypeError, ValueError):
            # HTTP-date form or garbage
            return default

    def _get(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> requests.Response:
        """
        Send a GET request with rate limiting and retries.

        Returns:
            Successful response (status < 400)

        Raises:
            ShopifyAPIError: On HTTP errors, transport errors or exhausted retries
        """
        url = urljoin(self.base_url + "/", endpoint)

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                response = self.session.get(url, params=params, timeout=timeout)
            except requests.exceptions.Timeout as e:
                logger.error("Request timeout: %s", endpoint)
                raise ShopifyAPIError(f"Request timeout: {endpoint}", endpoint=endpoint) from e
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                raise ShopifyAPIError(f"Request failed: {e}", endpoint=endpoint) from e

            # Retry on rate limiting or server errors
            if response.status_code in self.RETRYABLE_STATUS_CODES:
                retry_after = self._retry_delay(response, attempt)
                logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                               response.status_code, endpoint, attempt + 1,
                               self.MAX_RETRIES, retry_after)
                time.sleep(retry_after)
                continue

            # Check for errors
            if response.status_code >= 400:
                error_msg = response.text[:200]
                logger.error("API Error %d: %s", response.status_code, error_msg)
                raise ShopifyAPIError(
                    f"API Error {response.status_code}: {error_msg}",
                    status_code=response.status_code,
                    endpoint=endpoint,
                )

            return response

        logger.error("Max retries (%d) exceeded for GET %s", self.MAX_RETRIES, endpoint)
        raise ShopifyAPIError(
            f"Max retries ({self.MAX_RETRIES}) exceeded for GET {endpoint}",
            endpoint=endpoint,
        )

    def get_page(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> Tuple[Dict, Optional[Dict[str, str]]]:
        """
        Fetch one page of a paginated REST resource.

        Args:
            endpoint: API endpoint (e.g., "products.json")
            params: Query parameters for this page
            timeout: Request timeout in seconds

        Returns:
            Tuple of (response JSON, query params for the next page).
            The second item is None on the last page.
        """
        response = self._get(endpoint, params=params, timeout=timeout)
        return response.json(), self.next_page_query(response)

    @staticmethod
    def next_page_query(response: requests.Response) -> Optional[Dict[str, str]]:
        """
        Extract query params of the rel="next" link.

        Shopify returns them in the Link header; they are passed back
        verbatim (page_info cursor, limit, fields).

        Returns:
            Query parameter dict, or None if there is no next page
        """
        links = getattr(response, "links", None) or {}
        next_link = links.get("next")
        if not next_link or not next_link.get("url"):
            return None

        query = dict(parse_qsl(urlparse(next_link["url"]).query))
        return query or None
