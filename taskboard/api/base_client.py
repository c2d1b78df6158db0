"""
Base API client with common functionality
"""

import asyncio
from abc import ABC
from typing import Optional, Dict, Any
import httpx
from taskboard.utils.logger import logger
from taskboard.utils.error_handler import APIError, NotFoundError
from taskboard.config.constants import MAX_RETRIES, RETRY_DELAY, REQUEST_TIMEOUT


class BaseAPIClient(ABC):
    """Base class for API clients with common functionality"""

    def __init__(
        self,
        base_url: str,
        timeout: int = REQUEST_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize base API client

        Args:
            base_url: Base URL for API
            timeout: Request timeout in seconds
            http_client: Preconfigured httpx client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        self.logger = logger

    async def _request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
        retries: int = MAX_RETRIES,
    ) -> Any:
        """
        Make HTTP request with retry logic

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: API endpoint
            headers: Request headers
            params: Query parameters
            json_data: JSON body
            retries: Number of retry attempts

        Returns:
            Decoded JSON body ({} for empty responses)

        Raises:
            NotFoundError: If the server answers 404 (not retried)
            APIError: If request fails after all retries
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        for attempt in range(retries):
            try:
                self.logger.debug(f"Request: {method} {url} (attempt {attempt + 1}/{retries})")

                request_kwargs = {
                    "method": method,
                    "url": url,
                    "headers": headers,
                    "params": params,
                }

                if json_data is not None:
                    request_kwargs["json"] = json_data
                    self.logger.debug(f"Request JSON data: {json_data}")

                response = await self.client.request(**request_kwargs)

                self.logger.debug(f"Response status: {response.status_code}")
                if response.status_code >= 400:
                    self.logger.warning(f"Error response body: {response.text[:1000]}")

                if response.status_code == 404:
                    raise NotFoundError(f"{method} {url} returned 404")

                response.raise_for_status()

                # Handle empty response (204 No Content or empty body)
                if response.status_code == 204 or not response.text.strip():
                    return {}

                try:
                    return response.json()
                except ValueError:
                    # Body is not JSON but the call succeeded
                    return {}

            except httpx.HTTPStatusError as e:
                if attempt < retries - 1:
                    self.logger.warning(
                        f"Request failed with status {e.response.status_code}, "
                        f"retrying in {RETRY_DELAY * (attempt + 1)} seconds..."
                    )
                    await asyncio.sleep(RETRY_DELAY * (attempt + 1))
                else:
                    self.logger.error(f"Request failed after {retries} attempts: {e}")
                    raise APIError(
                        f"HTTP error! status: {e.response.status_code}",
                        error_code=str(e.response.status_code),
                    ) from e

            except httpx.RequestError as e:
                if attempt < retries - 1:
                    self.logger.warning(
                        f"Request error: {e}, retrying in {RETRY_DELAY * (attempt + 1)} seconds..."
                    )
                    await asyncio.sleep(RETRY_DELAY * (attempt + 1))
                else:
                    self.logger.error(f"Request error after {retries} attempts: {e}")
                    raise APIError(f"Request error: {e}") from e

        raise APIError(f"{method} {url} was not attempted (retries={retries})")

    async def get(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make GET request"""
        return await self._request("GET", endpoint, headers=headers, params=params)

    async def post(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Make POST request"""
        return await self._request("POST", endpoint, headers=headers, json_data=json_data)

    async def patch(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Make PATCH request"""
        return await self._request("PATCH", endpoint, headers=headers, json_data=json_data)

    async def delete(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make DELETE request"""
        return await self._request("DELETE", endpoint, headers=headers)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
