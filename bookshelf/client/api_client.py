"""Base HTTP client for the catalog service."""

import logging
from typing import Any, Optional

import requests
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from bookshelf.models import RemoteResult

logger = logging.getLogger("bookshelf")


class ApiClient:
    """JSON-over-HTTP client that reports failures as results, not exceptions."""

    DEFAULT_TIMEOUT = 30

    def __init__(self, server_url: str, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the client.

        Args:
            server_url: Base URL of the catalog service
            timeout: Request timeout in seconds
        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Any] = None,
    ) -> RemoteResult:
        """
        Send a request and decode its JSON body.

        Args:
            method: HTTP method
            endpoint: Path relative to the server URL (e.g., "/api/data")
            data: JSON body data

        Returns:
            RemoteResult carrying the decoded body, or the failure details
        """
        url = f"{self.server_url}{endpoint}"
        try:
            response = self._session.request(
                method, url, json=data, timeout=self.timeout
            )
            response.raise_for_status()
        except HTTPError as e:
            logger.error(f"HTTP error {e.response.status_code} for {method} {url}")
            if e.response.content:
                logger.debug(f"Response body: {e.response.text}")
            return RemoteResult(
                ok=False,
                status_code=e.response.status_code,
                status_description=e.response.reason,
            )
        except ConnectionError:
            logger.error(f"Connection failed to {self.server_url}")
            return RemoteResult(
                ok=False, error_message=f"Connection failed to {self.server_url}"
            )
        except Timeout:
            logger.error(f"Request timed out: {method} {url}")
            return RemoteResult(ok=False, error_message=f"Request timed out: {url}")
        except RequestException as e:
            logger.error(f"{method} request failed: {e}")
            return RemoteResult(ok=False, error_message=str(e))

        body = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                logger.error(f"Non-JSON response from {method} {endpoint}: {response.text[:100]}")
                return RemoteResult(
                    ok=False,
                    error_message=f"Unexpected response from {url}",
                    status_code=response.status_code,
                )
        return RemoteResult(
            ok=True,
            value=body,
            status_code=response.status_code,
            status_description=response.reason,
        )

    def _get(self, endpoint: str) -> RemoteResult:
        return self._request("GET", endpoint)

    def _post(self, endpoint: str, data: Any) -> RemoteResult:
        return self._request("POST", endpoint, data)

    def _put(self, endpoint: str, data: Any) -> RemoteResult:
        return self._request("PUT", endpoint, data)

    def _delete(self, endpoint: str, data: Optional[Any] = None) -> RemoteResult:
        return self._request("DELETE", endpoint, data)

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
