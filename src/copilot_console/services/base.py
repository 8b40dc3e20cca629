"""
Base class for the HTTP services called by plugins
"""

from typing import Dict, Optional

import httpx


class ServiceError(Exception):
    """Raised when an external service call does not succeed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServiceClient:
    """Builds one httpx client per call with the service's headers"""

    base_url: str = ""

    def __init__(self, timeout: float = 60.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Get default headers for API requests"""
        return {
            "User-Agent": "copilot-console/0.1.0",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    def _handle_error(self, response: httpx.Response, service: str) -> None:
        """Raise ServiceError for non-success responses"""
        if response.is_error:
            raise ServiceError(
                f"{service} request failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
