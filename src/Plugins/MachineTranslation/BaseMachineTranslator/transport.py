"""
HTTP transport shared by the machine translation connectors.

One call maps to exactly one request. Failures are raised, never turned into an
empty result.
"""

import logging
from typing import Dict, Optional

import requests

from .errors import ConfigurationError, TransportError


class HttpTransport:
    """Thin synchronous wrapper around ``requests``."""

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Network timeout in seconds, or None for the library default.
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def post(
        self,
        url: str,
        payload: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None
    ) -> str:
        """Send ``payload`` as a JSON body and return the raw response text.

        Args:
            url: Endpoint address.
            payload: Serialized JSON request body.
            headers: Extra request headers.
            params: Query string parameters.

        Returns:
            str: Response body.

        Raises:
            ConfigurationError: If ``url`` is empty.
            TransportError: If the request fails or the status is not 2xx.
        """
        if not url or not url.strip():
            raise ConfigurationError("Translation endpoint is not configured")

        request_headers = {"Content-Type": "application/json; charset=UTF-8"}
        if headers:
            request_headers.update(headers)

        try:
            body = payload.encode("utf-8")
        except UnicodeEncodeError as e:
            self.logger.error(f"Request body for {url} could not be encoded: {e}")
            raise TransportError(f"Request body could not be encoded: {e}") from e

        self.logger.debug(f"POST {url} ({len(payload)} chars)")
        try:
            response = requests.request(
                "POST",
                url,
                headers=request_headers,
                params=params,
                data=body,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            error_detail = self._error_detail(response)
            self.logger.error(f"Translation service returned HTTP {response.status_code}{error_detail}")
            raise TransportError(
                f"Translation service error (HTTP {response.status_code}){error_detail}",
                status_code=response.status_code
            )

        return response.text

    @staticmethod
    def _error_detail(response) -> str:
        try:
            error_json = response.json()
        except ValueError:
            return ""
        if not isinstance(error_json, dict) or "error" not in error_json:
            return ""
        error = error_json["error"]
        if isinstance(error, dict):
            message = error.get("message", "")
        else:
            message = str(error)
        return f": {message}" if message else ""
