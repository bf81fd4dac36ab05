"""
HTTP transport for form submissions.

Posts form-encoded field values and parses the command list the server
answers with.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from prettyforms.schemas.commands import Command, CommandList

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The request failed or its response could not be processed."""


class FormTransport:
    """
    Async HTTP client for submitting forms.

    Features:
    - Lazily created, reusable ``httpx.AsyncClient``
    - Form encoding with ``[]`` keys repeated per list element
    - Network, status and payload failures surfaced as ``TransportError``
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.extra_headers = headers or {}
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Get default headers for submissions."""
        headers = {
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
            "User-Agent": "PrettyForms/1.0",
        }
        headers.update(self.extra_headers)
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def post_form(self, url: str, values: dict[str, Any]) -> list[Command]:
        """
        Submit field values and return the server's commands.

        Args:
            url: Target URL
            values: Field values; list values are sent once per element

        Returns:
            Commands in the order the server sent them

        Raises:
            TransportError: On network errors, error statuses or a body that
                is not a JSON array of commands
        """
        client = await self._get_client()
        try:
            response = await client.post(url, data=encode_form(values))
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        try:
            return CommandList.validate_python(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise TransportError(f"Malformed response from {url}: {e}") from e

    async def __aenter__(self) -> "FormTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


def encode_form(values: dict[str, Any]) -> dict[str, list[str]]:
    """
    Normalize field values for form encoding.

    Every key maps to a list of strings, which httpx sends as one pair per
    element; None becomes an empty string.
    """
    form: dict[str, list[str]] = {}
    for key, value in values.items():
        items = value if isinstance(value, (list, tuple)) else [value]
        form[key] = ["" if item is None else str(item) for item in items]
    return form
