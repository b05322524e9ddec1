# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sso

"""
HTTP transport for the identity-platform management API.

The client only depends on the `Transport` protocol: one request in, one
(status, body) pair out. `HTTPXTransport` is the default implementation.
"""

from collections.abc import Mapping
from typing import Any, Protocol

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from pydantic import BaseModel, ConfigDict

from coreason_sso.exceptions import OversizedResponseError
from coreason_sso.utils.logger import logger


class TransportResponse(BaseModel):
    """
    Raw result of a single HTTP exchange.

    Attributes:
        status_code (int): The HTTP status code.
        content (bytes): The raw response body.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Performs one authenticated request against the management API."""

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """
        Sends the request and returns the raw response.

        Raises:
            httpx.TransportError: On connection-level failures.
        """
        ...


class HTTPXTransport:
    """
    `Transport` backed by httpx.

    Attributes:
        base_url (str): The management API base URL; request paths are appended to it.
        auth (httpx.Auth | None): Attaches credentials to every request.
        timeout (float): Request timeout in seconds.
        max_response_bytes (int): Responses larger than this raise OversizedResponseError.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        max_response_bytes: int = 1_000_000,
    ) -> None:
        """
        Initialize the HTTPXTransport.

        Args:
            base_url: The management API base URL (e.g. https://identitytoolkit.googleapis.com/v2).
            client: External async client (optional). Without one, a transient client is opened
                per request, so the transport can be used from any event loop.
            auth: Credentials to attach to each request (optional).
            timeout: Timeout in seconds for transient clients.
            max_response_bytes: Maximum accepted response size in bytes.
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes
        self._client = client
        if client is not None:
            HTTPXClientInstrumentor().instrument_client(client)

    def _new_client(self) -> httpx.AsyncClient:
        client = httpx.AsyncClient(timeout=self.timeout)
        # Instrument the client for distributed tracing
        HTTPXClientInstrumentor().instrument_client(client)
        return client

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if self._client is not None:
            return await self._send(self._client, method, url, params, json_body)
        async with self._new_client() as client:
            return await self._send(client, method, url, params, json_body)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: Mapping[str, str] | None,
        json_body: Mapping[str, Any] | None,
    ) -> TransportResponse:
        logger.debug(f"{method} {url}")
        auth = self.auth if self.auth is not None else httpx.USE_CLIENT_DEFAULT
        async with client.stream(method, url, params=params, json=json_body, auth=auth) as response:
            content_length = response.headers.get("Content-Length")
            if content_length and content_length.isdigit() and int(content_length) > self.max_response_bytes:
                raise OversizedResponseError(
                    f"Response size {content_length} exceeds limit of {self.max_response_bytes} bytes"
                )

            content = bytearray()
            async for chunk in response.aiter_bytes():
                content.extend(chunk)
                if len(content) > self.max_response_bytes:
                    raise OversizedResponseError(f"Response exceeded limit of {self.max_response_bytes} bytes")

            return TransportResponse(status_code=response.status_code, content=bytes(content))
