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
Client for managing SAML provider configurations through the identity-platform management API.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import anyio
import httpx
from anyio.lowlevel import checkpoint
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from coreason_sso.config import CoreasonSSOConfig, EnvironmentProjectResolver, ProjectResolver
from coreason_sso.exceptions import (
    ConfigurationNotFoundError,
    InvalidArgumentError,
    ProjectNotAvailableError,
    ServiceError,
    ServiceErrorCode,
    UnknownServiceError,
)
from coreason_sso.models import SAMLProviderConfig, SAMLProviderConfigToCreate, SAMLProviderConfigToUpdate
from coreason_sso.models_internal import InboundSamlConfig, ServiceErrorResponse
from coreason_sso.transport import HTTPXTransport, Transport, TransportResponse
from coreason_sso.utils.logger import logger
from coreason_sso.validator import validate_saml_provider_id

tracer = trace.get_tracer(__name__)

SAML_CONFIGS_COLLECTION = "inboundSamlConfigs"


def _transport_from_config(
    config: CoreasonSSOConfig, client: httpx.AsyncClient | None, auth: httpx.Auth | None
) -> HTTPXTransport:
    return HTTPXTransport(
        config.api_base_url,
        client=client,
        auth=auth,
        timeout=config.http_timeout,
        max_response_bytes=config.max_response_bytes,
    )


class SAMLProviderConfigClientAsync:
    """
    Async client for SAML provider configurations (The Core).

    Every operation validates its arguments locally, then performs exactly one
    request. The client holds no per-call state and can be shared between tasks.
    Cancellation and deadlines come from the caller's cancel scope.

    Attributes:
        transport (Transport): Sends requests to the management API.
        project_resolver (ProjectResolver): Supplies the project id for each call.
        tenant_id (str | None): Scopes all calls to a tenant of the project when set.
    """

    def __init__(
        self,
        transport: Transport,
        project_resolver: ProjectResolver,
        tenant_id: str | None = None,
    ) -> None:
        self.transport = transport
        self.project_resolver = project_resolver
        self.tenant_id = tenant_id

    @classmethod
    def from_config(
        cls,
        config: CoreasonSSOConfig,
        client: httpx.AsyncClient | None = None,
        auth: httpx.Auth | None = None,
    ) -> "SAMLProviderConfigClientAsync":
        """
        Builds a client backed by `HTTPXTransport`.

        Args:
            config: The configuration object.
            client: External async client (optional).
            auth: Credentials attached to every request (optional).
        """
        return cls(
            _transport_from_config(config, client, auth),
            EnvironmentProjectResolver(config),
            tenant_id=config.tenant_id,
        )

    def for_tenant(self, tenant_id: str) -> "SAMLProviderConfigClientAsync":
        """Returns a client sharing this transport, scoped to the given tenant."""
        if not tenant_id:
            raise InvalidArgumentError("tenant id must be a non-empty string")
        return type(self)(self.transport, self.project_resolver, tenant_id=tenant_id)

    def _resolve_project_id(self) -> str:
        project_id = self.project_resolver.resolve()
        if not project_id:
            raise ProjectNotAvailableError()
        return project_id

    def _collection_path(self, project_id: str) -> str:
        if self.tenant_id:
            return f"projects/{project_id}/tenants/{self.tenant_id}/{SAML_CONFIGS_COLLECTION}"
        return f"projects/{project_id}/{SAML_CONFIGS_COLLECTION}"

    async def get(self, provider_id: str) -> SAMLProviderConfig:
        """
        Returns the SAML provider configuration with the given id.

        Raises:
            InvalidArgumentError: If the id is not a SAML provider id.
            ProjectNotAvailableError: If no project id is configured.
            ConfigurationNotFoundError: If the configuration does not exist.
            UnknownServiceError: For any other unsuccessful response.
        """
        validate_saml_provider_id(provider_id)
        response = await self._exchange("get", provider_id, "GET", item=provider_id)
        return self._decode(response)

    async def create(self, config: SAMLProviderConfigToCreate | None) -> SAMLProviderConfig:
        """
        Creates a new SAML provider configuration.

        Args:
            config: The parameters of the new configuration.

        Returns:
            The configuration as stored by the service.

        Raises:
            InvalidArgumentError: If the parameters are missing or invalid.
            ProjectNotAvailableError: If no project id is configured.
            UnknownServiceError: If the service rejects the request.
        """
        if config is None:
            raise InvalidArgumentError("config must not be nil")
        body = config.build_request()
        provider_id = str(config.provider_id)

        response = await self._exchange(
            "create",
            provider_id,
            "POST",
            params={"inboundSamlConfigId": provider_id},
            json_body=body,
        )
        return self._decode(response)

    async def update(self, provider_id: str, config: SAMLProviderConfigToUpdate | None) -> SAMLProviderConfig:
        """
        Applies a sparse update to an existing SAML provider configuration.

        Only the fields touched on `config` are sent, together with an update mask
        naming exactly those fields.

        Args:
            provider_id: The id of the configuration to update.
            config: The changes to apply.

        Returns:
            The updated configuration.

        Raises:
            InvalidArgumentError: If the id or the changes are invalid.
            ProjectNotAvailableError: If no project id is configured.
            ConfigurationNotFoundError: If the configuration does not exist.
            UnknownServiceError: For any other unsuccessful response.
        """
        validate_saml_provider_id(provider_id)
        if config is None:
            raise InvalidArgumentError("config must not be nil")
        body, mask = config.build_request()

        response = await self._exchange(
            "update",
            provider_id,
            "PATCH",
            item=provider_id,
            params={"updateMask": ",".join(mask)},
            json_body=body,
        )
        return self._decode(response)

    async def delete(self, provider_id: str) -> None:
        """
        Deletes the SAML provider configuration with the given id.

        Raises:
            InvalidArgumentError: If the id is not a SAML provider id.
            ProjectNotAvailableError: If no project id is configured.
            ConfigurationNotFoundError: If the configuration does not exist.
            UnknownServiceError: For any other unsuccessful response.
        """
        validate_saml_provider_id(provider_id)
        await self._exchange("delete", provider_id, "DELETE", item=provider_id)

    async def _exchange(
        self,
        operation: str,
        provider_id: str,
        method: str,
        *,
        item: str | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """
        Performs the single request of an operation and classifies unsuccessful responses.

        Emits an OpenTelemetry span `saml_provider_config.<operation>`.
        """
        with tracer.start_as_current_span(f"saml_provider_config.{operation}") as span:
            span.set_attribute("saml.provider_id", provider_id)
            project_id = self._resolve_project_id()
            span.set_attribute("saml.project_id", project_id)
            collection = self._collection_path(project_id)
            # The provider id is always exactly one path segment
            path = f"{collection}/{quote(item, safe='')}" if item else collection
            if params and "updateMask" in params:
                span.set_attribute("saml.update_mask", params["updateMask"])

            # Fail fast if the caller's scope is already cancelled
            await checkpoint()

            response = await self.transport.execute(method, path, params=params, json_body=json_body)
            if not response.is_success:
                error = self._classify(response)
                logger.warning(f"SAML provider config {operation} for {provider_id} failed: {error}")
                span.record_exception(error)
                span.set_status(Status(StatusCode.ERROR, str(error)))
                raise error

            logger.debug(f"SAML provider config {operation} for {provider_id} succeeded")
            span.set_status(Status(StatusCode.OK))
            return response

    @staticmethod
    def _classify(response: TransportResponse) -> ServiceError:
        try:
            envelope = ServiceErrorResponse.model_validate_json(response.content)
        except ValidationError:
            envelope = None

        code = envelope.error_code if envelope is not None else ServiceErrorCode.UNKNOWN
        if code is ServiceErrorCode.CONFIGURATION_NOT_FOUND:
            detail = envelope.detail if envelope is not None else None
            message = "No SAML provider configuration found for the given identifier"
            return ConfigurationNotFoundError(
                f"{message} ({detail})." if detail else f"{message}.",
                status_code=response.status_code,
                body=response.content,
                code=code,
            )

        body_text = response.content.decode("utf-8", errors="replace")
        return UnknownServiceError(
            f"Unexpected response from the management API (status {response.status_code}): {body_text}",
            status_code=response.status_code,
            body=response.content,
            code=code,
        )

    @staticmethod
    def _decode(response: TransportResponse) -> SAMLProviderConfig:
        try:
            return InboundSamlConfig.model_validate_json(response.content).to_provider_config()
        except ValidationError as e:
            logger.error(f"Invalid SAML provider config in response: {e}")
            raise UnknownServiceError(
                f"Failed to decode SAML provider config: {e}",
                status_code=response.status_code,
                body=response.content,
            ) from e


class SAMLProviderConfigClient:
    """
    Sync Facade for SAMLProviderConfigClientAsync.
    Each call runs the async operation to completion with `anyio.run`.
    """

    def __init__(
        self,
        transport: Transport,
        project_resolver: ProjectResolver,
        tenant_id: str | None = None,
    ) -> None:
        self._async = SAMLProviderConfigClientAsync(transport, project_resolver, tenant_id=tenant_id)

    @classmethod
    def from_config(cls, config: CoreasonSSOConfig, auth: httpx.Auth | None = None) -> "SAMLProviderConfigClient":
        """
        Builds a sync client backed by `HTTPXTransport`.
        No shared httpx client is used, since every call runs in a fresh event loop.
        """
        return cls(
            _transport_from_config(config, None, auth),
            EnvironmentProjectResolver(config),
            tenant_id=config.tenant_id,
        )

    @property
    def tenant_id(self) -> str | None:
        return self._async.tenant_id

    def for_tenant(self, tenant_id: str) -> "SAMLProviderConfigClient":
        scoped = self._async.for_tenant(tenant_id)
        return type(self)(scoped.transport, scoped.project_resolver, tenant_id=scoped.tenant_id)

    def get(self, provider_id: str) -> SAMLProviderConfig:
        return anyio.run(self._async.get, provider_id)

    def create(self, config: SAMLProviderConfigToCreate | None) -> SAMLProviderConfig:
        return anyio.run(self._async.create, config)

    def update(self, provider_id: str, config: SAMLProviderConfigToUpdate | None) -> SAMLProviderConfig:
        return anyio.run(self._async.update, provider_id, config)

    def delete(self, provider_id: str) -> None:
        anyio.run(self._async.delete, provider_id)
