# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sso

import json
from typing import Any

import httpx
import pytest

from coreason_sso.client import SAMLProviderConfigClientAsync
from coreason_sso.config import StaticProjectResolver
from coreason_sso.models import SAMLProviderConfig
from coreason_sso.transport import HTTPXTransport

MOCK_PROJECT_ID = "mock-project-id"
MOCK_BASE_URL = "https://identitytoolkit.mock"

SAML_CONFIG_RESPONSE: dict[str, Any] = {
    "name": "projects/mock-project-id/inboundSamlConfigs/saml.provider",
    "idpConfig": {
        "idpEntityId": "IDP_ENTITY_ID",
        "ssoUrl": "https://example.com/login",
        "signRequest": True,
        "idpCertificates": [
            {"x509Certificate": "CERT1"},
            {"x509Certificate": "CERT2"},
        ],
    },
    "spConfig": {
        "spEntityId": "RP_ENTITY_ID",
        "callbackUri": "https://projectId.firebaseapp.com/__/auth/handler",
    },
    "displayName": "samlProviderName",
    "enabled": True,
}

NOT_FOUND_RESPONSE: dict[str, Any] = {
    "error": {
        "message": "CONFIGURATION_NOT_FOUND",
    }
}

IDP_CERTIFICATES = [
    {"x509Certificate": "CERT1"},
    {"x509Certificate": "CERT2"},
]

EXPECTED_CONFIG = SAMLProviderConfig(
    provider_id="saml.provider",
    display_name="samlProviderName",
    enabled=True,
    idp_entity_id="IDP_ENTITY_ID",
    sso_url="https://example.com/login",
    request_signing_enabled=True,
    x509_certificates=("CERT1", "CERT2"),
    rp_entity_id="RP_ENTITY_ID",
    callback_url="https://projectId.firebaseapp.com/__/auth/handler",
)

INVALID_SAML_CONFIG_IDS = ["", "invalid.id", "oidc.config"]


class MockAuthServer:
    """
    Stands in for the management API: answers every request with a fixed status
    and body, and records the requests it received.
    """

    def __init__(self, body: Any, status_code: int = 200) -> None:
        self.body = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def request(self) -> httpx.Request:
        assert len(self.requests) == 1, f"expected exactly one request, got {len(self.requests)}"
        return self.requests[0]

    def request_json(self) -> Any:
        return json.loads(self.request.content)

    def transport(self) -> HTTPXTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return HTTPXTransport(MOCK_BASE_URL, client=client)

    def client(self, tenant_id: str | None = None) -> SAMLProviderConfigClientAsync:
        return SAMLProviderConfigClientAsync(
            self.transport(), StaticProjectResolver(MOCK_PROJECT_ID), tenant_id=tenant_id
        )


@pytest.fixture
def echo_server() -> MockAuthServer:
    return MockAuthServer(SAML_CONFIG_RESPONSE)


@pytest.fixture
def not_found_server() -> MockAuthServer:
    return MockAuthServer(NOT_FOUND_RESPONSE, status_code=404)


@pytest.fixture
def unconfigured_client() -> SAMLProviderConfigClientAsync:
    """A client with no project id and a transport that must never be used."""

    def fail(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request: {request.method} {request.url}")

    client = httpx.AsyncClient(transport=httpx.MockTransport(fail))
    return SAMLProviderConfigClientAsync(HTTPXTransport(MOCK_BASE_URL, client=client), StaticProjectResolver(None))
