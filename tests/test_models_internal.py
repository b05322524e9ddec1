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

import pytest
from pydantic import ValidationError

from conftest import EXPECTED_CONFIG, SAML_CONFIG_RESPONSE
from coreason_sso.exceptions import ServiceErrorCode
from coreason_sso.models_internal import InboundSamlConfig, ServiceErrorResponse


def test_decode_flattens_sections() -> None:
    resource = InboundSamlConfig.model_validate_json(json.dumps(SAML_CONFIG_RESPONSE))
    assert resource.provider_id == "saml.provider"
    assert resource.to_provider_config() == EXPECTED_CONFIG


def test_decode_sparse_resource_uses_defaults() -> None:
    resource = InboundSamlConfig.model_validate({"name": "projects/p/tenants/t/inboundSamlConfigs/saml.sparse"})
    config = resource.to_provider_config()

    assert config.provider_id == "saml.sparse"
    assert config.display_name == ""
    assert config.enabled is False
    assert config.x509_certificates == ()
    assert config.callback_url == ""


def test_decode_null_display_name() -> None:
    resource = InboundSamlConfig.model_validate({**SAML_CONFIG_RESPONSE, "displayName": None})
    assert resource.to_provider_config().display_name == ""


def test_decode_ignores_unknown_fields() -> None:
    resource = InboundSamlConfig.model_validate({**SAML_CONFIG_RESPONSE, "createTime": "2025-01-01T00:00:00Z"})
    assert resource.to_provider_config() == EXPECTED_CONFIG


def test_decode_rejects_non_saml_resource() -> None:
    resource = InboundSamlConfig.model_validate({"name": "projects/p/oauthIdpConfigs/oidc.provider"})
    with pytest.raises(ValidationError):
        resource.to_provider_config()


def test_decode_requires_name() -> None:
    with pytest.raises(ValidationError):
        InboundSamlConfig.model_validate({"displayName": "no name"})


@pytest.mark.parametrize(
    ("message", "code", "detail"),
    [
        ("CONFIGURATION_NOT_FOUND", ServiceErrorCode.CONFIGURATION_NOT_FOUND, None),
        ("CONFIGURATION_NOT_FOUND : no such config", ServiceErrorCode.CONFIGURATION_NOT_FOUND, "no such config"),
        ("INVALID_CONFIG : bad", ServiceErrorCode.UNKNOWN, "bad"),
        ("", ServiceErrorCode.UNKNOWN, None),
        ("configuration_not_found", ServiceErrorCode.UNKNOWN, None),
    ],
)
def test_error_code_parsing(message: str, code: ServiceErrorCode, detail: str | None) -> None:
    envelope = ServiceErrorResponse.model_validate({"error": {"code": 404, "message": message}})
    assert envelope.error_code is code
    assert envelope.detail == detail


def test_error_code_is_not_substring_matched() -> None:
    envelope = ServiceErrorResponse.model_validate({"error": {"message": "INTERNAL : CONFIGURATION_NOT_FOUND"}})
    assert envelope.error_code is ServiceErrorCode.UNKNOWN
