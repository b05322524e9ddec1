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
Internal wire models for the coreason-sso package.
These mirror the management API's JSON documents and are not exposed in the public API.
"""

from pydantic import BaseModel, ConfigDict, Field

from coreason_sso.exceptions import ServiceErrorCode
from coreason_sso.models import SAMLProviderConfig


class IdpCertificate(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    x509_certificate: str = Field(default="", alias="x509Certificate")


class IdpConfig(BaseModel):
    """
    The `idpConfig` section of an inbound SAML config.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    idp_entity_id: str = Field(default="", alias="idpEntityId")
    sso_url: str = Field(default="", alias="ssoUrl")
    sign_request: bool = Field(default=False, alias="signRequest")
    idp_certificates: list[IdpCertificate] = Field(default_factory=list, alias="idpCertificates")


class SpConfig(BaseModel):
    """
    The `spConfig` section of an inbound SAML config.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sp_entity_id: str = Field(default="", alias="spEntityId")
    callback_uri: str = Field(default="", alias="callbackUri")


class InboundSamlConfig(BaseModel):
    """
    An inbound SAML config resource as returned by the management API.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="Resource name: projects/{project}/inboundSamlConfigs/{id}.")
    display_name: str | None = Field(default=None, alias="displayName")
    enabled: bool = False
    idp_config: IdpConfig = Field(default_factory=IdpConfig, alias="idpConfig")
    sp_config: SpConfig = Field(default_factory=SpConfig, alias="spConfig")

    @property
    def provider_id(self) -> str:
        return self.name.rsplit("/", 1)[-1]

    def to_provider_config(self) -> SAMLProviderConfig:
        """
        Flattens the resource into a SAMLProviderConfig.

        Raises:
            ValidationError: If the resource id is not a SAML provider id.
        """
        return SAMLProviderConfig(
            provider_id=self.provider_id,
            display_name=self.display_name or "",
            enabled=self.enabled,
            idp_entity_id=self.idp_config.idp_entity_id,
            sso_url=self.idp_config.sso_url,
            request_signing_enabled=self.idp_config.sign_request,
            x509_certificates=tuple(cert.x509_certificate for cert in self.idp_config.idp_certificates),
            rp_entity_id=self.sp_config.sp_entity_id,
            callback_url=self.sp_config.callback_uri,
        )


class ServiceErrorDetail(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    code: int | None = None
    message: str = ""
    status: str | None = None


class ServiceErrorResponse(BaseModel):
    """
    Error envelope of the management API: {"error": {"code": 404, "message": "CODE : detail"}}.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    error: ServiceErrorDetail

    @property
    def error_code(self) -> ServiceErrorCode:
        """The leading token of the error message, matched against the known codes."""
        token = self.error.message.split(":", 1)[0].strip()
        try:
            return ServiceErrorCode(token)
        except ValueError:
            return ServiceErrorCode.UNKNOWN

    @property
    def detail(self) -> str | None:
        _, sep, rest = self.error.message.partition(":")
        return (rest.strip() or None) if sep else None
