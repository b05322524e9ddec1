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
Data models for the coreason-sso package.

`SAMLProviderConfig` is the decoded, read-only view of a provider configuration.
`SAMLProviderConfigToCreate` and `SAMLProviderConfigToUpdate` are immutable builders:
every `with_*` setter returns a new instance, and a field counts as set (touched)
exactly when it appears in the model's `model_fields_set`.
"""

from collections.abc import Sequence
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coreason_sso.exceptions import InvalidArgumentError
from coreason_sso.validator import (
    SAML_PROVIDER_ID_PREFIX,
    validate_absolute_url,
    validate_certificates,
    validate_non_empty_string,
    validate_saml_provider_id,
)

# Location of each field in the service's JSON document, also used as the update mask path.
WIRE_PATHS: dict[str, tuple[str, ...]] = {
    "display_name": ("displayName",),
    "enabled": ("enabled",),
    "idp_entity_id": ("idpConfig", "idpEntityId"),
    "sso_url": ("idpConfig", "ssoUrl"),
    "request_signing_enabled": ("idpConfig", "signRequest"),
    "x509_certificates": ("idpConfig", "idpCertificates"),
    "rp_entity_id": ("spConfig", "spEntityId"),
    "callback_url": ("spConfig", "callbackUri"),
}

_BOOLEAN_FIELDS = frozenset({"enabled", "request_signing_enabled"})


def _to_wire_value(field: str, value: Any) -> Any:
    if field == "x509_certificates":
        return [{"x509Certificate": cert} for cert in value]
    if field in _BOOLEAN_FIELDS:
        return bool(value)
    return value


def _put(document: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    *parents, leaf = path
    for key in parents:
        document = document.setdefault(key, {})
    document[leaf] = value


class SAMLProviderConfig(BaseModel):
    """
    A SAML provider configuration as stored by the identity platform.

    This model is frozen (immutable); the client never mutates it after decoding.

    Attributes:
        provider_id (str): The provider id, always prefixed with "saml.".
        display_name (str): Human-readable label.
        enabled (bool): Whether the provider accepts sign-ins.
        idp_entity_id (str): The SAML IdP entity identifier.
        sso_url (str): The SAML IdP SSO URL.
        request_signing_enabled (bool): Whether authentication requests are signed.
        x509_certificates (tuple[str, ...]): IdP certificates, in service order.
        rp_entity_id (str): The relying party (service provider) entity identifier.
        callback_url (str): The relying party callback URL.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "provider_id": "saml.provider",
                "display_name": "samlProviderName",
                "enabled": True,
                "idp_entity_id": "IDP_ENTITY_ID",
                "sso_url": "https://example.com/login",
                "request_signing_enabled": True,
                "x509_certificates": ["CERT1", "CERT2"],
                "rp_entity_id": "RP_ENTITY_ID",
                "callback_url": "https://projectId.firebaseapp.com/__/auth/handler",
            }
        },
    )

    provider_id: str = Field(..., description="The provider id. Must start with 'saml.'.", examples=["saml.provider"])
    display_name: str = ""
    enabled: bool = False
    idp_entity_id: str = ""
    sso_url: str = ""
    request_signing_enabled: bool = False
    x509_certificates: tuple[str, ...] = ()
    rp_entity_id: str = ""
    callback_url: str = ""

    @field_validator("provider_id")
    @classmethod
    def check_saml_prefix(cls, v: str) -> str:
        if not v.startswith(SAML_PROVIDER_ID_PREFIX):
            raise ValueError(f"invalid SAML provider id: {v}")
        return v

    def to_create(self) -> "SAMLProviderConfigToCreate":
        """
        Returns a create builder carrying every field of this configuration.
        """
        return SAMLProviderConfigToCreate(**self.model_dump())


class _SAMLProviderConfigParams(BaseModel):
    """
    Fields shared by the create and update builders. None of them is set by default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    display_name: str | None = None
    enabled: bool | None = None
    idp_entity_id: str | None = None
    sso_url: str | None = None
    request_signing_enabled: bool | None = None
    x509_certificates: tuple[str, ...] | None = None
    rp_entity_id: str | None = None
    callback_url: str | None = None

    @property
    def touched_fields(self) -> list[str]:
        """Names of the fields that were explicitly set, in declaration order."""
        return [name for name in type(self).model_fields if name in self.model_fields_set]

    def _with(self, **changes: Any) -> Self:
        values = {name: getattr(self, name) for name in self.model_fields_set}
        values.update(changes)
        return type(self)(**values)

    def with_display_name(self, display_name: str | None) -> Self:
        return self._with(display_name=display_name)

    def with_enabled(self, enabled: bool) -> Self:
        return self._with(enabled=enabled)

    def with_idp_entity_id(self, idp_entity_id: str) -> Self:
        return self._with(idp_entity_id=idp_entity_id)

    def with_sso_url(self, sso_url: str) -> Self:
        return self._with(sso_url=sso_url)

    def with_request_signing_enabled(self, request_signing_enabled: bool) -> Self:
        return self._with(request_signing_enabled=request_signing_enabled)

    def with_x509_certificates(self, x509_certificates: Sequence[str] | None) -> Self:
        return self._with(x509_certificates=x509_certificates)

    def with_rp_entity_id(self, rp_entity_id: str) -> Self:
        return self._with(rp_entity_id=rp_entity_id)

    def with_callback_url(self, callback_url: str) -> Self:
        return self._with(callback_url=callback_url)


class SAMLProviderConfigToCreate(_SAMLProviderConfigParams):
    """
    Parameters for a new SAML provider configuration.

    Example:
        >>> config = (
        ...     SAMLProviderConfigToCreate()
        ...     .with_provider_id("saml.my-idp")
        ...     .with_idp_entity_id("IDP_ENTITY_ID")
        ...     .with_sso_url("https://example.com/login")
        ...     .with_x509_certificates(["CERT"])
        ...     .with_rp_entity_id("RP_ENTITY_ID")
        ...     .with_callback_url("https://example.com/__/auth/handler")
        ... )
    """

    provider_id: str | None = None

    def with_provider_id(self, provider_id: str) -> Self:
        return self._with(provider_id=provider_id)

    def build_request(self) -> dict[str, Any]:
        """
        Validates the parameters and builds the JSON body of the create request.

        Unset optional fields (display name, enabled, request signing) are omitted.
        A field set to None counts as unset and is never sent as null.

        Returns:
            The nested request document.

        Raises:
            InvalidArgumentError: On the first field that fails validation.
        """
        validate_saml_provider_id(self.provider_id or "")
        present = [name for name in self.touched_fields if name != "provider_id" and getattr(self, name) is not None]
        if not present:
            raise InvalidArgumentError("no parameters specified in the create request")

        validate_non_empty_string(self.idp_entity_id, "IDPEntityID")
        validate_absolute_url(self.sso_url, "SSOURL")
        validate_certificates(self.x509_certificates)
        validate_non_empty_string(self.rp_entity_id, "RPEntityID")
        validate_absolute_url(self.callback_url, "CallbackURL")

        document: dict[str, Any] = {}
        for name in present:
            _put(document, WIRE_PATHS[name], _to_wire_value(name, getattr(self, name)))
        return document


class SAMLProviderConfigToUpdate(_SAMLProviderConfigParams):
    """
    Sparse changes to an existing SAML provider configuration.

    Only touched fields are sent. Setting a field to its empty value ("" or False)
    still touches it, which clears it on the service. The IdP and SP identifiers,
    URLs and certificates can be replaced but never cleared.
    """

    def build_request(self) -> tuple[dict[str, Any], list[str]]:
        """
        Validates the touched fields and builds the JSON body and update mask.

        Returns:
            A tuple of (request document, update mask paths). Each touched field
            appears exactly once in the mask, at the same path it occupies in the document.

        Raises:
            InvalidArgumentError: If nothing is touched or a touched field is invalid.
        """
        touched = self.touched_fields
        if not touched:
            raise InvalidArgumentError("no parameters specified in the update request")

        if "idp_entity_id" in touched:
            validate_non_empty_string(self.idp_entity_id, "IDPEntityID")
        if "sso_url" in touched:
            validate_absolute_url(self.sso_url, "SSOURL")
        if "x509_certificates" in touched:
            validate_certificates(self.x509_certificates)
        if "rp_entity_id" in touched:
            validate_non_empty_string(self.rp_entity_id, "RPEntityID")
        if "callback_url" in touched:
            validate_absolute_url(self.callback_url, "CallbackURL")

        document: dict[str, Any] = {}
        mask: list[str] = []
        for name in touched:
            value = getattr(self, name)
            if name == "display_name" and not value:
                # A cleared display name is sent as an explicit null.
                value = None
            path = WIRE_PATHS[name]
            _put(document, path, _to_wire_value(name, value))
            mask.append(".".join(path))
        return document, mask
