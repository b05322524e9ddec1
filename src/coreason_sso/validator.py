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
Validation helpers for SAML provider identifiers and configuration fields.
"""

from collections.abc import Sequence
from typing import Any
from urllib.parse import urlparse

from coreason_sso.exceptions import InvalidArgumentError

SAML_PROVIDER_ID_PREFIX = "saml."


def validate_saml_provider_id(provider_id: Any) -> str:
    """
    Checks that the identifier belongs to the SAML provider family.

    Args:
        provider_id: The provider config id (e.g. "saml.my-idp").

    Returns:
        The validated provider id.

    Raises:
        InvalidArgumentError: If the id is empty, not a string, or lacks the "saml." prefix.
    """
    if not isinstance(provider_id, str) or not provider_id.startswith(SAML_PROVIDER_ID_PREFIX):
        raise InvalidArgumentError(f"invalid SAML provider id: {provider_id if provider_id is not None else ''}")
    return provider_id


def validate_non_empty_string(value: str | None, field: str) -> str:
    if not value:
        raise InvalidArgumentError(f"{field} must not be empty")
    return value


def validate_absolute_url(value: str | None, field: str) -> str:
    """
    Ensures a field holds a non-empty absolute URL (scheme and host).

    Raises:
        InvalidArgumentError: "<field> must not be empty" or "failed to parse <field>: <detail>".
    """
    value = validate_non_empty_string(value, field)
    if any(ch.isspace() for ch in value):
        raise InvalidArgumentError(f"failed to parse {field}: {value!r} contains whitespace")
    try:
        parsed = urlparse(value)
    except ValueError as e:
        raise InvalidArgumentError(f"failed to parse {field}: {e}") from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidArgumentError(f"failed to parse {field}: {value!r} is not an absolute URL")
    return value


def validate_certificates(certificates: Sequence[str] | None) -> list[str]:
    if not certificates:
        raise InvalidArgumentError("X509Certificates must not be empty")
    if any(not cert for cert in certificates):
        raise InvalidArgumentError("X509Certificates must not contain empty strings")
    return list(certificates)
