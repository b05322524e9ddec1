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
Custom exceptions for the coreason-sso package.
"""

from enum import StrEnum


class ServiceErrorCode(StrEnum):
    """Error codes reported by the identity-platform management API that the client classifies."""

    CONFIGURATION_NOT_FOUND = "CONFIGURATION_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


class CoreasonSSOError(Exception):
    """Base exception for all coreason-sso errors."""


class InvalidArgumentError(CoreasonSSOError, ValueError):
    """
    Raised when an argument fails local validation (bad provider id, missing or malformed fields).
    Always raised before any request is sent.
    """


class ProjectNotAvailableError(CoreasonSSOError):
    """Raised when no project id can be resolved for the call."""

    def __init__(self, message: str = "project id not available") -> None:
        super().__init__(message)


class ServiceError(CoreasonSSOError):
    """
    Raised when the management API answers with a non-success response.

    Attributes:
        status_code (int): The HTTP status code of the response.
        body (bytes): The raw response body.
        code (ServiceErrorCode): The classified service error code.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: bytes = b"",
        code: ServiceErrorCode = ServiceErrorCode.UNKNOWN,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.code = code


class ConfigurationNotFoundError(ServiceError):
    """Raised when the service reports that the provider configuration does not exist."""


class UnknownServiceError(ServiceError):
    """Raised for any other unsuccessful or undecodable service response."""


class OversizedResponseError(CoreasonSSOError):
    """Raised when an HTTP response is too large."""


def is_configuration_not_found(err: BaseException | None) -> bool:
    """Returns True if the error signals a missing provider configuration."""
    return isinstance(err, ConfigurationNotFoundError)


def is_unknown(err: BaseException | None) -> bool:
    """Returns True if the error is an unclassified service error."""
    return isinstance(err, UnknownServiceError)
