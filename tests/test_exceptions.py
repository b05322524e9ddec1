# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sso

from coreason_sso.exceptions import (
    ConfigurationNotFoundError,
    CoreasonSSOError,
    InvalidArgumentError,
    OversizedResponseError,
    ProjectNotAvailableError,
    ServiceError,
    ServiceErrorCode,
    UnknownServiceError,
    is_configuration_not_found,
    is_unknown,
)


def test_exception_hierarchy() -> None:
    """Test that all custom exceptions inherit from CoreasonSSOError."""
    assert issubclass(InvalidArgumentError, CoreasonSSOError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(ProjectNotAvailableError, CoreasonSSOError)
    assert issubclass(ConfigurationNotFoundError, ServiceError)
    assert issubclass(UnknownServiceError, ServiceError)
    assert issubclass(ServiceError, CoreasonSSOError)
    assert issubclass(OversizedResponseError, CoreasonSSOError)


def test_project_not_available_message() -> None:
    assert str(ProjectNotAvailableError()) == "project id not available"


def test_service_error_attributes() -> None:
    err = UnknownServiceError("boom", status_code=500, body=b"{}")
    assert str(err) == "boom"
    assert err.status_code == 500
    assert err.body == b"{}"
    assert err.code is ServiceErrorCode.UNKNOWN


def test_predicates() -> None:
    not_found = ConfigurationNotFoundError(
        "missing", status_code=404, code=ServiceErrorCode.CONFIGURATION_NOT_FOUND
    )
    unknown = UnknownServiceError("boom", status_code=500)

    assert is_configuration_not_found(not_found)
    assert not is_configuration_not_found(unknown)
    assert not is_configuration_not_found(None)
    assert is_unknown(unknown)
    assert not is_unknown(not_found)
    assert not is_unknown(InvalidArgumentError("bad"))
