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
Typed client for managing SAML Single Sign-On provider configurations on an identity platform.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .client import SAMLProviderConfigClient, SAMLProviderConfigClientAsync
from .config import CoreasonSSOConfig, EnvironmentProjectResolver, ProjectResolver, StaticProjectResolver
from .exceptions import (
    ConfigurationNotFoundError,
    CoreasonSSOError,
    InvalidArgumentError,
    ProjectNotAvailableError,
    ServiceError,
    UnknownServiceError,
    is_configuration_not_found,
    is_unknown,
)
from .models import SAMLProviderConfig, SAMLProviderConfigToCreate, SAMLProviderConfigToUpdate
from .transport import HTTPXTransport, Transport, TransportResponse

__all__ = [
    "ConfigurationNotFoundError",
    "CoreasonSSOConfig",
    "CoreasonSSOError",
    "EnvironmentProjectResolver",
    "HTTPXTransport",
    "InvalidArgumentError",
    "ProjectNotAvailableError",
    "ProjectResolver",
    "SAMLProviderConfig",
    "SAMLProviderConfigClient",
    "SAMLProviderConfigClientAsync",
    "SAMLProviderConfigToCreate",
    "SAMLProviderConfigToUpdate",
    "ServiceError",
    "StaticProjectResolver",
    "Transport",
    "TransportResponse",
    "UnknownServiceError",
    "is_configuration_not_found",
    "is_unknown",
]
