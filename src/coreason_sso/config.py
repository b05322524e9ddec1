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
Configuration for the coreason-sso package.
"""

import os
from typing import Protocol

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://identitytoolkit.googleapis.com/v2"


class CoreasonSSOConfig(BaseSettings):
    """
    Configuration settings for coreason-sso.

    Attributes:
        project_id (str | None): The project owning the provider configurations.
        tenant_id (str | None): Optional tenant within the project.
        api_base_url (str): Base URL of the identity-platform management API.
        http_timeout (float): Timeout in seconds for every management API request.
        max_response_bytes (int): Upper bound on the size of a response body.
        unsafe_local_dev (bool): Allows a plain-HTTP base URL (e.g. a local emulator).
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_SSO_",
        case_sensitive=False,
    )

    unsafe_local_dev: bool = False
    project_id: str | None = None
    tenant_id: str | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds for management API requests.")
    max_response_bytes: int = Field(default=1_000_000, gt=0)

    @field_validator("api_base_url", mode="after")
    @classmethod
    def validate_https(cls, v: str, info: ValidationInfo) -> str:
        """
        Ensures the API is reached over HTTPS, unless strictly opted out for local dev.
        Strips the trailing slash so paths can be appended.
        """
        v = v.strip().rstrip("/")
        if v.startswith("http://") and not info.data.get("unsafe_local_dev", False):
            raise ValueError("HTTPS is required for production. Set 'unsafe_local_dev=True' only for local testing.")
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"api_base_url must be an absolute http(s) URL, got '{v}'")
        return v

    @field_validator("project_id", "tenant_id", mode="after")
    @classmethod
    def blank_as_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class ProjectResolver(Protocol):
    """Supplies the project id that scopes every management API call."""

    def resolve(self) -> str | None:
        """Returns the active project id, or None if none is configured."""
        ...


class StaticProjectResolver:
    """Resolves to a fixed project id."""

    def __init__(self, project_id: str | None) -> None:
        self.project_id = project_id

    def resolve(self) -> str | None:
        return self.project_id or None


class EnvironmentProjectResolver:
    """
    Resolves the project id from configuration, falling back to the
    GOOGLE_CLOUD_PROJECT and GCLOUD_PROJECT environment variables.
    The environment is read on every call.
    """

    ENV_VARS = ("GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")

    def __init__(self, config: CoreasonSSOConfig | None = None) -> None:
        self.config = config

    def resolve(self) -> str | None:
        if self.config is not None and self.config.project_id:
            return self.config.project_id
        for name in self.ENV_VARS:
            value = os.environ.get(name, "").strip()
            if value:
                return value
        return None
