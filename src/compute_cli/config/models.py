"""Pydantic models for CLI configuration."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

_MICROVERSION_RE = re.compile(r"^(\d+\.\d+|latest)$")


class CloudProfile(BaseModel):
    """A named compute endpoint connection profile."""

    name: str
    url: str = Field(
        description="Compute endpoint, e.g. https://cloud:8774/v2.1",
    )
    token: str | None = Field(
        default=None, description="Pre-issued auth token (X-Auth-Token)",
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=30.0, gt=0, le=600, description="Request timeout in seconds",
    )
    microversion: str | None = Field(
        default=None, description="Compute API microversion, e.g. 2.61",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("microversion")
    @classmethod
    def validate_microversion(cls, v: str | None) -> str | None:
        if v is not None and not _MICROVERSION_RE.match(v):
            raise ValueError("Microversion must look like '2.61' or 'latest'")
        return v

    @property
    def auth_configured(self) -> bool:
        return self.token is not None


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, CloudProfile] = Field(default_factory=dict)
