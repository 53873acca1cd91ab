"""
Settings for pass-authz services.

Repository location, credentials and the foundational role URIs are read from
the environment (prefix ``PASS_``) or a ``.env`` file.
"""
from typing import Optional
from functools import lru_cache

import httpx
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError


class AuthzSettings(BaseSettings):
    """Settings for repository access and authorization policy."""

    model_config = SettingsConfigDict(
        env_prefix="PASS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Repository Configuration
    fedora_base_url: str = Field(default="http://localhost:8080/fcrepo/rest/")
    fedora_user: Optional[str] = Field(default=None)
    fedora_password: Optional[SecretStr] = Field(default=None)
    acl_base: str = Field(default="acls")
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Foundational roles (any may be unset)
    backend_role: Optional[str] = Field(default=None)
    admin_role: Optional[str] = Field(default=None)
    submitter_role: Optional[str] = Field(default=None)

    # Role lookup cache
    role_cache_capacity: int = Field(default=100, ge=1)
    role_cache_ttl_seconds: float = Field(default=300.0, gt=0)

    @field_validator("fedora_base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Base URL is always a container path."""
        return v if v.endswith("/") else v + "/"

    @field_validator("backend_role", "admin_role", "submitter_role", mode="before")
    @classmethod
    def blank_role_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def acl_base_url(self) -> str:
        """Container under which new ACLs are created."""
        return self.fedora_base_url + self.acl_base.lstrip("/")


@lru_cache()
def get_settings() -> AuthzSettings:
    """Get cached settings instance."""
    return AuthzSettings()


def create_repository_client(settings: Optional[AuthzSettings] = None) -> httpx.AsyncClient:
    """Build an HTTP client for the repository from settings.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)

    Returns:
        Configured ``httpx.AsyncClient``; the caller owns and closes it
    """
    settings = settings or get_settings()

    auth = None
    if settings.fedora_user:
        if settings.fedora_password is None:
            raise ConfigurationError(
                "PASS_FEDORA_PASSWORD is required when PASS_FEDORA_USER is set",
                details={"fedora_user": settings.fedora_user}
            )
        auth = httpx.BasicAuth(settings.fedora_user, settings.fedora_password.get_secret_value())

    return httpx.AsyncClient(auth=auth, timeout=settings.http_timeout_seconds)
