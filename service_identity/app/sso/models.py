"""
SSO record shapes exchanged with the host and the SSO OIDC provider.

Every field is optional: records arrive from callers and caches in partial
states, and the validators in ``sso.utils`` decide whether a record is
usable. Token and registration records use the camelCase keys of the shared
SSO token cache; session settings keep the snake_case keys of the shared
config file.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SsoSessionSettings(BaseModel):
    """Settings of an ``[sso-session]`` section."""

    model_config = ConfigDict(extra="allow")

    sso_region: Optional[str] = None
    sso_start_url: Optional[str] = None
    sso_registration_scopes: Optional[List[str]] = None


class SsoSession(BaseModel):
    """A named SSO login context."""

    name: Optional[str] = None
    settings: Optional[SsoSessionSettings] = None


class SsoClientRegistration(BaseModel):
    """Result of registering a client with the SSO OIDC service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    expires_at: Optional[str] = None
    scopes: Optional[List[str]] = None


class SsoToken(BaseModel):
    """Cached SSO credential, mutated in place on every refresh.

    Unknown keys found in a cached token are kept so that writing the token
    back does not drop them.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    expires_at: Optional[str] = None
    region: Optional[str] = None
    registration_expires_at: Optional[str] = None
    start_url: Optional[str] = None

    def to_cache(self) -> dict:
        """Serialize using the cache's camelCase keys, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateTokenOutput(BaseModel):
    """Response of the SSO OIDC ``CreateToken`` operation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    access_token: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    id_token: Optional[str] = None
