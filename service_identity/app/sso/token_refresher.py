"""
SSO token refresh using the refresh_token grant.
"""

import asyncio
from typing import Callable, Optional

from shared.errors import AwsError, AwsErrorCodes
from shared.logging import get_logger, set_sso_context
from shared.metrics import MetricsCollector
from .client import SsoOidcClient, get_sso_oidc
from .models import SsoClientRegistration, SsoSession, SsoToken
from .utils import (
    throw_on_invalid_client_registration,
    throw_on_invalid_sso_session,
    try_async,
    update_sso_token_from_create_token,
)


class SsoTokenRefresher:
    """Exchanges a cached SSO token's refresh token for a new access token."""

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        preserve_refresh_token: bool = False,
        client_factory: Callable[..., SsoOidcClient] = get_sso_oidc,
        metrics: Optional[MetricsCollector] = None
    ):
        self.endpoint_url = endpoint_url
        self.preserve_refresh_token = preserve_refresh_token
        self.client_factory = client_factory
        self.metrics = metrics
        self.logger = get_logger("identity.refresher")

    async def refresh(
        self,
        sso_session: Optional[SsoSession],
        client_registration: Optional[SsoClientRegistration],
        sso_token: Optional[SsoToken]
    ) -> SsoToken:
        """Refresh sso_token in place and return it."""
        try:
            sso_session = throw_on_invalid_sso_session(sso_session)
            client_registration = throw_on_invalid_client_registration(client_registration)

            if not sso_token or not sso_token.refresh_token:
                raise AwsError(
                    f"SSO token for session [{sso_session.name}] cannot be refreshed.",
                    AwsErrorCodes.E_INVALID_SSO_TOKEN
                )

            region = sso_session.settings.sso_region
            set_sso_context(sso_session=sso_session.name, sso_region=region)

            # Building a boto3 client loads the service model from disk
            oidc = await try_async(
                lambda: asyncio.to_thread(self.client_factory, region, endpoint_url=self.endpoint_url),
                lambda error: AwsError.wrap(error, AwsErrorCodes.E_CANNOT_REFRESH_SSO_TOKEN)
            )

            with oidc:
                output = await try_async(
                    lambda: oidc.create_token(
                        clientId=client_registration.client_id,
                        clientSecret=client_registration.client_secret,
                        grantType="refresh_token",
                        refreshToken=sso_token.refresh_token
                    ),
                    lambda error: AwsError.wrap(error, AwsErrorCodes.E_CANNOT_REFRESH_SSO_TOKEN)
                )

            sso_token = update_sso_token_from_create_token(
                output,
                client_registration,
                sso_session,
                sso_token,
                preserve_refresh_token=self.preserve_refresh_token
            )
        except AwsError as e:
            self.logger.warning("SSO token refresh failed", code=e.code, error=e.message)
            self._record(e.code)
            raise

        self.logger.info("SSO token refreshed", expires_at=sso_token.expires_at)
        self._record("success")
        return sso_token

    def _record(self, result: str):
        if self.metrics:
            self.metrics.record_token_refresh(result)
