"""
SSO OIDC client factory.
"""

import asyncio
from typing import Any, Optional

import boto3

from shared.errors import AwsError, AwsErrorCodes
from shared.logging import get_logger
from .models import CreateTokenOutput


class SsoOidcClient:
    """
    Owns a boto3 ``sso-oidc`` client for the length of one scope.

    Use it as a context manager, or call close() in a finally block.
    close() releases the underlying connections once; later calls do
    nothing.
    """

    def __init__(self, client: Any, region: Optional[str] = None):
        self._client = client
        self.region = region
        self._closed = False
        self.logger = get_logger("identity.sso_oidc")

    @classmethod
    def wrap(cls, client: Any, region: Optional[str] = None) -> "SsoOidcClient":
        """Wrap a boto3 client; an SsoOidcClient is returned unchanged."""
        if isinstance(client, cls):
            return client
        return cls(client, region)

    @property
    def closed(self) -> bool:
        return self._closed

    async def create_token(self, **params: Any) -> CreateTokenOutput:
        """Call CreateToken without blocking the event loop."""
        if self._closed:
            raise AwsError("SSO OIDC client is closed.", AwsErrorCodes.E_UNKNOWN)

        response = await asyncio.to_thread(self._client.create_token, **params)
        return CreateTokenOutput.model_validate(response)

    def close(self):
        """Release the underlying client's connections."""
        if self._closed:
            return

        self._closed = True
        self._client.close()
        self.logger.debug("SSO OIDC client closed", region=self.region)

    def __enter__(self) -> "SsoOidcClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def get_sso_oidc(sso_region: str, endpoint_url: Optional[str] = None) -> SsoOidcClient:
    """Create a scoped SSO OIDC client bound to sso_region."""
    client = boto3.client("sso-oidc", region_name=sso_region, endpoint_url=endpoint_url)
    return SsoOidcClient.wrap(client, sso_region)
