"""
Identity service entrypoint.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shared.base_service import BaseService
from shared.errors import AwsError
from shared.logging import set_sso_context
from .sso.models import CreateTokenOutput, SsoClientRegistration, SsoSession, SsoToken
from .sso.token_refresher import SsoTokenRefresher
from .sso.utils import (
    throw_on_invalid_client_registration,
    throw_on_invalid_sso_session,
    update_sso_token_from_create_token,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MergeSsoTokenRequest(_CamelModel):
    """Request model for merging a CreateToken response into a token."""
    output: CreateTokenOutput
    client_registration: Optional[SsoClientRegistration] = None
    sso_session: Optional[SsoSession] = None
    sso_token: Optional[SsoToken] = None


class RefreshSsoTokenRequest(_CamelModel):
    """Request model for refreshing a cached token."""
    sso_session: Optional[SsoSession] = None
    client_registration: Optional[SsoClientRegistration] = None
    sso_token: Optional[SsoToken] = None


class IdentityService(BaseService):
    """Identity service implementation."""

    def __init__(self):
        super().__init__("identity", 8020, "Identity Server")
        self.token_refresher = SsoTokenRefresher(
            endpoint_url=self.config.sso_oidc_endpoint_url,
            preserve_refresh_token=self.config.preserve_refresh_token,
            metrics=self.metrics
        )
        self._setup_identity_routes()

    def _setup_identity_routes(self):
        """Set up identity-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": self.title,
                "version": self.version
            }

        @self.app.post("/sso/session/validate")
        async def validate_sso_session(sso_session: SsoSession):
            """Check that an SSO session is usable."""
            self._validate(throw_on_invalid_sso_session, sso_session)
            return {"valid": True}

        @self.app.post("/sso/client-registration/validate")
        async def validate_client_registration(client_registration: SsoClientRegistration):
            """Check that a client registration is usable."""
            self._validate(throw_on_invalid_client_registration, client_registration)
            return {"valid": True}

        @self.app.post("/sso/token/merge")
        async def merge_sso_token(request: MergeSsoTokenRequest):
            """Merge a CreateToken response into a cached token."""
            sso_token = self._validate(
                update_sso_token_from_create_token,
                request.output,
                request.client_registration,
                request.sso_session,
                request.sso_token,
                preserve_refresh_token=self.config.preserve_refresh_token
            )
            return sso_token.to_cache()

        @self.app.post("/sso/token/refresh")
        async def refresh_sso_token(request: RefreshSsoTokenRequest):
            """Refresh a cached token with its refresh token."""
            if request.sso_session:
                set_sso_context(sso_session=request.sso_session.name)

            sso_token = await self.token_refresher.refresh(
                request.sso_session,
                request.client_registration,
                request.sso_token
            )
            return sso_token.to_cache()

    def _validate(self, validator, *args, **kwargs):
        """Run a validator, counting the failures it raises."""
        try:
            return validator(*args, **kwargs)
        except AwsError as e:
            self.metrics.record_validation_failure(e.code)
            raise


def create_app():
    """Create FastAPI application."""
    service = IdentityService()
    return service.app


if __name__ == "__main__":
    service = IdentityService()
    service.run()
