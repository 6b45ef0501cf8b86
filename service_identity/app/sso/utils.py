"""
Validation and token merge helpers for SSO sessions, client registrations
and tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional, TypeVar

from shared.errors import AwsError, AwsErrorCodes
from shared.logging import get_logger
from .models import CreateTokenOutput, SsoClientRegistration, SsoSession, SsoToken

R = TypeVar("R")

logger = get_logger("identity.sso")


def throw_on_invalid_client_name(client_name: Optional[str]) -> str:
    """Raise E_INVALID_SSO_CLIENT unless client_name has visible characters."""
    if not (client_name or "").strip():
        raise AwsError(f"Client name [{client_name}] is invalid.", AwsErrorCodes.E_INVALID_SSO_CLIENT)

    return client_name


def throw_on_invalid_client_registration(
    client_registration: Optional[SsoClientRegistration]
) -> SsoClientRegistration:
    """Raise E_INVALID_SSO_CLIENT unless the registration can be used to request tokens."""
    if (
        not client_registration
        or not client_registration.client_id
        or not client_registration.client_secret
        or not client_registration.expires_at
        or not client_registration.scopes
    ):
        client_id = client_registration.client_id if client_registration else None
        logger.debug("Invalid client registration", client_id=client_id)
        raise AwsError(
            f"Client registration [{client_id}] is invalid.",
            AwsErrorCodes.E_INVALID_SSO_CLIENT
        )

    return client_registration


def throw_on_invalid_sso_session(sso_session: Optional[SsoSession]) -> SsoSession:
    """Raise E_INVALID_SSO_SESSION unless the session names a region and start URL."""
    if (
        not sso_session
        or not sso_session.name
        or not sso_session.settings
        or not sso_session.settings.sso_region
        or not sso_session.settings.sso_start_url
    ):
        name = sso_session.name if sso_session else None
        logger.debug("Invalid SSO session", sso_session=name)
        raise AwsError(f"SSO session [{name}] is invalid.", AwsErrorCodes.E_INVALID_SSO_SESSION)

    return sso_session


def to_error(value: object) -> Exception:
    """Normalize a caught value into an Exception instance."""
    if isinstance(value, Exception):
        return value

    message = str(value) if value is not None else ""
    return Exception(message or "Unknown error")


async def try_async(try_it: Callable[[], Awaitable[R]], catch_it: Callable[[Exception], Exception]) -> R:
    """
    Await try_it() and return its result.

    Any Exception raised by try_it is passed through to_error and then to
    catch_it, and the error catch_it returns is raised in its place with the
    original chained as __cause__. When catch_it hands back the original
    error it is re-raised as is. Cancellation and other BaseExceptions are
    not wrapped.
    """
    try:
        return await try_it()
    except Exception as error:
        mapped = catch_it(to_error(error))
        if mapped is error:
            raise
        raise mapped from error


def _to_iso_string(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def update_sso_token_from_create_token(
    output: CreateTokenOutput,
    client_registration: Optional[SsoClientRegistration],
    sso_session: Optional[SsoSession],
    sso_token: Optional[SsoToken] = None,
    preserve_refresh_token: bool = False
) -> SsoToken:
    """
    Merge a CreateToken response into an SSO token.

    The registration and session are validated first. The token is updated
    in place (a new one is created when none is given) and returned; fields
    not derived from the response, registration or session are left as they
    are. When preserve_refresh_token is set, a response without a refresh
    token keeps the token's current one instead of clearing it.
    """
    client_registration = throw_on_invalid_client_registration(client_registration)
    sso_session = throw_on_invalid_sso_session(sso_session)

    if not output.access_token or not output.expires_in:
        raise AwsError("CreateToken returned invalid result.", AwsErrorCodes.E_CANNOT_CREATE_SSO_TOKEN)

    if sso_token is None:
        sso_token = SsoToken()

    # See CreateToken response elements in the SSO OIDC API reference
    sso_token.access_token = output.access_token
    sso_token.client_id = client_registration.client_id
    sso_token.client_secret = client_registration.client_secret
    sso_token.expires_at = _to_iso_string(datetime.now(timezone.utc) + timedelta(seconds=output.expires_in))
    if output.refresh_token or not preserve_refresh_token:
        sso_token.refresh_token = output.refresh_token
    sso_token.region = sso_session.settings.sso_region
    sso_token.registration_expires_at = client_registration.expires_at
    sso_token.start_url = sso_session.settings.sso_start_url

    return sso_token
