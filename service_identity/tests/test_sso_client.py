"""
Unit tests for the SSO OIDC client factory.
"""

import pytest
from unittest.mock import MagicMock, patch

from service_identity.app.sso.client import SsoOidcClient, get_sso_oidc
from service_identity.app.sso.models import CreateTokenOutput
from shared.errors import AwsError


class TestGetSsoOidc:
    """Test cases for get_sso_oidc."""

    @pytest.fixture
    def mock_boto3(self):
        """Patch boto3 in the client module."""
        with patch('service_identity.app.sso.client.boto3') as mock:
            mock.client.return_value = MagicMock()
            yield mock

    def test_creates_region_bound_client(self, mock_boto3):
        oidc = get_sso_oidc("eu-west-1")

        mock_boto3.client.assert_called_once_with("sso-oidc", region_name="eu-west-1", endpoint_url=None)
        assert isinstance(oidc, SsoOidcClient)
        assert oidc.region == "eu-west-1"
        assert oidc.closed is False

    def test_endpoint_override(self, mock_boto3):
        get_sso_oidc("us-east-1", endpoint_url="http://localhost:4566")

        mock_boto3.client.assert_called_once_with(
            "sso-oidc", region_name="us-east-1", endpoint_url="http://localhost:4566"
        )

    def test_close_is_idempotent(self, mock_boto3):
        oidc = get_sso_oidc("us-east-1")

        oidc.close()
        oidc.close()

        assert oidc.closed is True
        mock_boto3.client.return_value.close.assert_called_once()

    def test_context_manager_closes_on_error(self, mock_boto3):
        with pytest.raises(RuntimeError):
            with get_sso_oidc("us-east-1") as oidc:
                raise RuntimeError("boom")

        assert oidc.closed is True
        mock_boto3.client.return_value.close.assert_called_once()


class TestSsoOidcClient:
    """Test cases for SsoOidcClient."""

    def test_wrap_does_not_double_wrap(self):
        oidc = SsoOidcClient(MagicMock(), "us-east-1")

        assert SsoOidcClient.wrap(oidc) is oidc

    def test_wrap_plain_client(self):
        client = MagicMock()

        oidc = SsoOidcClient.wrap(client, "us-west-2")

        assert isinstance(oidc, SsoOidcClient)
        oidc.close()
        client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_create_token(self):
        client = MagicMock()
        client.create_token.return_value = {
            "accessToken": "A",
            "tokenType": "Bearer",
            "expiresIn": 3600,
            "refreshToken": "R",
            "ResponseMetadata": {"HTTPStatusCode": 200}
        }
        oidc = SsoOidcClient(client, "us-east-1")

        output = await oidc.create_token(grantType="refresh_token", refreshToken="old")

        assert isinstance(output, CreateTokenOutput)
        assert output.access_token == "A"
        assert output.expires_in == 3600
        assert output.refresh_token == "R"
        client.create_token.assert_called_once_with(grantType="refresh_token", refreshToken="old")

    @pytest.mark.asyncio
    async def test_create_token_after_close(self):
        client = MagicMock()
        oidc = SsoOidcClient(client, "us-east-1")
        oidc.close()

        with pytest.raises(AwsError):
            await oidc.create_token(grantType="refresh_token")

        client.create_token.assert_not_called()
