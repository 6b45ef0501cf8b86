"""
Unit tests for shared error types.
"""

import pytest

from shared.errors import AwsError, AwsErrorCodes, ErrorResponse, IdentityLayerException


class TestAwsError:
    """Test cases for AwsError."""

    def test_carries_code_and_message(self):
        error = AwsError("SSO session [x] is invalid.", AwsErrorCodes.E_INVALID_SSO_SESSION)

        assert isinstance(error, IdentityLayerException)
        assert error.code == "E_INVALID_SSO_SESSION"
        assert error.aws_error_code is AwsErrorCodes.E_INVALID_SSO_SESSION
        assert error.message == "SSO session [x] is invalid."
        assert str(error) == "SSO session [x] is invalid."

    def test_accepts_code_string(self):
        error = AwsError("bad", "E_INVALID_SSO_CLIENT")
        assert error.aws_error_code is AwsErrorCodes.E_INVALID_SSO_CLIENT

    def test_rejects_unknown_code(self):
        with pytest.raises(ValueError):
            AwsError("bad", "E_NOT_A_CODE")

    def test_wrap_keeps_aws_errors(self):
        error = AwsError("bad", AwsErrorCodes.E_INVALID_SSO_CLIENT)
        assert AwsError.wrap(error, AwsErrorCodes.E_UNKNOWN) is error

    def test_wrap_other_errors(self):
        wrapped = AwsError.wrap(ConnectionError("connection reset"), AwsErrorCodes.E_CANNOT_REFRESH_SSO_TOKEN)

        assert wrapped.code == "E_CANNOT_REFRESH_SSO_TOKEN"
        assert wrapped.message == "connection reset"
        assert wrapped.details == {"cause": "ConnectionError"}

    def test_wrap_without_message(self):
        wrapped = AwsError.wrap(RuntimeError(), AwsErrorCodes.E_UNKNOWN)
        assert wrapped.message == "Unknown error"

    def test_to_response(self):
        response = AwsError("bad", AwsErrorCodes.E_CANNOT_CREATE_SSO_TOKEN).to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "E_CANNOT_CREATE_SSO_TOKEN"
        assert response.message == "bad"
        assert response.trace_id is None
        assert response.details == {}
