"""
SSO package.

Validation of SSO sessions and client registrations, the scoped SSO OIDC
client, and merging of CreateToken responses into cached SSO tokens.

Key points:
- Validators raise AwsError with E_INVALID_SSO_CLIENT or
  E_INVALID_SSO_SESSION and never mutate their input.
- Provider failures are always rewrapped through try_async.
- Nothing here reads or writes the token cache; persisting the merged
  token is the caller's job.
"""
