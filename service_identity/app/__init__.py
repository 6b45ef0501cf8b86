"""
Identity Service package.

This package exposes the FastAPI application that serves SSO identity
operations to a host:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.sso: Record validation, the SSO OIDC client and token merging.

Design notes:
- Module import must not perform network calls or create boto3 clients;
  clients are created per operation and closed when it ends.
- Use the shared/ utilities for logging, metrics, config, and errors.
- The service is stateless; token caches belong to the host.
"""
