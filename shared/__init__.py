"""
Shared utilities for the Identity Service.

This package aggregates common building blocks consumed by service packages:

- config: Service configuration via pydantic-settings
- logging: Structured logging with trace and SSO session correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types, AwsErrorCodes and error responses
- base_service: FastAPI application skeleton with health and metrics

Do not import from service packages into shared/.
"""
