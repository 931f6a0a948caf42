"""
Amazon Product Advertising API client

Builds canonical, timestamped, HMAC-SHA256 signed request URLs for the
Product Advertising API and decodes its XML responses into typed records.

Architecture:
    caller → ProductAdvertisingClient → signed GET → XML → schemas

The command-line entry point (python -m amazon_api) loads credentials from
the environment; the library itself takes an explicit APIConfig.
"""
from amazon_api.client import ProductAdvertisingClient
from amazon_api.config import APIConfig, Settings, host_for_locale
from amazon_api.exceptions import (
    ConfigurationError,
    DecodeError,
    ProductAPIError,
    RemoteValidationError,
    SigningError,
    TransportError,
)
from amazon_api.signing import SignedURL, canonical_query, sign_request

__all__ = [
    # Client
    "ProductAdvertisingClient",
    "SignedURL",
    "sign_request",
    "canonical_query",
    # Config
    "APIConfig",
    "Settings",
    "host_for_locale",
    # Errors
    "ProductAPIError",
    "ConfigurationError",
    "SigningError",
    "TransportError",
    "DecodeError",
    "RemoteValidationError",
]
