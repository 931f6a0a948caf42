"""
Request Signing

Builds the signed request URL expected by the Product Advertising API.

Canonical Query Format:
    k1=v1&k2=v2&...   (RFC 3986 percent-encoded, tokens sorted as whole strings)

String To Sign:
    GET\n{host}\n{path}\n{canonical_query}

Signature:
    percent-encode(base64(HMAC-SHA256(secret_key, string_to_sign)))

The signature is appended last as &Signature=... and is never part of the
canonical query it signs.
"""
import base64
import hashlib
import hmac
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Mapping, Optional
from urllib.parse import quote

from amazon_api.config import API_VERSION, SERVICE, APIConfig
from amazon_api.exceptions import ConfigurationError, SigningError

logger = logging.getLogger(__name__)

METHOD = "GET"

# Second precision with a Z designator, e.g. 2014-08-18T12:00:00Z
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_HOST_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?(?::[0-9]{1,5})?$")

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class SignedURL:
    """
    A fully signed request descriptor.

    Attributes:
        scheme: URL scheme (http or https)
        host: Target host as it appears in the string to sign
        path: Target path as it appears in the string to sign
        query: Canonical query string that was signed
        signature: Percent-encoded base64 signature
    """
    scheme: str
    host: str
    path: str
    query: str
    signature: str

    @property
    def final_query(self) -> str:
        return f"{self.query}&Signature={self.signature}"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}{self.path}?{self.final_query}"

    def __str__(self) -> str:
        return self.url


def percent_encode(value: str) -> str:
    """
    Percent-encode a key or value per RFC 3986.

    Only unreserved characters (A-Z a-z 0-9 - _ . ~) pass through. Spaces
    become %20, and "," and ":" become %2C and %3A.

    Example:
        >>> percent_encode("Images,ItemAttributes")
        'Images%2CItemAttributes'
    """
    return quote(str(value), safe="", encoding="utf-8")


def merge_parameters(
    config: APIConfig,
    operation: str,
    params: Optional[Mapping[str, str]] = None,
) -> Mapping[str, str]:
    """
    Merge fixed service parameters with caller parameters.

    The fixed stage is built first; the caller stage is applied on top, so a
    caller key replaces a fixed key of the same name (including Operation).
    A new read-only mapping is returned and neither input is modified.
    """
    fixed = {
        "Operation": operation,
        "Service": SERVICE,
        "AWSAccessKeyId": config.access_key,
        "Version": API_VERSION,
        "AssociateTag": config.associate_tag,
    }
    merged = dict(fixed)
    merged.update({key: str(value) for key, value in (params or {}).items()})
    return MappingProxyType(merged)


def timestamp(clock: Optional[Clock] = None) -> str:
    """Format the current UTC time (or clock()) in the wire timestamp format."""
    now = clock() if clock is not None else datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def with_timestamp(params: Mapping[str, str], clock: Optional[Clock] = None) -> Mapping[str, str]:
    """
    Return a copy of params with a freshly sampled Timestamp.

    Call once per signed request, after every other parameter is final.
    """
    stamped = dict(params)
    stamped["Timestamp"] = timestamp(clock)
    return MappingProxyType(stamped)


def canonical_query(params: Mapping[str, str]) -> str:
    """
    Build the canonical query string.

    Each key and value is percent-encoded, joined with "=", and the resulting
    tokens are sorted lexicographically as complete strings before joining
    with "&". Empty values are kept as "key=".

    Raises:
        ConfigurationError: If a key or value cannot be encoded as UTF-8
    """
    tokens = []
    for key, value in params.items():
        try:
            tokens.append(f"{percent_encode(key)}={percent_encode(value)}")
        except UnicodeEncodeError as e:
            raise ConfigurationError(f"Parameter {key!r} cannot be encoded as UTF-8: {e}") from e
    tokens.sort()
    return "&".join(tokens)


def string_to_sign(host: str, path: str, query: str) -> str:
    """Create the exact text fed to the keyed hash."""
    return f"{METHOD}\n{host}\n{path}\n{query}"


def compute_signature(secret_key, message: str) -> str:
    """
    Compute base64(HMAC-SHA256(secret_key, message)).

    Args:
        secret_key: Shared secret (str, bytes or pydantic SecretStr)
        message: String to sign

    Returns:
        Base64 signature (not yet percent-encoded)

    Raises:
        SigningError: If the MAC cannot be computed
    """
    if hasattr(secret_key, "get_secret_value"):
        secret_key = secret_key.get_secret_value()
    try:
        key = secret_key.encode("utf-8") if isinstance(secret_key, str) else secret_key
        mac = hmac.new(key, message.encode("utf-8"), hashlib.sha256)
    except (TypeError, ValueError) as e:
        raise SigningError(f"Could not compute request signature: {e}") from e
    return base64.b64encode(mac.digest()).decode("ascii")


def validate_target(host: str, path: str, scheme: str = "https") -> None:
    """
    Check that host, path and scheme can form a request URL.

    Raises:
        ConfigurationError: If any part is malformed
    """
    if scheme not in ("http", "https"):
        raise ConfigurationError(f"Unsupported URL scheme: {scheme!r}")
    if not host or not _HOST_PATTERN.match(host):
        raise ConfigurationError(
            f"Invalid API host {host!r}; expected a bare host name such as 'webservices.amazon.com'"
        )
    if not path.startswith("/") or any(c in path for c in "?# \t\r\n"):
        raise ConfigurationError(f"Invalid API path {path!r}; expected an absolute path such as '/onca/xml'")


def sign(config: APIConfig, params: Mapping[str, str]) -> SignedURL:
    """
    Sign a fully assembled parameter mapping (Timestamp included).

    Args:
        config: Client configuration (host, path, scheme, secret)
        params: Request parameters, already merged and timestamped

    Returns:
        SignedURL ready for a single GET

    Raises:
        ConfigurationError: If host/path are malformed or params already contain Signature
    """
    validate_target(config.host, config.path, config.scheme)
    if "Signature" in params:
        raise ConfigurationError("Signature is appended after signing and cannot be a request parameter")

    query = canonical_query(params)
    signature = compute_signature(config.secret_key, string_to_sign(config.host, config.path, query))

    logger.debug(f"Signed {params.get('Operation', '?')} request for {config.host}{config.path}")
    return SignedURL(
        scheme=config.scheme,
        host=config.host,
        path=config.path,
        query=query,
        signature=percent_encode(signature),
    )


def sign_request(
    config: APIConfig,
    operation: str,
    params: Optional[Mapping[str, str]] = None,
    clock: Optional[Clock] = None,
) -> SignedURL:
    """
    Merge, timestamp and sign in one step.

    The timestamp is sampled after the merge so the signature covers the
    final parameter set.
    """
    merged = merge_parameters(config, operation, params)
    return sign(config, with_timestamp(merged, clock))
