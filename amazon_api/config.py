"""
Client configuration.

APIConfig is the explicit value handed to ProductAdvertisingClient: credentials,
partner tag and target host. Nothing in the signing path reads the environment.

Settings loads the same values from environment variables (AMAZON_*), for the
command-line entry point.
"""
import logging
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from amazon_api.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SERVICE = "AWSECommerceService"
API_VERSION = "2013-08-01"

DEFAULT_HOST = "webservices.amazon.com"
DEFAULT_PATH = "/onca/xml"

# Product Advertising API endpoints per marketplace
LOCALE_HOSTS: Dict[str, str] = {
    "us": "webservices.amazon.com",
    "ca": "webservices.amazon.ca",
    "uk": "webservices.amazon.co.uk",
    "de": "webservices.amazon.de",
    "fr": "webservices.amazon.fr",
    "jp": "webservices.amazon.co.jp",
    "it": "webservices.amazon.it",
    "es": "webservices.amazon.es",
    "in": "webservices.amazon.in",
    "br": "webservices.amazon.com.br",
    "mx": "webservices.amazon.com.mx",
    "cn": "webservices.amazon.cn",
}


def host_for_locale(locale: str) -> str:
    """Return the API host for a marketplace code such as "us" or "de"."""
    try:
        return LOCALE_HOSTS[locale.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported locale {locale!r}; expected one of {sorted(LOCALE_HOSTS)}"
        ) from None


class APIConfig(BaseModel):
    """Credentials and endpoint for signed requests. Read-only once built."""
    model_config = ConfigDict(frozen=True)

    access_key: str = Field(description="AWS access key id")
    secret_key: SecretStr = Field(description="Shared secret used as the HMAC key")
    associate_tag: str = Field(description="Partner/affiliate tag sent with every request")
    host: str = Field(default=DEFAULT_HOST, description="API host, without scheme")
    path: str = Field(default=DEFAULT_PATH, description="Request path")
    scheme: str = Field(default="https", description="URL scheme for the signed URL")
    timeout: float = Field(default=15.0, description="Timeout in seconds for the default HTTP client")


class Settings(BaseSettings):
    """API settings from environment variables"""

    access_key: str = ""
    secret_key: SecretStr = SecretStr("")
    associate_tag: str = ""
    host: str = DEFAULT_HOST
    locale: str = ""  # overrides host when set, e.g. AMAZON_LOCALE=uk
    timeout: float = 15.0

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="AMAZON_",
        case_sensitive=False,
        extra="ignore",
    )

    def to_api_config(self) -> APIConfig:
        """Build the explicit client configuration, checking required credentials."""
        missing = [
            name for name, value in (
                ("AMAZON_ACCESS_KEY", self.access_key),
                ("AMAZON_SECRET_KEY", self.secret_key.get_secret_value()),
                ("AMAZON_ASSOCIATE_TAG", self.associate_tag),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        host = host_for_locale(self.locale) if self.locale else self.host
        logger.debug(f"Using Product Advertising API host {host}")
        return APIConfig(
            access_key=self.access_key,
            secret_key=self.secret_key,
            associate_tag=self.associate_tag,
            host=host,
            timeout=self.timeout,
        )
