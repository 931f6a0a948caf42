"""
API Client for the Amazon Product Advertising API

Signs each request, issues it as an HTTP GET and decodes the XML response.

Request flow:
    caller params -> merge -> Timestamp -> signature -> GET -> decode

Every call builds its own parameters, timestamp and signature, so one client
can serve concurrent callers. Timeouts and connection policy belong to the
injected httpx.AsyncClient; no retries are made here.
"""
import logging
from typing import Mapping, Optional, Union

import httpx

from amazon_api.config import APIConfig
from amazon_api.decoder import (
    decode_browse_node_lookup,
    decode_errors,
    decode_item_lookup,
    decode_item_search,
)
from amazon_api.exceptions import DecodeError, RemoteValidationError, TransportError
from amazon_api.operations import (
    BROWSE_NODE_LOOKUP,
    DEFAULT_BROWSE_NODE_RESPONSE_GROUP,
    DEFAULT_LOOKUP_RESPONSE_GROUP,
    DEFAULT_SEARCH_RESPONSE_GROUP,
    ITEM_LOOKUP,
    ITEM_SEARCH,
    StrOrList,
    browse_node_lookup_params,
    item_lookup_params,
    item_search_params,
)
from amazon_api.schemas import BrowseNodeLookupResponse, ItemLookupResponse, ItemSearchResponse
from amazon_api.signing import Clock, SignedURL, sign_request

logger = logging.getLogger(__name__)


class ProductAdvertisingClient:
    """
    HTTP client for the Product Advertising API.

    The configuration is read-only and shared by all calls; nothing else is
    kept between requests.
    """

    def __init__(
        self,
        config: APIConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize API client.

        Args:
            config: Credentials, partner tag and target host
            http_client: Client used for every request (default: a new
                httpx.AsyncClient per request with config.timeout)
            clock: Source of the current time for Timestamp (default: UTC now)
        """
        self.config = config
        self._http_client = http_client
        self._clock = clock
        logger.info(f"ProductAdvertisingClient initialized: {config.scheme}://{config.host}{config.path}")

    def signed_url(self, operation: str, params: Optional[Mapping[str, str]] = None) -> SignedURL:
        """Build the signed URL for one request."""
        return sign_request(self.config, operation, params, clock=self._clock)

    async def fetch(self, signed: SignedURL) -> str:
        """
        GET a signed URL and return the response body.

        Raises:
            TransportError: Network failure, or an HTTP error status
            RemoteValidationError: HTTP 400 carrying a service error document
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.get(signed.url)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.get(signed.url)
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise TransportError(f"Request to {signed.host} failed: {e}") from e

        if response.status_code >= 400:
            self._raise_for_error_status(response)
        return response.text

    def _raise_for_error_status(self, response: httpx.Response) -> None:
        body = response.text
        try:
            errors = decode_errors(body)
        except DecodeError:
            errors = []

        codes = ", ".join(e.code for e in errors)
        logger.error(f"API error {response.status_code}: {codes or body[:200]}")

        if response.status_code == 400 and errors:
            raise RemoteValidationError(
                f"Request rejected by the service ({codes})",
                errors=errors,
                status_code=response.status_code,
            )
        detail = f" ({codes})" if codes else ""
        raise TransportError(
            f"API error: {response.status_code}{detail}",
            status_code=response.status_code,
            body=body,
        )

    async def execute(self, operation: str, params: Optional[Mapping[str, str]] = None) -> str:
        """Sign and send any operation, returning the raw XML body."""
        signed = self.signed_url(operation, params)
        logger.debug(f"{operation} -> {signed.scheme}://{signed.host}{signed.path}")
        return await self.fetch(signed)

    async def search(
        self,
        search_index: str,
        keywords: str,
        page: Union[int, str] = 1,
        response_group: StrOrList = DEFAULT_SEARCH_RESPONSE_GROUP,
        **extra: str,
    ) -> ItemSearchResponse:
        """
        Search for products. search_index should be a valid category, e.g. "Books".

        Calls: ItemSearch
        """
        params = item_search_params(keywords, search_index, page, response_group, **extra)
        body = await self.execute(ITEM_SEARCH, params)
        return decode_item_search(body)

    async def lookup(
        self,
        item_id: StrOrList,
        id_type: str = "ASIN",
        response_group: StrOrList = DEFAULT_LOOKUP_RESPONSE_GROUP,
        search_index: Optional[str] = None,
        variation_page: Optional[Union[int, str]] = None,
    ) -> ItemLookupResponse:
        """
        Look up one or more items by identifier.

        Calls: ItemLookup
        """
        params = item_lookup_params(item_id, id_type, response_group, search_index, variation_page)
        body = await self.execute(ITEM_LOOKUP, params)
        return decode_item_lookup(body)

    async def browse_node_lookup(
        self,
        browse_node_id: Union[int, str],
        response_group: StrOrList = DEFAULT_BROWSE_NODE_RESPONSE_GROUP,
    ) -> BrowseNodeLookupResponse:
        """
        Fetch a browse node with its ancestors, children and top sellers.

        Calls: BrowseNodeLookup
        """
        params = browse_node_lookup_params(browse_node_id, response_group)
        body = await self.execute(BROWSE_NODE_LOOKUP, params)
        return decode_browse_node_lookup(body)
