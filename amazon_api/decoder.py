"""
Response Decoder

Turns Product Advertising API XML into the records in amazon_api.schemas.

Only well-formedness is enforced: a body that is not XML raises DecodeError
with the body attached. Missing optional elements are left at their empty
values, and IsValid=False decodes like any other response (see
APIResponse.raise_for_validity).
"""
import logging
from typing import Callable, List, Optional, TypeVar, Union
from xml.etree import ElementTree

from amazon_api.exceptions import DecodeError
from amazon_api.schemas import (
    Argument,
    BrowseNode,
    BrowseNodeLookupResponse,
    EditorialReview,
    Image,
    ImageSet,
    Item,
    ItemAttributes,
    ItemLookupResponse,
    ItemSearchResponse,
    Offer,
    Offers,
    OfferSummary,
    OperationRequest,
    Price,
    RemoteError,
    RequestEcho,
    TopSeller,
)

logger = logging.getLogger(__name__)

Element = ElementTree.Element
T = TypeVar("T")

_TRUE_VALUES = {"true", "1", "yes"}


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------

def parse_document(body: Union[str, bytes]) -> Element:
    """
    Parse a response body and strip XML namespaces from every tag.

    Raises:
        DecodeError: If body is not well-formed XML
    """
    raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        logger.error(f"Failed to parse API response: {e}")
        raise DecodeError(f"Response is not well-formed XML: {e}", body=raw) from e

    for el in root.iter():
        if isinstance(el.tag, str) and "}" in el.tag:
            el.tag = el.tag.split("}", 1)[1]
    return root


def _text(el: Optional[Element], path: str, default: str = "") -> str:
    if el is None:
        return default
    value = el.findtext(path)
    return value.strip() if value is not None else default


def _int(el: Optional[Element], path: str) -> int:
    value = _text(el, path)
    try:
        return int(value)
    except ValueError:
        return 0


def _float(el: Optional[Element], path: str) -> float:
    value = _text(el, path)
    try:
        return float(value)
    except ValueError:
        return 0.0


def _bool(el: Optional[Element], path: str) -> bool:
    return _text(el, path).lower() in _TRUE_VALUES


def _texts(el: Optional[Element], path: str) -> List[str]:
    if el is None:
        return []
    return [(child.text or "").strip() for child in el.findall(path)]


def _optional(el: Optional[Element], path: str, build: Callable[[Element], T]) -> Optional[T]:
    if el is None:
        return None
    child = el.find(path)
    return build(child) if child is not None else None


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------

def _image(el: Element) -> Optional[Image]:
    url = _text(el, "URL")
    if not url:
        return None
    return Image(url=url, height=_int(el, "Height"), width=_int(el, "Width"))


def _price(el: Element) -> Price:
    return Price(
        amount=_int(el, "Amount"),
        currency_code=_text(el, "CurrencyCode"),
        formatted_price=_text(el, "FormattedPrice"),
    )


def _errors(el: Optional[Element]) -> List[RemoteError]:
    if el is None:
        return []
    return [
        RemoteError(code=_text(err, "Code"), message=_text(err, "Message"))
        for err in el.findall("Errors/Error")
    ]


def _operation_request(root: Element) -> OperationRequest:
    el = root.find("OperationRequest")
    if el is None:
        return OperationRequest(request_id=_text(root, "RequestId"))
    return OperationRequest(
        request_id=_text(el, "RequestId"),
        arguments=[
            Argument(name=arg.get("Name", ""), value=arg.get("Value", ""))
            for arg in el.findall("Arguments/Argument")
        ],
        request_processing_time=_float(el, "RequestProcessingTime"),
    )


def _request_echo(container: Optional[Element]) -> RequestEcho:
    request = container.find("Request") if container is not None else None
    if request is None:
        return RequestEcho()

    parameters = {}
    for child in request:
        if not child.tag.endswith("Request"):
            continue
        for param in child:
            if len(param):
                continue
            value = (param.text or "").strip()
            if param.tag in parameters:
                parameters[param.tag] = f"{parameters[param.tag]},{value}"
            else:
                parameters[param.tag] = value

    return RequestEcho(
        is_valid=_bool(request, "IsValid"),
        parameters=parameters,
        errors=_errors(request),
    )


def _item_attributes(el: Element) -> ItemAttributes:
    return ItemAttributes(
        title=_text(el, "Title"),
        authors=_texts(el, "Author"),
        creators=_texts(el, "Creator"),
        binding=_text(el, "Binding"),
        brand=_text(el, "Brand"),
        color=_text(el, "Color"),
        ean=_text(el, "EAN"),
        isbn=_text(el, "ISBN"),
        upc=_text(el, "UPC"),
        list_price=_optional(el, "ListPrice", _price),
        manufacturer=_text(el, "Manufacturer"),
        publisher=_text(el, "Publisher"),
        studio=_text(el, "Studio"),
        number_of_items=_int(el, "NumberOfItems"),
        number_of_pages=_int(el, "NumberOfPages"),
        package_quantity=_int(el, "PackageQuantity"),
        features=_texts(el, "Feature"),
        model=_text(el, "Model"),
        product_group=_text(el, "ProductGroup"),
        release_date=_text(el, "ReleaseDate"),
        publication_date=_text(el, "PublicationDate"),
        warranty=_text(el, "Warranty"),
        size=_text(el, "Size"),
    )


def _offer(el: Element) -> Offer:
    listing = el.find("OfferListing")
    return Offer(
        condition=_text(el, "OfferAttributes/Condition"),
        offer_listing_id=_text(listing, "OfferListingId"),
        price=_optional(listing, "Price", _price),
        amount_saved=_optional(listing, "AmountSaved", _price),
        percentage_saved=_int(listing, "PercentageSaved"),
        availability=_text(listing, "Availability"),
        is_eligible_for_prime=_bool(listing, "IsEligibleForPrime"),
    )


def _offers(el: Element) -> Offers:
    return Offers(
        total_offers=_int(el, "TotalOffers"),
        total_offer_pages=_int(el, "TotalOfferPages"),
        more_offers_url=_text(el, "MoreOffersUrl"),
        offers=[_offer(o) for o in el.findall("Offer")],
    )


def _offer_summary(el: Element) -> OfferSummary:
    return OfferSummary(
        lowest_new_price=_optional(el, "LowestNewPrice", _price),
        lowest_used_price=_optional(el, "LowestUsedPrice", _price),
        lowest_collectible_price=_optional(el, "LowestCollectiblePrice", _price),
        total_new=_int(el, "TotalNew"),
        total_used=_int(el, "TotalUsed"),
        total_collectible=_int(el, "TotalCollectible"),
        total_refurbished=_int(el, "TotalRefurbished"),
    )


def _image_set(el: Element) -> ImageSet:
    return ImageSet(
        category=el.get("Category", ""),
        swatch_image=_optional(el, "SwatchImage", _image),
        small_image=_optional(el, "SmallImage", _image),
        thumbnail_image=_optional(el, "ThumbnailImage", _image),
        tiny_image=_optional(el, "TinyImage", _image),
        medium_image=_optional(el, "MediumImage", _image),
        large_image=_optional(el, "LargeImage", _image),
    )


def _browse_node(el: Element) -> BrowseNode:
    return BrowseNode(
        browse_node_id=_text(el, "BrowseNodeId"),
        name=_text(el, "Name"),
        is_category_root=_bool(el, "IsCategoryRoot"),
        top_sellers=[
            TopSeller(asin=_text(ts, "ASIN"), title=_text(ts, "Title"))
            for ts in el.findall("TopSellers/TopSeller")
        ],
        ancestors=[_browse_node(a) for a in el.findall("Ancestors/BrowseNode")],
        children=[_browse_node(c) for c in el.findall("Children/BrowseNode")],
    )


def _item(el: Element) -> Item:
    return Item(
        asin=_text(el, "ASIN"),
        parent_asin=_text(el, "ParentASIN"),
        detail_page_url=_text(el, "DetailPageURL"),
        sales_rank=_int(el, "SalesRank"),
        item_attributes=_optional(el, "ItemAttributes", _item_attributes),
        offer_summary=_optional(el, "OfferSummary", _offer_summary),
        offers=_optional(el, "Offers", _offers),
        small_image=_optional(el, "SmallImage", _image),
        medium_image=_optional(el, "MediumImage", _image),
        large_image=_optional(el, "LargeImage", _image),
        image_sets=[_image_set(s) for s in el.findall("ImageSets/ImageSet")],
        editorial_reviews=[
            EditorialReview(
                source=_text(r, "Source"),
                content=_text(r, "Content"),
                is_link_suppressed=_bool(r, "IsLinkSuppressed"),
            )
            for r in el.findall("EditorialReviews/EditorialReview")
        ],
        browse_nodes=[_browse_node(n) for n in el.findall("BrowseNodes/BrowseNode")],
    )


def _document_errors(root: Element) -> List[RemoteError]:
    """Errors reported outside any Request block (error documents, OperationRequest/Errors)."""
    errors = [
        RemoteError(code=_text(err, "Code"), message=_text(err, "Message"))
        for err in root.findall("Error")
    ]
    errors.extend(_errors(root.find("OperationRequest")))
    return errors


def _check_root(root: Element, expected: str, body: Union[str, bytes]) -> None:
    if root.tag == expected or root.tag.endswith("ErrorResponse"):
        return
    raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    raise DecodeError(f"Unexpected document element <{root.tag}>, expected <{expected}>", body=raw)


# ---------------------------------------------------------------------------
# Public decoders
# ---------------------------------------------------------------------------

def decode_errors(body: Union[str, bytes]) -> List[RemoteError]:
    """Extract every remote error from a response body of any operation."""
    root = parse_document(body)
    errors = _document_errors(root)
    for request in root.iter("Request"):
        errors.extend(_errors(request))
    return errors


def decode_item_search(body: Union[str, bytes]) -> ItemSearchResponse:
    root = parse_document(body)
    _check_root(root, "ItemSearchResponse", body)
    items = root.find("Items")

    response = ItemSearchResponse(
        operation_request=_operation_request(root),
        request=_request_echo(items),
        errors=_document_errors(root),
        items=[_item(i) for i in items.findall("Item")] if items is not None else [],
        total_results=_int(items, "TotalResults"),
        total_pages=_int(items, "TotalPages"),
        more_search_results_url=_text(items, "MoreSearchResultsUrl"),
    )
    logger.debug(f"Decoded ItemSearch response: {len(response.items)} items, valid={response.is_valid}")
    return response


def decode_item_lookup(body: Union[str, bytes]) -> ItemLookupResponse:
    root = parse_document(body)
    _check_root(root, "ItemLookupResponse", body)
    items = root.find("Items")

    return ItemLookupResponse(
        operation_request=_operation_request(root),
        request=_request_echo(items),
        errors=_document_errors(root),
        items=[_item(i) for i in items.findall("Item")] if items is not None else [],
    )


def decode_browse_node_lookup(body: Union[str, bytes]) -> BrowseNodeLookupResponse:
    root = parse_document(body)
    _check_root(root, "BrowseNodeLookupResponse", body)
    nodes = root.find("BrowseNodes")

    return BrowseNodeLookupResponse(
        operation_request=_operation_request(root),
        request=_request_echo(nodes),
        errors=_document_errors(root),
        browse_nodes=[_browse_node(n) for n in nodes.findall("BrowseNode")] if nodes is not None else [],
    )
