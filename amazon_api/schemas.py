"""
Pydantic schemas for Product Advertising API responses.

Records are frozen value objects built once by amazon_api.decoder. Optional
response groups that the service did not return are left as None, empty lists,
"" or 0.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from amazon_api.exceptions import RemoteValidationError


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Argument(_Record):
    """Request argument echoed in OperationRequest."""
    name: str
    value: str = ""


class OperationRequest(_Record):
    """Request bookkeeping returned with every response."""
    request_id: str = ""
    arguments: List[Argument] = Field(default_factory=list)
    request_processing_time: float = 0.0

    def argument(self, name: str) -> Optional[str]:
        for arg in self.arguments:
            if arg.name == name:
                return arg.value
        return None


class RemoteError(_Record):
    """Error reported by the service, e.g. AWS.MissingParameters."""
    code: str
    message: str = ""


class Image(_Record):
    url: str
    height: int = 0
    width: int = 0


class Price(_Record):
    """Amount in the smallest currency unit (cents) of currency_code."""
    amount: int = 0
    currency_code: str = ""
    formatted_price: str = ""


class TopSeller(_Record):
    asin: str
    title: str = ""


class ItemAttributes(_Record):
    """ItemAttributes response group."""
    title: str = ""
    authors: List[str] = Field(default_factory=list)
    creators: List[str] = Field(default_factory=list)
    binding: str = ""
    brand: str = ""
    color: str = ""
    ean: str = Field("", description="EAN / ISBN-13")
    isbn: str = ""
    upc: str = ""
    list_price: Optional[Price] = None
    manufacturer: str = ""
    publisher: str = ""
    studio: str = ""
    number_of_items: int = 0
    number_of_pages: int = 0
    package_quantity: int = 0
    features: List[str] = Field(default_factory=list)
    model: str = ""
    product_group: str = ""
    release_date: str = ""
    publication_date: str = ""
    warranty: str = ""
    size: str = ""


class Offer(_Record):
    condition: str = ""
    offer_listing_id: str = ""
    price: Optional[Price] = None
    amount_saved: Optional[Price] = None
    percentage_saved: int = 0
    availability: str = ""
    is_eligible_for_prime: bool = False


class Offers(_Record):
    """Offers response group."""
    total_offers: int = 0
    total_offer_pages: int = 0
    more_offers_url: str = ""
    offers: List[Offer] = Field(default_factory=list)


class OfferSummary(_Record):
    lowest_new_price: Optional[Price] = None
    lowest_used_price: Optional[Price] = None
    lowest_collectible_price: Optional[Price] = None
    total_new: int = 0
    total_used: int = 0
    total_collectible: int = 0
    total_refurbished: int = 0


class EditorialReview(_Record):
    source: str = ""
    content: str = ""
    is_link_suppressed: bool = False


class ImageSet(_Record):
    category: str = ""
    swatch_image: Optional[Image] = None
    small_image: Optional[Image] = None
    thumbnail_image: Optional[Image] = None
    tiny_image: Optional[Image] = None
    medium_image: Optional[Image] = None
    large_image: Optional[Image] = None


class BrowseNode(_Record):
    """
    Product category node.

    ancestors holds the upward chain: ancestors[0] is the direct parent, which
    in turn carries its own ancestors. Nodes never point back to descendants
    except through the children list the service returns for the looked-up node.
    """
    browse_node_id: str
    name: str = ""
    is_category_root: bool = False
    top_sellers: List[TopSeller] = Field(default_factory=list)
    ancestors: List["BrowseNode"] = Field(default_factory=list)
    children: List["BrowseNode"] = Field(default_factory=list)

    def ancestry(self) -> List["BrowseNode"]:
        """Ancestor nodes from the direct parent up to the root."""
        chain = []
        node = self
        while node.ancestors:
            node = node.ancestors[0]
            chain.append(node)
        return chain


class Item(_Record):
    """A product returned by ItemSearch or ItemLookup."""
    asin: str
    parent_asin: str = ""
    detail_page_url: str = ""
    sales_rank: int = 0
    item_attributes: Optional[ItemAttributes] = None
    offer_summary: Optional[OfferSummary] = None
    offers: Optional[Offers] = None
    small_image: Optional[Image] = None
    medium_image: Optional[Image] = None
    large_image: Optional[Image] = None
    image_sets: List[ImageSet] = Field(default_factory=list)
    editorial_reviews: List[EditorialReview] = Field(default_factory=list)
    browse_nodes: List[BrowseNode] = Field(default_factory=list)

    @property
    def title(self) -> str:
        return self.item_attributes.title if self.item_attributes else ""


class RequestEcho(_Record):
    """
    The service's echo of the operation request.

    parameters holds the echoed operation parameters (Keywords, SearchIndex,
    ResponseGroup, ...). Repeated elements are joined with ",".
    """
    is_valid: bool = False
    parameters: Dict[str, str] = Field(default_factory=dict)
    errors: List[RemoteError] = Field(default_factory=list)


class APIResponse(_Record):
    """
    Fields shared by every operation response.

    errors holds document-level errors, such as an invalid signature, that are
    reported outside any Request block.
    """
    operation_request: OperationRequest = Field(default_factory=OperationRequest)
    request: RequestEcho = Field(default_factory=RequestEcho)
    errors: List[RemoteError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.request.is_valid and not self.errors

    @property
    def all_errors(self) -> List[RemoteError]:
        return list(self.errors) + list(self.request.errors)

    def raise_for_validity(self) -> None:
        """
        Raise RemoteValidationError if the service rejected the request.

        Request-level errors on a valid request (e.g. AWS.ECommerceService.NoExactMatches)
        describe an empty result and do not raise.
        """
        if self.is_valid:
            return
        errors = self.all_errors
        summary = "; ".join(f"{e.code}: {e.message}" for e in errors) or "request marked invalid"
        raise RemoteValidationError(
            f"Request rejected by the service ({summary})",
            errors=errors,
            arguments={a.name: a.value for a in self.operation_request.arguments},
        )


class ItemSearchResponse(APIResponse):
    items: List[Item] = Field(default_factory=list)
    total_results: int = 0
    total_pages: int = 0
    more_search_results_url: str = ""


class ItemLookupResponse(APIResponse):
    items: List[Item] = Field(default_factory=list)

    @property
    def item(self) -> Optional[Item]:
        return self.items[0] if self.items else None


class BrowseNodeLookupResponse(APIResponse):
    browse_nodes: List[BrowseNode] = Field(default_factory=list)

    @property
    def browse_node(self) -> Optional[BrowseNode]:
        return self.browse_nodes[0] if self.browse_nodes else None


BrowseNode.model_rebuild()
