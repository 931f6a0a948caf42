"""
Request builders for the supported operations.

Each builder returns only the operation-specific parameters; the fixed service
parameters and the Timestamp are added by amazon_api.signing. Values are not
validated beyond what is needed to form a request: the remote service reports
invalid combinations in the response's Request/Errors block.
"""
from typing import Dict, Optional, Sequence, Union

ITEM_SEARCH = "ItemSearch"
ITEM_LOOKUP = "ItemLookup"
BROWSE_NODE_LOOKUP = "BrowseNodeLookup"

DEFAULT_SEARCH_RESPONSE_GROUP = ("Images", "ItemAttributes", "Small", "EditorialReview")
DEFAULT_LOOKUP_RESPONSE_GROUP = ("Images", "ItemAttributes", "Offers", "EditorialReview", "BrowseNodes")
DEFAULT_BROWSE_NODE_RESPONSE_GROUP = ("BrowseNodeInfo", "TopSellers")

StrOrList = Union[str, Sequence[str]]


def _join(value: StrOrList) -> str:
    if isinstance(value, str):
        return value
    return ",".join(value)


def item_search_params(
    keywords: str,
    search_index: str = "All",
    page: Union[int, str] = 1,
    response_group: StrOrList = DEFAULT_SEARCH_RESPONSE_GROUP,
    **extra: str,
) -> Dict[str, str]:
    """
    Build ItemSearch parameters.

    Args:
        keywords: Search terms (must not be empty)
        search_index: Product category, e.g. "Books"
        page: 1-indexed result page, passed through as given
        response_group: Response groups to include
        **extra: Additional ItemSearch parameters (Sort, Author, ...)

    Raises:
        ValueError: If keywords is empty
    """
    if not keywords or not keywords.strip():
        raise ValueError("keywords must not be empty")

    params = {
        "Keywords": keywords,
        "SearchIndex": search_index,
        "ItemPage": str(page),
        "ResponseGroup": _join(response_group),
    }
    params.update({k: str(v) for k, v in extra.items()})
    return params


def item_lookup_params(
    item_id: StrOrList,
    id_type: str = "ASIN",
    response_group: StrOrList = DEFAULT_LOOKUP_RESPONSE_GROUP,
    search_index: Optional[str] = None,
    variation_page: Optional[Union[int, str]] = None,
) -> Dict[str, str]:
    """
    Build ItemLookup parameters for one identifier or a list of them.

    SearchIndex is required by the service for every IdType except ASIN.
    """
    params = {
        "ItemId": _join(item_id),
        "IdType": id_type,
        "ResponseGroup": _join(response_group),
    }
    if search_index:
        params["SearchIndex"] = search_index
    if variation_page is not None:
        params["VariationPage"] = str(variation_page)
    return params


def browse_node_lookup_params(
    browse_node_id: Union[int, str],
    response_group: StrOrList = DEFAULT_BROWSE_NODE_RESPONSE_GROUP,
) -> Dict[str, str]:
    """Build BrowseNodeLookup parameters."""
    return {
        "BrowseNodeId": str(browse_node_id),
        "ResponseGroup": _join(response_group),
    }
