"""
Pagination Utilities

Helpers for walking paginated list endpoints.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from vidhost.constants import DEFAULT_CURRENT_PAGE, DEFAULT_PAGE_SIZE
from vidhost.errors import MalformedResponse, TransportError
from vidhost.interfaces.transport_interface import TransportInterface
from vidhost.utils.casting import decode_json

logger = logging.getLogger(__name__)


def build_query(parameters: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """
    Flatten list parameters into query pairs.

    Lists become repeated "key[]" entries and mappings become "key[name]"
    entries, the bracket form the API expects.

    Example:
        build_query({"tags": ["a", "b"], "metadata": {"team": "x"}})
        # [("tags[]", "a"), ("tags[]", "b"), ("metadata[team]", "x")]
    """
    query: List[Tuple[str, str]] = []
    for key, value in parameters.items():
        if isinstance(value, (list, tuple)):
            query.extend((f"{key}[]", str(item)) for item in value)
        elif isinstance(value, Mapping):
            query.extend((f"{key}[{name}]", str(item)) for name, item in value.items())
        elif isinstance(value, bool):
            query.append((key, "true" if value else "false"))
        elif value is not None:
            query.append((key, str(value)))
    return query


def iterate_pages(
    transport: TransportInterface,
    path: str,
    parameters: Mapping[str, Any],
) -> Iterator[Dict[str, Any]]:
    """
    Yield raw items from a paginated list endpoint.

    When parameters contain "currentPage" only that page is fetched,
    otherwise pages are walked until pagination.pagesTotal is reached.

    Args:
        transport: Transport used for the GET requests
        path: List endpoint, e.g. "/videos"
        parameters: Filters plus optional currentPage/pageSize

    Raises:
        TransportError: If a page request fails
        MalformedResponse: If a page lacks "data" or "pagination"
    """
    params = dict(parameters)
    single_page = "currentPage" in parameters
    params.setdefault("pageSize", DEFAULT_PAGE_SIZE)
    current_page = int(params.get("currentPage", DEFAULT_CURRENT_PAGE))

    while True:
        params["currentPage"] = current_page
        response = transport.get(path, params=build_query(params))
        if not response.is_successful():
            raise TransportError.from_response(response, f"Listing {path}")

        page = decode_json(response)
        if not isinstance(page, dict) or "data" not in page:
            raise MalformedResponse(f"List payload from {path} is missing 'data'")

        yield from page["data"]

        if single_page:
            return

        try:
            pages_total = int(page["pagination"]["pagesTotal"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponse(
                f"List payload from {path} has invalid pagination: {e}"
            ) from e

        if current_page >= pages_total:
            return

        current_page += 1
        logger.debug(f"Fetching page {current_page}/{pages_total} of {path}")
