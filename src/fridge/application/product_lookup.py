"""ProductLookupClient: resolve a barcode to a product title.

The upstream service is known to prefix its JSON with non-JSON preamble,
so the body is parsed from the first ``{`` onward. The client only
reports a title or a LookupFailedError; what happens next is up to the
caller.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import quote

from fridge.domain.exceptions import (
    MissingCredentialError,
    NetworkError,
    NoPayloadError,
    ParseError,
)
from fridge.domain.ports.network_port import NetworkPort

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.upcdatabase.org"


def extract_title(body: str) -> str:
    """Pull the ``title`` string out of a loosely-structured response body."""
    start = body.find("{")
    if start == -1:
        raise NoPayloadError("No JSON object found in the response")

    try:
        payload = json.loads(body[start:])
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON payload: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseError("JSON payload is not an object")
    title = payload.get("title")
    if not isinstance(title, str):
        raise ParseError("JSON payload carries no string 'title'")
    return title


class ProductLookupClient:

    def __init__(self, network: NetworkPort, base_url: str = DEFAULT_BASE_URL) -> None:
        self._network = network
        self._base_url = base_url.rstrip("/")

    def url_for(self, barcode: str) -> str:
        return f"{self._base_url}/product/{quote(barcode, safe='')}"

    async def lookup(self, barcode: str, api_key: str | None) -> str:
        """Return the product title for ``barcode``.

        Raises MissingCredentialError before any network traffic when no
        key is given, NetworkError on transport failures and non-2xx
        responses, NoPayloadError / ParseError on unusable bodies.
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError("No API key configured for product lookup")

        logger.info("Looking up barcode %s", barcode)
        response = await self._network.get(self.url_for(barcode), {"apikey": api_key})
        if not response.is_success:
            logger.warning(
                "Lookup for %s returned HTTP %s", barcode, response.status_code
            )
            raise NetworkError(
                f"Lookup service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        title = extract_title(response.body)
        logger.info("Barcode %s resolved to %r", barcode, title)
        return title
