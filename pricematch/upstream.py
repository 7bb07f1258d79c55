from __future__ import annotations

"""
Decoding of AliExpress affiliate product-query payloads.

The calling layer fetches listings (signing, quotas and transport all live
there) and hands us the JSON body it got back. Products sit at::

    aliexpress_affiliate_product_query_response
        .resp_result.result.products.product

A missing level simply means "no results". A payload that is not JSON
object-shaped, an ``error_response`` envelope or a ``product`` value of the
wrong type means the collaborator is broken, and is raised as
UpstreamResponseError so the API can report it separately from bad input.
"""

from typing import Any, Dict, List, Mapping

from loguru import logger
from pydantic import ValidationError

from .config import Candidate

RESPONSE_ROOT_KEY = "aliexpress_affiliate_product_query_response"
RESPONSE_PATH = ("resp_result", "result", "products", "product")

# upstream field -> Candidate field, first present key wins
_FIELD_SOURCES: Dict[str, tuple] = {
    "title": ("product_title", "title"),
    "sale_price": ("target_sale_price", "sale_price", "salePrice"),
    "promotion_link": ("promotion_link", "promotionLink"),
    "image_url": ("product_main_image_url", "image_url", "imageUrl"),
    "currency_code": ("target_sale_price_currency", "sale_price_currency", "currencyCode"),
    "product_id": ("product_id", "productId"),
}


class UpstreamResponseError(ValueError):
    """The marketplace response could not be interpreted."""


def extract_products(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, Mapping):
        raise UpstreamResponseError(
            f"Upstream payload must be a JSON object, got {type(payload).__name__}"
        )

    err = payload.get("error_response")
    if err:
        if isinstance(err, Mapping):
            code = err.get("code", "unknown")
            msg = err.get("msg") or err.get("sub_msg") or "no message"
            raise UpstreamResponseError(f"Upstream error {code}: {msg}")
        raise UpstreamResponseError(f"Upstream error: {err}")

    # The proxy forwards {"products": [...]} once it has unwrapped the body.
    if RESPONSE_ROOT_KEY not in payload and "products" in payload:
        products = payload.get("products")
    else:
        node: Any = payload.get(RESPONSE_ROOT_KEY)
        for key in RESPONSE_PATH:
            if not isinstance(node, Mapping):
                node = None
                break
            node = node.get(key)
        products = node

    if products is None:
        return []
    if not isinstance(products, list):
        raise UpstreamResponseError(
            f"Upstream product list has unexpected type {type(products).__name__}"
        )
    records: List[Dict[str, Any]] = []
    for p in products:
        if not isinstance(p, Mapping):
            logger.warning("Skipping upstream product of type {}: not a JSON object", type(p).__name__)
            continue
        records.append(p)
    return records


def to_candidate(raw: Mapping[str, Any]) -> Candidate:
    data: Dict[str, Any] = {}
    for field, sources in _FIELD_SOURCES.items():
        for key in sources:
            if raw.get(key) is not None:
                data[field] = raw[key]
                break
    return Candidate.model_validate(data)


def candidates_from_payload(payload: Any) -> List[Candidate]:
    products = extract_products(payload)
    out: List[Candidate] = []
    for raw in products:
        try:
            out.append(to_candidate(raw))
        except ValidationError as e:
            logger.warning(
                "Skipping upstream product {}: {}",
                raw.get("product_id", "<no id>"),
                e.errors()[0]["msg"],
            )
    logger.info("Decoded {} candidates from {} upstream products", len(out), len(products))
    return out
