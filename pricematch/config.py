from __future__ import annotations

import os
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ---------------------------
# Scoring weights (fixed)
# ---------------------------

# Blend of the search-phrase overlap and the title overlap.
INTENT_WEIGHT = 0.40
CONTEXT_WEIGHT = 0.60


# ---------------------------
# Display / labelling
# ---------------------------

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
SOURCE_LABEL = os.getenv("SOURCE_LABEL", "AliExpress")
PRICE_DECIMALS = 2


# ---------------------------
# HTTP surface
# ---------------------------

CORS_ALLOW_ORIGINS: List[str] = [
    o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
]
CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS: List[str] = ["Content-Type"]


# ---------------------------
# Logging / observability
# ---------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class ReferenceItem(BaseModel):
    """
    The product we are trying to find cheaper matches for.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    price: float = Field(gt=0)
    category: Optional[Union[str, int]] = None
    search_query: Optional[str] = Field(default=None, alias="searchQuery")


class Candidate(BaseModel):
    """
    A marketplace listing as handed over by the calling layer.

    ``sale_price`` is kept exactly as received; it may be malformed and is
    only parsed during scoring.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    sale_price: Optional[Union[str, float, int]] = Field(
        default=None,
        validation_alias=AliasChoices("salePrice", "sale_price"),
        serialization_alias="salePrice",
    )
    promotion_link: str = Field(
        default="",
        validation_alias=AliasChoices("promotionLink", "promotion_link"),
        serialization_alias="promotionLink",
    )
    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("imageUrl", "image_url"),
        serialization_alias="imageUrl",
    )
    currency_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("currencyCode", "currency_code"),
        serialization_alias="currencyCode",
    )
    product_id: str = Field(
        validation_alias=AliasChoices("productId", "product_id"),
        serialization_alias="productId",
    )

    @field_validator("product_id", mode="before")
    @classmethod
    def _coerce_product_id(cls, value):
        if isinstance(value, bool):
            raise ValueError("productId must be a string or integer")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("title", "promotion_link", "image_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class MatchItem(BaseModel):
    """
    One ranked match, exactly as returned to the client.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    link: str
    price: float
    price_display: str = Field(alias="priceDisplay")
    source_label: str = Field(alias="sourceLabel")
    image_url: str = Field(alias="imageUrl")
    score: float


class RankedResult(BaseModel):
    """
    Response body for the score-and-sort strategy.
    """

    kind: Literal["rank"] = "rank"
    matches: List[MatchItem]


class MergedResult(BaseModel):
    """
    Response body for the merge-and-dedup strategy.
    """

    kind: Literal["merge"] = "merge"
    products: List[Candidate]


MatchResult = Annotated[Union[RankedResult, MergedResult], Field(discriminator="kind")]


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
