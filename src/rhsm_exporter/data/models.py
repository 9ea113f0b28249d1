"""
Subscription records and the response envelopes of the subscription API.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, field_validator

# Value of a timestamp the API left out.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class Pool(BaseModel):
    """
    Entitlement pool attached to a subscription.
    """

    consumed: int = 0
    id: str = ""
    quantity: int = 0
    type: str = ""


class Subscription(BaseModel):
    """
    One subscription entry as returned by the API.

    Field order matches the JSON document written in export mode.
    """

    contract_number: str = Field(default="", alias="contractNumber")
    end_date: datetime = Field(default=ZERO_TIME, alias="endDate")
    quantity: str = ""
    sku: str = ""
    start_date: datetime = Field(default=ZERO_TIME, alias="startDate")
    status: str = ""
    subscription_name: str = Field(default="", alias="subscriptionName")
    subscription_number: str = Field(default="", alias="subscriptionNumber")
    pools: List[Pool] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("pools", mode="before")
    @classmethod
    def null_pools(cls, v):
        return v or []


class Pagination(BaseModel):
    count: int = 0
    limit: int = 0
    offset: int = 0


class SubscriptionsPage(BaseModel):
    """
    Page envelope: a list of subscriptions plus pagination metadata.
    """

    body: List[Subscription] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @field_validator("body", mode="before")
    @classmethod
    def null_body(cls, v):
        return v or []


class ErrorDetail(BaseModel):
    code: int = 0
    message: str = ""


class ErrorEnvelope(BaseModel):
    """
    Payload the API returns instead of a page when a request fails.
    """

    error: ErrorDetail = Field(default_factory=ErrorDetail)
