from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Hashable, List

from dateutil import parser as dtp
from pydantic import BaseModel, ConfigDict, field_validator


@dataclass(frozen=True)
class DeliveryRecord:
    """One scheduled meal delivery."""

    id: Hashable
    delivery_instant: datetime   # naive, local time
    restaurant_name: str
    cuisine: str

    @property
    def delivery_day(self) -> date:
        return self.delivery_instant.date()


def to_local_naive(value: datetime) -> datetime:
    """Drop tzinfo after converting an aware datetime to the machine's local zone."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


# ----------------------------- API PAYLOADS ---------------------------

class MealPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str
    delivery_date: datetime
    restaurant_name: str = ""
    restaurant_cuisine: str = ""

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _parse_delivery_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return dtp.isoparse(value)
        return value

    @field_validator("restaurant_name", "restaurant_cuisine", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_record(self) -> DeliveryRecord:
        return DeliveryRecord(
            id=self.id,
            delivery_instant=to_local_naive(self.delivery_date),
            restaurant_name=self.restaurant_name,
            cuisine=self.restaurant_cuisine,
        )


class MealsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meals: List[MealPayload] = []


class ClientPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""


class ClientResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    client: ClientPayload
