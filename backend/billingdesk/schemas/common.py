from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class LocalizedText(ApiModel):
    en: str
    ar: str


class AddOnIn(ApiModel):
    label: str
    price: Decimal = Field(ge=0)
