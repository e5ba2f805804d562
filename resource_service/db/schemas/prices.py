from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PriceEntry(BaseModel):
    currency: str
    price: float


class PriceList(BaseModel):
    data: List[PriceEntry]
    total: int


class Conversion(BaseModel):
    from_token: str = Field(alias="from")
    to_token: str = Field(alias="to")
    amount: float
    rate: float
    output: float
    model_config = ConfigDict(populate_by_name=True)
