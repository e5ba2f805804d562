"""
Price table and conversion endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from resource_service.db import schemas
from resource_service.services.price_service import PriceTable, convert, get_price_table

router = APIRouter(tags=["prices"])


@router.get("/prices", response_model=schemas.PriceList)
def list_prices_endpoint(table: PriceTable = Depends(get_price_table)):
    entries = table.entries()
    return {"data": entries, "total": len(entries)}


@router.get("/convert", response_model=schemas.Conversion)
def convert_endpoint(
    from_token: str = Query(alias="from"),
    to_token: str = Query(alias="to"),
    amount: Optional[str] = None,
    table: PriceTable = Depends(get_price_table),
):
    result = convert(table, from_token, to_token, amount)
    return schemas.Conversion(
        from_token=result.from_token,
        to_token=result.to_token,
        amount=result.amount,
        rate=result.rate,
        output=result.output,
    )
