"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentResult(BaseModel):
    ret: int
    msg: str


class PurchaseRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    price: str = Field(..., max_length=32)
    invoice_id: str = Field(..., max_length=64)


class GatewayInfo(BaseModel):
    name: str
    readable_name: str


class GatewayListResponse(BaseModel):
    gateways: list[GatewayInfo]


class TradeResponse(BaseModel):
    id: str
    trade_no: str
    invoice_id: str
    amount: Decimal
    gateway: str
    status: str
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None



class TradeListResponse(BaseModel):
    trades: list[TradeResponse]
