"""Purchase and processor-notification endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.security import CurrentUser, get_current_user
from paygate.interfaces.http.deps import get_db_session, get_enabled_gateway, get_gateway_registry
from paygate.modules.gateways import GatewayRegistry, PaymentGateway
from paygate.modules.payments import Trade, TradeLedger, TradeNotFoundError
from paygate.schemas import (
    GatewayInfo,
    GatewayListResponse,
    PaymentResult,
    PurchaseRequest,
    TradeListResponse,
    TradeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/payment/gateways", response_model=GatewayListResponse, summary="List enabled payment gateways")
async def list_gateways(registry: GatewayRegistry = Depends(get_gateway_registry)) -> GatewayListResponse:
    return GatewayListResponse(
        gateways=[GatewayInfo(name=gateway.name(), readable_name=gateway.readable_name()) for gateway in registry.enabled()]
    )


@router.post(
    "/user/payment/purchase/{gateway}",
    response_model=PaymentResult,
    summary="Start a hosted checkout for an invoice",
)
async def purchase(
    payload: PurchaseRequest,
    payment_gateway: PaymentGateway = Depends(get_enabled_gateway),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    outcome = await payment_gateway.purchase(db, user, payload.price, payload.invoice_id)
    body = PaymentResult(ret=outcome.ret, msg=outcome.msg).model_dump()
    if outcome.redirect_url:
        return JSONResponse(content=body, headers={"Location": outcome.redirect_url})
    return JSONResponse(content=body)


@router.post("/payment/notify/{gateway}", response_model=PaymentResult, summary="Processor webhook")
async def notify(
    request: Request,
    payment_gateway: PaymentGateway = Depends(get_enabled_gateway),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    raw_body = await request.body()
    outcome = await payment_gateway.notify(db, raw_body, request.headers)
    logger.info("Webhook for %s answered %s: %s", payment_gateway.name(), outcome.status_code, outcome.msg)
    return JSONResponse(
        status_code=outcome.status_code,
        content=PaymentResult(ret=outcome.ret, msg=outcome.msg).model_dump(),
    )


@router.get("/user/payment/trades", response_model=TradeListResponse, summary="List the current user's trades")
async def list_trades(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TradeListResponse:
    ledger = TradeLedger.with_session(db)
    trades = await ledger.list_for_user(user.id, limit=limit, offset=offset)
    return TradeListResponse(trades=[_to_response(trade) for trade in trades])


@router.get("/user/payment/trades/{trade_no}", response_model=TradeResponse, summary="Get one of the current user's trades")
async def get_trade(
    trade_no: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TradeResponse:
    ledger = TradeLedger.with_session(db)
    try:
        trade = await ledger.find_by_token(trade_no)
    except TradeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trade not found") from exc
    if trade.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trade not found")
    return _to_response(trade)


def _to_response(trade: Trade) -> TradeResponse:
    return TradeResponse(
        id=trade.id,
        trade_no=trade.trade_no,
        invoice_id=trade.invoice_id,
        amount=trade.amount,
        gateway=trade.gateway,
        status=trade.status.value,
        created_at=trade.created_at,
        paid_at=trade.paid_at,
    )
