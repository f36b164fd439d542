import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.engine import build_portfolio, shape_orders, shape_trades, to_decimal
from app.exceptions import UpstreamError, ValidationError
from app.gateway import BinanceGateway, get_gateway
from app.models import BalanceResponse, ErrorResponse, OrdersResponse, RecordList


logger = logging.getLogger("app.routes")

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/orders", response_model=OrdersResponse, responses=ERROR_RESPONSES)
async def get_orders(
    symbol: Optional[str] = None,
    gateway: BinanceGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    if not symbol:
        raise ValidationError("Missing 'symbol' query parameter. Example: /orders?symbol=BTCUSDT")

    logger.info(f"[orders] Fetching orders, trades and price for {symbol}")
    try:
        orders, trades, current_price = await asyncio.gather(
            asyncio.to_thread(gateway.fetch_orders, symbol),
            asyncio.to_thread(gateway.fetch_trades, symbol),
            asyncio.to_thread(gateway.fetch_price, symbol),
        )
    except UpstreamError as e:
        raise e.with_public_message(f"Error retrieving data for symbol {symbol}")

    portfolio = build_portfolio(trades, symbol, current_price, settings.QUOTE_ASSET)
    shaped_orders = shape_orders(orders)
    shaped_trades = shape_trades(trades)

    return OrdersResponse(
        pair=symbol,
        orders=RecordList(total=len(shaped_orders), data=shaped_orders),
        trades=RecordList(total=len(shaped_trades), data=shaped_trades),
        portfolio=portfolio.as_dict(),
    )


@router.get("/balance", response_model=BalanceResponse, responses=ERROR_RESPONSES)
async def get_balance(asset: Optional[str] = None, gateway: BinanceGateway = Depends(get_gateway)):
    if not asset:
        raise ValidationError("Missing 'asset' query parameter. Example: /balance?asset=RUNE")

    try:
        balance = await asyncio.to_thread(gateway.fetch_balance, asset)
    except UpstreamError as e:
        raise e.with_public_message(f"Error retrieving balance for asset {asset}")

    free = to_decimal(balance.get("free", 0))
    locked = to_decimal(balance.get("locked", 0))

    return BalanceResponse(
        asset=asset,
        freeBalance=float(free),
        lockedBalance=float(locked),
        totalBalance=float(free + locked),
    )
