import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

import requests
from binance.error import ClientError, ServerError
from binance.spot import Spot

from app.config import Settings, get_settings, require_credentials
from app.exceptions import UpstreamError


logger = logging.getLogger("app.gateway")


def get_spot(settings: Settings) -> Spot:
    """
    Build a Binance Spot client from settings. Signed endpoints use the key
    and secret; the connector takes care of timestamps and HMAC signatures.
    """
    require_credentials(settings)
    return Spot(
        api_key=settings.BINANCE_API_KEY,
        api_secret=settings.BINANCE_API_SECRET,
        base_url=settings.BINANCE_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT,
    )


class BinanceGateway:
    """Read-only access to the account's Binance spot data."""

    def __init__(self, client: Spot):
        self.client = client

    def fetch_orders(self, symbol: str) -> List[Dict]:
        return self._call("allOrders", symbol, self.client.get_orders, symbol=symbol)

    def fetch_trades(self, symbol: str) -> List[Dict]:
        return self._call("myTrades", symbol, self.client.my_trades, symbol=symbol)

    def fetch_price(self, symbol: str) -> Decimal:
        data = self._call("ticker/price", symbol, self.client.ticker_price, symbol=symbol)
        try:
            return Decimal(str(data["price"]))
        except (KeyError, TypeError, InvalidOperation):
            logger.error(f"[ticker/price] Unexpected payload for {symbol}: {data!r}")
            raise UpstreamError("ticker/price", symbol, f"unexpected payload {data!r}")

    def fetch_balance(self, asset: str) -> Dict:
        account = self._call("account", asset, self.client.account)
        for balance in account.get("balances", []):
            if balance.get("asset") == asset:
                return balance
        return {"asset": asset, "free": "0", "locked": "0"}

    # -------------------------
    # Helpers
    # -------------------------

    def _call(self, operation: str, target: str, func, **kwargs):
        try:
            return func(**kwargs)
        except ClientError as e:
            logger.error(f"[{operation}] Error for {target}: HTTP {e.status_code} - {e.error_code} {e.error_message}")
            raise UpstreamError(operation, target, str(e.error_message), e.status_code) from e
        except ServerError as e:
            logger.error(f"[{operation}] Server error for {target}: HTTP {e.status_code} - {e.message}")
            raise UpstreamError(operation, target, str(e.message), e.status_code) from e
        except requests.RequestException as e:
            logger.error(f"[{operation}] Connection error for {target}: {e}")
            raise UpstreamError(operation, target, str(e)) from e


_gateway: Optional[BinanceGateway] = None


def get_gateway() -> BinanceGateway:
    """FastAPI dependency returning the shared gateway, created on first use."""
    global _gateway
    if _gateway is None:
        _gateway = BinanceGateway(get_spot(get_settings()))
    return _gateway
