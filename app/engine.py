from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List


ZERO = Decimal("0")

DEFAULT_QUOTE_ASSET = "USDT"

BUY = "BUY"
SELL = "SELL"

# Binance field names kept in the passthrough payloads
ORDER_FIELDS = (
    "symbol",
    "orderId",
    "clientOrderId",
    "price",
    "origQty",
    "executedQty",
    "cummulativeQuoteQty",
    "status",
    "timeInForce",
    "type",
    "side",
    "stopPrice",
    "icebergQty",
    "time",
    "updateTime",
    "isWorking",
    "workingTime",
    "origQuoteOrderQty",
    "selfTradePreventionMode",
)

TRADE_FIELDS = (
    "symbol",
    "id",
    "orderId",
    "price",
    "qty",
    "commission",
    "commissionAsset",
    "isBuyer",
    "time",
)


def to_decimal(value) -> Decimal:
    return Decimal(str(value))


def to_number(value: Decimal) -> float:
    # Decimal keeps the sign of zero (e.g. -10 * 0); JSON should not
    return float(value) + 0.0


@dataclass(frozen=True)
class Trade:
    side: str  # "BUY" or "SELL"
    price: Decimal
    quantity: Decimal
    commission: Decimal
    commission_asset: str

    @classmethod
    def from_binance(cls, raw: Dict) -> "Trade":
        side = raw.get("side")
        if side is None:
            side = BUY if raw.get("isBuyer") else SELL
        return cls(
            side=side.upper(),
            price=to_decimal(raw["price"]),
            quantity=to_decimal(raw["qty"]),
            commission=to_decimal(raw.get("commission", 0)),
            commission_asset=raw.get("commissionAsset", ""),
        )


@dataclass(frozen=True)
class PortfolioSummary:
    total_purchased: Decimal
    total_sold: Decimal
    total_purchase_cost: Decimal
    weighted_average_purchase_price: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.total_purchased - self.total_sold


@dataclass(frozen=True)
class PortfolioMetrics:
    total_purchased: Decimal
    total_sold: Decimal
    net_balance: Decimal
    weighted_average_purchase_price: Decimal
    current_price: Decimal
    current_position_value: Decimal
    unrealized_pnl: Decimal
    percentage_return: Decimal

    def as_dict(self) -> Dict[str, float]:
        return {
            "totalPurchased": to_number(self.total_purchased),
            "totalSold": to_number(self.total_sold),
            "netBalance": to_number(self.net_balance),
            "weightedAveragePurchasePrice": to_number(self.weighted_average_purchase_price),
            "currentPrice": to_number(self.current_price),
            "currentPositionValue": to_number(self.current_position_value),
            "unrealizedPnL": to_number(self.unrealized_pnl),
            "percentageReturn": to_number(self.percentage_return),
        }


# -------------------------
# Base asset
# -------------------------

def get_base_asset(symbol: str, quote_asset: str = DEFAULT_QUOTE_ASSET) -> str:
    """
    "RUNEUSDT" -> "RUNE". Symbols that do not end with the quote asset are
    returned unchanged.
    """
    if quote_asset and symbol.endswith(quote_asset):
        return symbol[: -len(quote_asset)]
    return symbol


# -------------------------
# Cost basis
# -------------------------

def calculate_portfolio(trades: Iterable[Trade], base_asset: str) -> PortfolioSummary:
    """
    Accumulate bought and sold quantities, adjusted for commissions charged
    in the base asset.

    Buys fund the commission out of the received quantity, sells pay it on
    top of the sold quantity. The purchase cost always uses the raw quantity.
    """
    total_purchased = ZERO
    total_sold = ZERO
    total_purchase_cost = ZERO

    for trade in trades:
        fee = trade.commission if trade.commission_asset == base_asset else ZERO

        if trade.side == BUY:
            total_purchased += trade.quantity - fee
            total_purchase_cost += trade.price * trade.quantity
        else:
            total_sold += trade.quantity + fee

    if total_purchased > 0:
        avg_price = total_purchase_cost / total_purchased
    else:
        avg_price = ZERO

    return PortfolioSummary(
        total_purchased=total_purchased,
        total_sold=total_sold,
        total_purchase_cost=total_purchase_cost,
        weighted_average_purchase_price=avg_price,
    )


# -------------------------
# Performance
# -------------------------

def evaluate_performance(summary: PortfolioSummary, current_price: Decimal) -> PortfolioMetrics:
    current_price = to_decimal(current_price)
    net_balance = summary.net_balance
    avg_price = summary.weighted_average_purchase_price

    if avg_price > 0:
        percentage_return = (current_price / avg_price - 1) * 100
    else:
        percentage_return = ZERO

    return PortfolioMetrics(
        total_purchased=summary.total_purchased,
        total_sold=summary.total_sold,
        net_balance=net_balance,
        weighted_average_purchase_price=avg_price,
        current_price=current_price,
        current_position_value=net_balance * current_price,
        unrealized_pnl=net_balance * (current_price - avg_price),
        percentage_return=percentage_return,
    )


def build_portfolio(
    raw_trades: Iterable[Dict],
    symbol: str,
    current_price: Decimal,
    quote_asset: str = DEFAULT_QUOTE_ASSET,
) -> PortfolioMetrics:
    trades = [Trade.from_binance(t) for t in raw_trades]
    summary = calculate_portfolio(trades, get_base_asset(symbol, quote_asset))
    return evaluate_performance(summary, current_price)


# -------------------------
# Passthrough records
# -------------------------

def select_fields(record: Dict, fields: Iterable[str]) -> Dict:
    return {field: record.get(field) for field in fields}


def shape_orders(orders: List[Dict]) -> List[Dict]:
    """Newest first by creation time."""
    ordered = sorted(orders, key=lambda o: o.get("time") or 0, reverse=True)
    return [select_fields(o, ORDER_FIELDS) for o in ordered]


def shape_trades(trades: List[Dict]) -> List[Dict]:
    return [select_fields(t, TRADE_FIELDS) for t in trades]
