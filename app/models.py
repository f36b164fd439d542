from pydantic import BaseModel
from typing import Any, Dict, List


class PortfolioResponse(BaseModel):
    totalPurchased: float
    totalSold: float
    netBalance: float
    weightedAveragePurchasePrice: float
    currentPrice: float
    currentPositionValue: float
    unrealizedPnL: float
    percentageReturn: float


class RecordList(BaseModel):
    total: int
    data: List[Dict[str, Any]]


class OrdersResponse(BaseModel):
    pair: str
    orders: RecordList
    trades: RecordList
    portfolio: PortfolioResponse


class BalanceResponse(BaseModel):
    asset: str
    freeBalance: float
    lockedBalance: float
    totalBalance: float


class ErrorResponse(BaseModel):
    error: str
