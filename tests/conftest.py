from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from main import app
from app.config import Settings, get_settings
from app.exceptions import UpstreamError
from app.gateway import get_gateway


class FakeGateway:
    def __init__(self):
        self.orders = []
        self.trades = []
        self.price = Decimal("1.35")
        self.balances = {}
        self.failing = set()
        self.calls = []
        # Optional sync points, waited on by every read that does not fail
        self.barrier = None
        self.release = None

    def _record(self, operation, target):
        self.calls.append((operation, target))
        if operation in self.failing:
            raise UpstreamError(operation, target, "Invalid API-key, IP, or permissions for action.", 401)
        if self.barrier is not None:
            self.barrier.wait()
        if self.release is not None:
            self.release.wait(timeout=2)

    def fetch_orders(self, symbol):
        self._record("allOrders", symbol)
        return list(self.orders)

    def fetch_trades(self, symbol):
        self._record("myTrades", symbol)
        return list(self.trades)

    def fetch_price(self, symbol):
        self._record("ticker/price", symbol)
        return self.price

    def fetch_balance(self, asset):
        self._record("account", asset)
        return self.balances.get(asset, {"asset": asset, "free": "0", "locked": "0"})


@pytest.fixture(autouse=True)
def gateway():
    fake = FakeGateway()
    app.dependency_overrides[get_gateway] = lambda: fake
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None)
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client
