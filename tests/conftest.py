"""
Shared fixtures: a fake Supabase client that mimics the query-builder calls
the app makes (table/select/eq/in_/order/execute).
"""

import pytest


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table_name = table
        self.filters = []
        self.order_by = None

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = [str(v) for v in values]
        self.filters.append(lambda row: str(row.get(column)) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def execute(self):
        self.client.calls.append(self.table_name)
        if self.table_name in self.client.failing:
            raise RuntimeError(f"{self.table_name} is unavailable")
        rows = [dict(r) for r in self.client.tables.get(self.table_name, [])]
        for keep in self.filters:
            rows = [r for r in rows if keep(r)]
        if self.order_by:
            column, desc = self.order_by
            rows.sort(key=lambda r: r.get(column) or "", reverse=desc)
        return FakeResponse(rows)


class FakeSupabase:
    def __init__(self, tables=None, failing=()):
        self.tables = tables or {}
        self.failing = set(failing)
        self.calls = []

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase({
        "store_settings": [
            {"key": "free_shipping_threshold", "value": "10000"},
            {"key": "distance_free_radius", "value": "5"},
            {"key": "shipping_per_km_rate", "value": "50"},
            {"key": "base_shipping_rate", "value": "500"},
            {"key": "tax_rate", "value": "18"},
        ],
        "shipping_zones": [],
        "products": [
            {"id": "1", "name": "Sheesham Dining Table", "price": 45000, "in_stock": True},
            {"id": "2", "name": "Terracotta Sofa", "price": 2950, "in_stock": True},
            {"id": "3", "name": "Ergonomic Office Chair", "price": "1200.50", "in_stock": False},
        ],
    })


@pytest.fixture
def app():
    from storefront.main import app as flask_app
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app, fake_supabase, monkeypatch):
    monkeypatch.setattr("storefront.routes.shipping.supabase", fake_supabase)
    monkeypatch.setattr("storefront.routes.checkout.supabase", fake_supabase)
    return app.test_client()
