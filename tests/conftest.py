from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from receipt_ledger.core.config import Settings
from receipt_ledger.main import create_app
from receipt_ledger.models import Category, Expense
from receipt_ledger.routers.deps import get_clock
from receipt_ledger.services.clock import FixedClock

NOW = datetime(2024, 3, 15, 9, 30)


def make_expense(id, day, title, amount, category=Category.FOOD):
    return Expense(id=str(id), date=day, title=title, amount=amount, category=category)


@pytest.fixture
def sample_items():
    return [
        make_expense(1, date(2024, 1, 1), "milk", 100, Category.FOOD),
        make_expense(2, date(2024, 1, 1), "soap", 200, Category.HOUSEHOLD),
        make_expense(3, date(2024, 1, 2), "coffee", 100, Category.FOOD),
    ]


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path, db_filename="test.sqlite3", top_days_limit=2)
    s.init_post_load()
    return s


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def client(settings, clock):
    app = create_app(settings_override=settings)
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
