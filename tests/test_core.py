import asyncio
import json
import logging
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from receipt_ledger.core.config import Settings
from receipt_ledger.core.errors import server_error_handler
from receipt_ledger.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    request_context_middleware,
    request_id_ctx,
)
from receipt_ledger.models import AmountUpdateIn, Category, Expense, ExpenseIn
from receipt_ledger.services.clock import FixedClock, SystemClock


def test_settings_derive_db_path(tmp_path):
    s = Settings(data_dir=tmp_path / "nested", db_filename="x.sqlite3")
    s.init_post_load()
    assert s.db_path == tmp_path / "nested" / "x.sqlite3"
    assert s.db_path.parent.is_dir()
    assert s.storage_key == "expenses"


def test_settings_reject_unknown_timezone(tmp_path):
    s = Settings(data_dir=tmp_path, timezone="Mars/Olympus_Mons")
    with pytest.raises(ValueError):
        s.init_post_load()


def test_settings_read_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("TOP_DAYS_LIMIT", "5")
    monkeypatch.setenv("STORAGE_KEY", "ledger")
    s = Settings(data_dir=tmp_path)
    assert s.top_days_limit == 5
    assert s.storage_key == "ledger"


def test_json_formatter_includes_request_id():
    record = logging.LogRecord("receipt_ledger.test", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    token = request_id_ctx.set("abc123")
    try:
        RequestIdFilter().filter(record)
    finally:
        request_id_ctx.reset(token)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello there"
    assert payload["request_id"] == "abc123"
    assert payload["level"] == "INFO"
    assert "path" not in payload


def test_clocks():
    instant = datetime(2024, 1, 1, 12, 0)
    assert FixedClock(instant).now() == instant
    assert SystemClock().now().tzinfo is None


def test_expense_rejects_non_finite_amounts():
    for bad in (float("nan"), float("inf"), "NaN"):
        with pytest.raises(ValidationError):
            ExpenseIn(title="x", amount=bad)
        with pytest.raises(ValidationError):
            AmountUpdateIn(amount=bad)


def test_expense_accepts_refunds_and_zero():
    assert ExpenseIn(title="refund", amount=-12.5).amount == -12.5
    assert AmountUpdateIn(amount=0).amount == 0


def test_expense_is_frozen():
    e = Expense(id="1", date=date(2024, 1, 1), title="milk", amount=1, category=Category.FOOD)
    with pytest.raises(ValidationError):
        e.amount = 2


def test_request_end_logged_when_handler_raises(caplog):
    request = SimpleNamespace(method="GET", url=SimpleNamespace(path="/boom"))

    async def call_next(_request):
        raise RuntimeError("boom")

    with caplog.at_level(logging.DEBUG, logger="receipt_ledger.request"):
        with pytest.raises(RuntimeError):
            asyncio.run(request_context_middleware(request, call_next))
    end = [r for r in caplog.records if r.getMessage() == "request end"]
    assert len(end) == 1
    assert end[0].path == "/boom"
    assert end[0].status_code is None
    assert request_id_ctx.get() is None


def test_server_error_handler_logs_traceback(caplog):
    try:
        raise RuntimeError("kaput")
    except RuntimeError as caught:
        exc = caught
    with caplog.at_level(logging.ERROR, logger="receipt_ledger.errors"):
        resp = server_error_handler(None, exc)
    assert resp.status_code == 500
    record = caplog.records[-1]
    assert record.exc_info[0] is RuntimeError
    assert record.exc_info[1] is exc
    assert "kaput" in caplog.text
