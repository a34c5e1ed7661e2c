from datetime import datetime
import os
import sys
import tempfile

# Establish isolated temp directory and set env BEFORE importing settings
TEMP_DIR = tempfile.mkdtemp(prefix="ledger_smoke_")
os.environ["DATA_DIR"] = TEMP_DIR
os.environ["DB_FILENAME"] = "smoke.sqlite3"

# Ensure project root on path when executed directly
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from fastapi.testclient import TestClient
from receipt_ledger.core.config import Settings
from receipt_ledger.main import create_app
from receipt_ledger.routers.deps import get_clock
from receipt_ledger.services.clock import FixedClock

settings = Settings()
settings.init_post_load()

app = create_app(settings_override=settings)
app.dependency_overrides[get_clock] = lambda: FixedClock(datetime(2024, 1, 10, 20, 0))
client = TestClient(app)

for title, amount, category in [
    ("milk", 100, "Food"),
    ("soap", 200, "Household"),
    ("coffee", 100, "Food"),
]:
    client.post("/expenses", json={"title": title, "amount": amount, "category": category})

listed = client.get("/expenses").json()
summary = client.get("/analytics/summary").json()
breakdown = client.get("/analytics/category-breakdown").json()
projection = client.get("/analytics/projection").json()

print("LIST", [e["title"] for e in listed])
print("SUMMARY", summary["count"], summary["total"], summary["average"])
print("BREAKDOWN", [(b["category"], b["count"], b["total"]) for b in breakdown])
print("PROJECTION", projection["per_day_average"], projection["projected_total"])

# Basic assertions (will raise if mismatch)
assert [e["title"] for e in listed] == ["coffee", "soap", "milk"]
assert (summary["count"], summary["total"], summary["average"]) == (3, 400, 133)
assert summary["top_category"] == "Food"
assert projection["per_day_average"] == 40
assert projection["projected_total"] == 400 + 40 * 21

first = listed[-1]["id"]
client.patch(f"/expenses/{first}", json={"amount": 150})
assert client.get("/analytics/summary").json()["total"] == 450
client.delete("/expenses")
assert client.get("/expenses").json() == []
print("Ledger smoke test: PASS")
