"""
Inventory import from Excel.
- GET /api/import/template returns the template
- POST /api/import/inventory processes an uploaded workbook
- import_service: header and row validation
"""
import io
from datetime import date

from openpyxl import Workbook, load_workbook

from assetdesk.config import settings
from assetdesk.services import import_service as svc
from assetdesk.services.dates import local_today

REFERENCE_ID = "REF-001"
YEAR = local_today(settings.APP_TIMEZONE).year
XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_excel(rows: list[list], headers: list[str] | None = None) -> bytes:
    wb = Workbook()
    ws = wb.active
    headers = headers or ["asset_tag", "asset_type", "status", "brand", "purchase_date", "amount"]
    for col, h in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=h)
    for row_num, row in enumerate(rows, 2):
        for col, val in enumerate(row, 1):
            ws.cell(row=row_num, column=col, value=val)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def upload(client, content: bytes, filename: str = "inventory.xlsx"):
    return client.post(
        "/api/import/inventory",
        files={"file": (filename, content, XLSX)},
        data={"referenceid": REFERENCE_ID},
    )


# ── Template ──────────────────────────────────────────────────────────────────

class TestImportTemplate:
    def test_template_download(self, client):
        res = client.get("/api/import/template")
        assert res.status_code == 200
        assert "spreadsheetml" in res.headers["content-type"]
        assert "attachment" in res.headers["content-disposition"]

    def test_template_headers_are_accepted_fields(self, client):
        wb = load_workbook(io.BytesIO(client.get("/api/import/template").content))
        ws = wb.active
        headers = [c.value for c in ws[1]]
        assert headers == svc.ALLOWED_FIELDS

    def test_template_imports_cleanly(self, db):
        result = svc.import_inventory_from_excel(db, svc.generate_import_template(), REFERENCE_ID)
        assert result["success"] is True
        assert result["imported"] == 1


# ── Upload ────────────────────────────────────────────────────────────────────

class TestImportUpload:
    def test_import_rows(self, client):
        content = make_excel([
            [None, "Laptop", "spare", "Dell", date(2024, 1, 15), 58990],
            [None, "MONITOR", None, "LG", None, "12,500.00"],
        ])
        res = upload(client, content)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["imported"] == 2
        assert data["skipped"] == 0

        rows = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()["data"]
        by_brand = {r["brand"]: r for r in rows}
        assert by_brand["Dell"]["asset_tag"] == f"LAP-{YEAR}-001"
        assert by_brand["Dell"]["warranty_date"] == "2025-01-15"
        assert by_brand["LG"]["status"] == "SPARE"
        assert by_brand["LG"]["asset_tag"] == f"MON-{YEAR}-001"

    def test_unknown_column_rejects_file(self, client):
        content = make_excel([["Dell", "red"]], headers=["brand", "color"])
        res = upload(client, content)
        assert res.status_code == 400
        assert res.json() == {"error": "Invalid column(s): color"}
        assert client.get("/api/inventory", params={"referenceid": REFERENCE_ID}).json()["total"] == 0

    def test_invalid_rows_are_skipped(self, client):
        content = make_excel([
            [None, "LAPTOP", "SPARE", "A", None, None],
            [f"LAP-{YEAR}-010", "LAPTOP", "SPARE", "B", None, None],
            [f"LAP-{YEAR}-010", "LAPTOP", "SPARE", "C", None, None],
            [None, "PRINTER", "SPARE", "D", None, None],
            [None, "LAPTOP", "BROKEN", "E", None, None],
            [f"MON-{YEAR}-001", "LAPTOP", "SPARE", "F", None, None],
            [None, "LAPTOP", "SPARE", "G", None, None],
        ])
        data = upload(client, content).json()["data"]
        assert data["imported"] == 3
        assert data["skipped"] == 4

        statuses = {d["row"]: d for d in data["details"]}
        assert statuses[4]["status"] == "skipped"
        assert statuses[5]["reason"] == "Invalid status or asset_type"
        assert statuses[8]["asset_tag"] == f"LAP-{YEAR}-011"

    def test_existing_tag_skipped(self, client):
        client.post("/api/inventory", json={
            "referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP", "asset_tag": f"LAP-{YEAR}-001",
        })
        data = upload(client, make_excel([[f"LAP-{YEAR}-001", "LAPTOP", "SPARE", "X", None, None]])).json()["data"]
        assert (data["imported"], data["skipped"]) == (0, 1)

    def test_wrong_extension(self, client):
        res = upload(client, b"a,b,c", filename="inventory.csv")
        assert res.status_code == 400

    def test_unreadable_workbook(self, client):
        res = upload(client, b"not an excel file")
        assert res.status_code == 400
        assert res.json()["error"].startswith("Could not read file")

    def test_requires_login(self, anon_client):
        res = upload(anon_client, make_excel([]))
        assert res.status_code == 401


# ── Service helpers ───────────────────────────────────────────────────────────

class TestImportHelpers:
    def test_normalize_header(self):
        assert svc._normalize("Serial Number") == "serial_number"
        assert svc._normalize(" asset_type* ") == "asset_type"

    def test_parse_amount(self):
        assert str(svc._parse_amount("1,234.50")) == "1234.50"
        assert svc._parse_amount("abc") is None
        assert svc._parse_amount(None) is None
        assert str(svc._parse_amount(99)) == "99"
