"""
Exports.
- GET /api/export/inventory and /api/export/warranty return Excel workbooks
- GET /api/export/assignment/{assigned_number} returns the accountability form PDF
"""
import io

from openpyxl import load_workbook

REFERENCE_ID = "REF-001"


def _item(client, **fields):
    payload = {"referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP"}
    payload.update(fields)
    return client.post("/api/inventory", json=payload).json()["data"]


class TestExcelExport:
    def test_inventory_workbook(self, client):
        item = _item(client, brand="Dell", amount=1500, purchase_date="2024-01-15")
        _item(client, referenceid="OTHER")

        res = client.get("/api/export/inventory", params={"referenceid": REFERENCE_ID})
        assert res.status_code == 200
        assert "spreadsheetml" in res.headers["content-type"]
        assert "inventory.xlsx" in res.headers["content-disposition"]

        ws = load_workbook(io.BytesIO(res.content)).active
        assert ws.title == "Inventory"
        assert ws["A1"].value == "Asset Tag"
        assert ws.max_row == 2
        assert ws["A2"].value == item["asset_tag"]

    def test_warranty_workbook(self, client):
        _item(client, purchase_date="2010-01-01")
        res = client.get("/api/export/warranty", params={"referenceid": REFERENCE_ID})
        ws = load_workbook(io.BytesIO(res.content)).active
        headers = [c.value for c in ws[1]]
        status_col = headers.index("Warranty Status")
        assert ws.cell(row=2, column=status_col + 1).value == "Out of Warranty / Expired"

    def test_empty_export_has_header_only(self, client):
        res = client.get("/api/export/inventory", params={"referenceid": "NOBODY"})
        ws = load_workbook(io.BytesIO(res.content)).active
        assert ws.max_row == 1


class TestAssignmentPdf:
    def test_pdf(self, client):
        item = _item(client, brand="Dell", serial_number="SN-1")
        number = client.post("/api/assigned-assets", json={
            "referenceid": REFERENCE_ID, "new_user": "Juan", "position": "Engineer", "department": "IT",
            "items": [{"inventory_id": item["id"]}],
        }).json()["data"]["assigned_number"]

        res = client.get(f"/api/export/assignment/{number}")
        assert res.status_code == 200
        assert res.headers["content-type"] == "application/pdf"
        assert res.content.startswith(b"%PDF")

    def test_unknown_assignment(self, client):
        res = client.get("/api/export/assignment/ASN-20000101-0000")
        assert res.status_code == 404
