import io
from datetime import datetime, timezone, date
from sqlalchemy.orm import Session
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.lib import colors

from assetdesk.services import assignment_service, inventory_service

_FONT_REGULAR = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"

_HEADER_FILL = PatternFill(start_color="1C2D42", end_color="1C2D42", fill_type="solid")
_HEADER_FONT = Font(bold=True, color="F5A623", size=11)

INVENTORY_COLUMNS = [
    ("asset_tag", "Asset Tag", 16),
    ("asset_type", "Type", 12),
    ("status", "Status", 12),
    ("location", "Location", 18),
    ("new_user", "User", 22),
    ("old_user", "Previous User", 22),
    ("department", "Department", 18),
    ("position", "Position", 18),
    ("brand", "Brand", 14),
    ("model", "Model", 20),
    ("processor", "Processor", 18),
    ("ram", "RAM", 8),
    ("storage", "Storage", 10),
    ("serial_number", "Serial Number", 20),
    ("mac_address", "MAC Address", 18),
    ("purchase_date", "Purchase Date", 14),
    ("warranty_date", "Warranty Date", 14),
    ("asset_age", "Age", 14),
    ("amount", "Amount", 12),
    ("remarks", "Remarks", 30),
]

WARRANTY_COLUMNS = [
    ("asset_tag", "Asset Tag", 16),
    ("asset_type", "Type", 12),
    ("brand", "Brand", 14),
    ("model", "Model", 20),
    ("serial_number", "Serial Number", 20),
    ("new_user", "User", 22),
    ("purchase_date", "Purchase Date", 14),
    ("warranty_date", "Warranty Date", 14),
    ("warranty_status", "Warranty Status", 26),
    ("warranty_days", "Days Left", 10),
]


def _write_sheet(ws, columns: list[tuple], rows: list[dict]) -> None:
    for col, (_, label, width) in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col, value=label)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center")
        ws.column_dimensions[get_column_letter(col)].width = width

    for row_num, row in enumerate(rows, 2):
        for col, (field, _, _) in enumerate(columns, 1):
            value = row.get(field)
            if field == "amount" and value is not None:
                value = float(value)
            ws.cell(row=row_num, column=col, value=value if value is not None else "")

    ws.row_dimensions[1].height = 22
    ws.freeze_panes = "A2"


def _workbook_bytes(wb: Workbook) -> bytes:
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_inventory_excel(db: Session, referenceid: str) -> bytes:
    rows, _ = inventory_service.inventory_snapshot(db, referenceid)
    wb = Workbook()
    ws = wb.active
    ws.title = "Inventory"
    _write_sheet(ws, INVENTORY_COLUMNS, rows)
    return _workbook_bytes(wb)


def export_warranty_excel(db: Session, referenceid: str, today: date | None = None) -> bytes:
    rows = inventory_service.warranty_view(db, referenceid, today)
    wb = Workbook()
    ws = wb.active
    ws.title = "Warranty"
    _write_sheet(ws, WARRANTY_COLUMNS, rows)
    return _workbook_bytes(wb)


def export_assignment_pdf(db: Session, assigned_number: str) -> bytes:
    """Accountability form for one deployment batch, with signature lines."""
    rows = assignment_service.get_batch(db, assigned_number)
    first = rows[0]

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Asset Accountability Form {assigned_number}")
    pw, ph = A4
    margin = 20 * mm
    content_w = pw - 2 * margin
    bottom_y = 40 * mm

    # ── Header ─────────────────────────────────────────────────────────────
    c.setFillColor(colors.HexColor("#1C2D42"))
    c.rect(0, ph - 35 * mm, pw, 35 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont(_FONT_BOLD, 18)
    c.drawString(margin, ph - 20 * mm, "ASSET ACCOUNTABILITY FORM")
    c.setFont(_FONT_REGULAR, 10)
    c.drawString(margin, ph - 29 * mm, f"AssetDesk  ·  Assignment No. {assigned_number}")

    c.setFillColor(colors.black)
    c.setFont(_FONT_REGULAR, 9)
    c.drawRightString(pw - margin, ph - 40 * mm,
                      f"Printed: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M')} UTC")

    # ── Custodian ──────────────────────────────────────────────────────────
    y = ph - 50 * mm
    y = _pdf_section_header(c, "Custodian", y, margin, pw)
    y = _pdf_table(c, [
        ("Name:", first.new_user),
        ("Position:", first.position),
        ("Department:", first.department),
        ("Previous user:", first.old_user or "-"),
        ("Date issued:", first.date_created.strftime("%Y-%m-%d")),
        ("Remarks:", first.remarks or "-"),
    ], y, margin, pw)

    # ── Items ──────────────────────────────────────────────────────────────
    y -= 8 * mm
    y = _pdf_section_header(c, f"Issued Items ({len(rows)})", y, margin, pw)
    col_x = [margin + 2 * mm, margin + 40 * mm, margin + 65 * mm, margin + 100 * mm, margin + 135 * mm]
    c.setFont(_FONT_BOLD, 8)
    for x, label in zip(col_x, ["Asset Tag", "Type", "Brand", "Model", "Serial Number"]):
        c.drawString(x, y - 3 * mm, label)
    y -= 7 * mm
    for i, row in enumerate(rows):
        if y < bottom_y:
            c.showPage()
            y = ph - margin
        bg = colors.HexColor("#f8f8f8") if i % 2 == 0 else colors.white
        c.setFillColor(bg)
        c.rect(margin, y - 6 * mm, content_w, 7 * mm, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont(_FONT_REGULAR, 8)
        values = [row.asset_tag, row.asset_type, row.brand, row.model, row.serial_number]
        for x, value in zip(col_x, values):
            c.drawString(x, y - 3 * mm, str(value or "-")[:22])
        y -= 7 * mm

    # ── Signatures ─────────────────────────────────────────────────────────
    if y - 30 * mm < 20 * mm:
        c.showPage()
        y = ph - margin
    y -= 20 * mm
    sig_w = (content_w - 20 * mm) / 2
    for x, label in ((margin, "Issued by:"), (pw - margin - sig_w, "Received by:")):
        c.setFillColor(colors.black)
        c.setFont(_FONT_REGULAR, 10)
        c.drawString(x, y, label)
        c.line(x, y - 12 * mm, x + sig_w, y - 12 * mm)
        c.setFont(_FONT_REGULAR, 8)
        c.setFillColor(colors.gray)
        c.drawString(x, y - 15 * mm, "Name, signature, date")

    c.setFillColor(colors.HexColor("#f0f0f0"))
    c.rect(0, 0, pw, 12 * mm, fill=True, stroke=False)
    c.setFillColor(colors.gray)
    c.setFont(_FONT_REGULAR, 8)
    c.drawString(margin, 4 * mm, "AssetDesk · IT asset management")
    c.drawRightString(pw - margin, 4 * mm, assigned_number)

    c.save()
    return buf.getvalue()


def _pdf_section_header(c, title: str, y: float, margin: float, pw: float) -> float:
    c.setFillColor(colors.HexColor("#404040"))
    c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont(_FONT_BOLD, 10)
    c.drawString(margin + 3 * mm, y - 3.5 * mm, title)
    c.setFillColor(colors.black)
    return y - 10 * mm


def _pdf_table(c, rows: list[tuple], y: float, margin: float, pw: float) -> float:
    col1_w = 45 * mm
    for i, (label, value) in enumerate(rows):
        bg = colors.HexColor("#f8f8f8") if i % 2 == 0 else colors.white
        c.setFillColor(bg)
        c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont(_FONT_BOLD, 9)
        c.drawString(margin + 2 * mm, y - 3 * mm, label)
        c.setFont(_FONT_REGULAR, 9)
        c.drawString(margin + col1_w, y - 3 * mm, str(value)[:70])
        y -= 7 * mm
    return y
