from __future__ import annotations

from datetime import date

from fpdf import FPDF

from chemlab.app.models.core_types import CURRENCY_SYMBOLS
from chemlab.app.models.inventory import AppSettings, ReorderPlan


def _latin1(text: str) -> str:
    # core PDF fonts are latin-1 only
    return text.encode("latin-1", errors="replace").decode("latin-1")


def render_purchase_order(plan: ReorderPlan, settings: AppSettings, today: date | None = None) -> bytes:
    """Printable purchase order for the current reorder plan."""
    sym = _latin1(CURRENCY_SYMBOLS[settings.currency])
    today = today or date.today()

    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, "CHEMICAL PURCHASE ORDER", new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.ln(6)

    pdf.set_font("Helvetica", size=11)
    pdf.cell(0, 8, _latin1(f"Organization : {settings.org_name}"), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 8, f"Date : {today.isoformat()}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    if not plan.items:
        pdf.cell(0, 8, "All levels healthy. No purchase required.", new_x="LMARGIN", new_y="NEXT")
        return bytes(pdf.output())

    widths = (60, 35, 25, 25, 45)
    pdf.set_font("Helvetica", "B", 10)
    for w, title in zip(widths, ("Chemical", "Packaging", "Stock", "Order", "Cost")):
        pdf.cell(w, 8, title, border=1)
    pdf.ln()

    pdf.set_font("Helvetica", size=10)
    for item in plan.items:
        row = (
            item.name[:32],
            f"{item.package_size}/{item.unit}"[:18],
            f"{item.current_stock:g}",
            str(item.suggested_qty),
            f"{sym}{item.line_cost:,.2f}",
        )
        for w, value in zip(widths, row):
            pdf.cell(w, 8, _latin1(value), border=1)
        pdf.ln()

    pdf.ln(4)
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 8, f"Total estimated cost : {sym}{plan.total_cost:,.2f}", new_x="LMARGIN", new_y="NEXT")

    pdf.ln(10)
    pdf.set_font("Helvetica", "I", 9)
    pdf.cell(0, 8, "Items listed are at or below their reorder point.", new_x="LMARGIN", new_y="NEXT")
    return bytes(pdf.output())
