# gst_compliance/domain/services/invoice_pdf.py
"""
Render a stored invoice as a GST tax invoice PDF.
Uses ReportLab for PDF generation.
"""

from __future__ import annotations

import io
import logging
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from gst_compliance.domain.models.documents import LineItem

logger = logging.getLogger("invoice_pdf")

_TITLES = {
    "tax_invoice": "TAX INVOICE",
    "bill_of_supply": "BILL OF SUPPLY",
    "export_invoice": "EXPORT INVOICE",
    "debit_note": "DEBIT NOTE",
    "credit_note": "CREDIT NOTE",
}

_HEADER_BG = colors.Color(0.2, 0.3, 0.5)
_TOTAL_BG = colors.Color(0.9, 0.95, 1.0)
_LABEL_BG = colors.Color(0.95, 0.95, 0.95)
_GRID = colors.Color(0.8, 0.8, 0.8)


def _fmt_amount(val) -> str:
    if val is None:
        return "0.00"
    return f"{float(val):,.2f}"


def _party_lines(party: Any) -> str:
    if party is None:
        return "N/A"
    parts = [party.name]
    if party.gstin:
        parts.append(f"GSTIN: {party.gstin}")
    address = ", ".join(p for p in (party.address, party.city, party.state) if p)
    if address:
        parts.append(address)
    return "<br/>".join(escape(p) for p in parts)


def _item_rows(lines: list[LineItem], inter_state: bool) -> list[list[str]]:
    if inter_state:
        header = ["#", "Description", "HSN", "Qty", "Rate", "Taxable", "GST %", "IGST", "Total"]
    else:
        header = ["#", "Description", "HSN", "Qty", "Rate", "Taxable", "GST %", "CGST", "SGST", "Total"]

    rows = [header]
    for idx, line in enumerate(lines, start=1):
        row = [
            str(idx),
            line.description[:30],
            line.hsn_code or "",
            f"{line.quantity.normalize():f} {line.unit}",
            _fmt_amount(line.rate),
            _fmt_amount(line.taxable_amount),
            f"{line.gst_rate.normalize():f}",
        ]
        if inter_state:
            row.append(_fmt_amount(line.igst_amount))
        else:
            row += [_fmt_amount(line.cgst_amount), _fmt_amount(line.sgst_amount)]
        row.append(_fmt_amount(line.total_amount))
        rows.append(row)
    return rows


def generate_invoice_pdf(
    invoice: Any,
    lines: list[LineItem],
    business: Any,
    customer: Any | None = None,
) -> bytes:
    """
    Build the PDF for one invoice.

    Args:
        invoice: Stored invoice row (number, dates, totals, amount in words).
        lines: Its validated line items.
        business: The issuing business (seller).
        customer: The buyer, if still on record.

    Returns:
        PDF file as bytes.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"Invoice {invoice.invoice_number}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "InvoiceTitle",
        parent=styles["Heading1"],
        fontSize=16,
        alignment=1,  # center
        spaceAfter=10,
    )
    cell_style = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=9, leading=12)

    elements = [Paragraph(_TITLES.get(invoice.invoice_type, "TAX INVOICE"), title_style)]

    # Parties and invoice details
    header_data = [
        ["Invoice Number", invoice.invoice_number, "Invoice Date", invoice.invoice_date.strftime("%d-%b-%Y")],
        [
            "Place of Supply",
            invoice.place_of_supply or "N/A",
            "Due Date",
            invoice.due_date.strftime("%d-%b-%Y") if invoice.due_date else "N/A",
        ],
        ["Seller", Paragraph(_party_lines(business), cell_style),
         "Buyer", Paragraph(_party_lines(customer), cell_style)],
    ]
    if invoice.is_reverse_charge:
        header_data.append(["Reverse Charge", "Yes", "", ""])

    header_table = Table(header_data, colWidths=[80, 180, 70, 180])
    header_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), _LABEL_BG),
                ("BACKGROUND", (2, 0), (2, -1), _LABEL_BG),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    elements.append(header_table)
    elements.append(Spacer(1, 12))

    # Line items
    inter_state = bool(invoice.is_inter_state)
    items_table = Table(_item_rows(lines, inter_state), repeatRows=1)
    items_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
            ]
        )
    )
    elements.append(items_table)
    elements.append(Spacer(1, 12))

    # Totals
    total_rows = [
        ["Taxable Value", _fmt_amount(invoice.subtotal)],
        ["Discount", _fmt_amount(invoice.total_discount)],
    ]
    if inter_state:
        total_rows.append(["IGST", _fmt_amount(invoice.total_igst)])
    else:
        total_rows.append(["CGST", _fmt_amount(invoice.total_cgst)])
        total_rows.append(["SGST", _fmt_amount(invoice.total_sgst)])
    total_rows.append(["TOTAL AMOUNT (Rs)", _fmt_amount(invoice.total_amount)])

    totals_table = Table(total_rows, colWidths=[350, 160])
    totals_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, -1), (-1, -1), _TOTAL_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        )
    )
    elements.append(totals_table)
    elements.append(Spacer(1, 8))

    if invoice.amount_in_words:
        elements.append(Paragraph(f"<b>Amount in words:</b> {escape(invoice.amount_in_words)}", cell_style))
    if invoice.terms_and_conditions:
        elements.append(Spacer(1, 8))
        elements.append(Paragraph(f"<b>Terms:</b> {escape(invoice.terms_and_conditions)}", cell_style))

    elements.append(Spacer(1, 20))
    elements.append(
        Paragraph(
            "This is a computer-generated invoice.",
            ParagraphStyle("Footer", parent=styles["Normal"], fontSize=8, textColor=colors.grey, alignment=1),
        )
    )

    doc.build(elements)
    logger.info("Invoice PDF rendered: %s (%d lines)", invoice.invoice_number, len(lines))
    return buf.getvalue()
