"""
PDF Generator utilities using ReportLab
"""
from decimal import Decimal, ROUND_HALF_UP
from xml.sax.saxutils import escape
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from alifarm.core.config import settings
from alifarm.utils.pdf_layout import create_document, build_pdf


def format_currency(value) -> str:
    """Whole Rupiah with dot thousands separators: 1500000 -> 'Rp 1.500.000'."""
    if value is None:
        return "-"
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    digits = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}{settings.CURRENCY_SYMBOL} {digits}"


def format_percentage(value) -> str:
    if value is None:
        return "-"
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{amount}%"


def format_date(value) -> str:
    return value.strftime("%d/%m/%Y") if value else "-"


def _grid_style(header_color):
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), header_color),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8.5),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f2f5f3')]),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#9aa9a0')),
    ])


def generate_contract_statement_pdf(statement_data: dict, branding=None):
    """
    Build the investor statement for one contract.

    Args:
        statement_data: dict with keys
            - contract: contract fields (contract_number, investor_name, investment_amount,
              profit_sharing_percentage, start_date, end_date, status, settlement fields)
            - summary: ContractSummary fields
            - sheep: list of allocation dicts (tag_id, breed, allocation_date,
              purchase_price, status, sale_price)
            - expenses: list of expense dicts (expense_date, category, description, amount)

    Returns:
        BytesIO object with the PDF
    """
    contract = statement_data.get("contract", {})
    summary = statement_data.get("summary", {})
    sheep_rows = statement_data.get("sheep", [])
    expense_rows = statement_data.get("expenses", [])

    buffer = BytesIO()
    doc, branding_config = create_document(buffer, branding=branding, doc_kwargs={"pagesize": A4})
    if not branding_config.get("report_title"):
        branding_config["report_title"] = "Investor statement"
    if not branding_config.get("report_subtitle"):
        branding_config["report_subtitle"] = contract.get("contract_number", "")

    primary = branding_config["primary_color"]
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'StatementTitle',
        parent=styles['Heading1'],
        fontSize=17,
        textColor=colors.black,
        spaceAfter=8,
        alignment=TA_CENTER,
    )
    heading_style = ParagraphStyle(
        'StatementHeading',
        parent=styles['Heading2'],
        fontSize=12,
        textColor=primary,
        spaceBefore=6,
        spaceAfter=6,
    )

    story = []
    story.append(Paragraph(f"CONTRACT {contract.get('contract_number', '')}", title_style))
    story.append(Paragraph(
        f"Investor: {escape(contract.get('investor_name') or contract.get('investor_id', '-'))}"
        f" &nbsp;&nbsp; Status: {contract.get('status', '-')}",
        styles['Normal'],
    ))
    story.append(Spacer(1, 5 * mm))

    terms_data = [
        ['Investment', format_currency(contract.get('investment_amount'))],
        ['Investor share', format_percentage(contract.get('profit_sharing_percentage'))],
        ['Period', f"{format_date(contract.get('start_date'))} - {format_date(contract.get('end_date'))}"],
    ]
    if contract.get('settlement_date'):
        terms_data.append(['Settled on', format_date(contract.get('settlement_date'))])
    terms_table = Table(terms_data, colWidths=[60 * mm, 118 * mm])
    terms_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#4a4a4a')),
        ('TEXTCOLOR', (0, 0), (0, -1), colors.white),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BACKGROUND', (1, 0), (1, -1), colors.HexColor('#e5e5e5')),
        ('GRID', (0, 0), (-1, -1), 1, colors.black),
    ]))
    story.append(Paragraph("TERMS", heading_style))
    story.append(terms_table)
    story.append(Spacer(1, 6 * mm))

    roi_label = "ROI" if summary.get('settled') else "Estimated ROI"
    summary_data = [
        ['Figure', 'Value'],
        ['Active sheep', str(summary.get('total_sheep', 0))],
        ['Sold / deceased / born', f"{summary.get('sheep_sold', 0)} / {summary.get('sheep_deceased', 0)} / {summary.get('sheep_born', 0)}"],
        ['Purchase value', format_currency(summary.get('total_purchase_value'))],
        ['Current value', format_currency(summary.get('total_current_value'))],
        ['Revenue', format_currency(summary.get('total_revenue'))],
        ['Expenses', format_currency(summary.get('total_expenses'))],
        ['Net result', format_currency(summary.get('net_result'))],
        ['Profit', format_currency(summary.get('estimated_profit'))],
        ['Investor profit', format_currency(summary.get('estimated_investor_profit'))],
        ['Owner profit', format_currency(summary.get('estimated_owner_profit'))],
        [roi_label, format_percentage(summary.get('estimated_roi'))],
    ]
    summary_table = Table(summary_data, colWidths=[90 * mm, 88 * mm])
    summary_table.setStyle(_grid_style(primary))
    story.append(Paragraph("SUMMARY", heading_style))
    story.append(summary_table)
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("SHEEP", heading_style))
    if sheep_rows:
        sheep_data = [['Tag', 'Breed', 'Allocated', 'Purchase', 'Status', 'Sale']]
        for row in sheep_rows:
            sheep_data.append([
                row.get('tag_id') or '-',
                row.get('breed') or '-',
                format_date(row.get('allocation_date')),
                format_currency(row.get('purchase_price')),
                row.get('status', '-'),
                format_currency(row.get('sale_price')),
            ])
        sheep_table = Table(
            sheep_data,
            colWidths=[24 * mm, 34 * mm, 26 * mm, 34 * mm, 24 * mm, 36 * mm],
            repeatRows=1,
        )
        sheep_table.setStyle(_grid_style(primary))
        story.append(sheep_table)
    else:
        story.append(Paragraph("No sheep allocated", styles['Normal']))
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("EXPENSES", heading_style))
    if expense_rows:
        expense_data = [['Date', 'Category', 'Description', 'Amount']]
        for row in expense_rows:
            expense_data.append([
                format_date(row.get('expense_date')),
                row.get('category', '-'),
                Paragraph(escape(row.get('description') or ''), styles['BodyText']),
                format_currency(row.get('amount')),
            ])
        expense_table = Table(
            expense_data,
            colWidths=[24 * mm, 28 * mm, 88 * mm, 38 * mm],
            repeatRows=1,
        )
        expense_table.setStyle(_grid_style(primary))
        story.append(expense_table)
    else:
        story.append(Paragraph("No expenses recorded", styles['Normal']))

    if contract.get('settlement_notes'):
        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph("SETTLEMENT NOTES", heading_style))
        story.append(Paragraph(escape(contract['settlement_notes']), styles['Normal']))

    build_pdf(doc, story, branding_config)
    buffer.seek(0)
    return buffer
