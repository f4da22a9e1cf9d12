from datetime import date
from decimal import Decimal

from alifarm.utils.pdf_generator import format_currency, format_percentage, generate_contract_statement_pdf


def test_format_currency():
    assert format_currency(Decimal("1500000")) == "Rp 1.500.000"
    assert format_currency(Decimal("-650000.5")) == "-Rp 650.001"
    assert format_currency(None) == "-"


def test_format_percentage():
    assert format_percentage(Decimal("15.555555")) == "15.56%"


def test_statement_is_a_pdf():
    buffer = generate_contract_statement_pdf({
        "contract": {
            "contract_number": "INV-2026-001",
            "investor_name": "Budi & Sons",
            "investment_amount": Decimal("4500000"),
            "profit_sharing_percentage": Decimal("70"),
            "start_date": date(2026, 3, 15),
            "end_date": date(2027, 3, 15),
            "status": "Active",
        },
        "summary": {
            "settled": False,
            "total_sheep": 1,
            "total_purchase_value": Decimal("4500000"),
            "total_current_value": Decimal("5200000"),
            "total_revenue": Decimal("0"),
            "total_expenses": Decimal("200000"),
            "net_result": Decimal("5000000"),
            "estimated_profit": Decimal("500000"),
            "estimated_investor_profit": Decimal("350000"),
            "estimated_owner_profit": Decimal("150000"),
            "estimated_roi": Decimal("11.1111"),
        },
        "sheep": [{
            "tag_id": "AF-001",
            "breed": "Garut",
            "allocation_date": date(2026, 3, 15),
            "purchase_price": Decimal("4500000"),
            "status": "Active",
        }],
        "expenses": [{
            "expense_date": date(2026, 3, 20),
            "category": "Feed",
            "description": "Hay <bulk>",
            "amount": Decimal("200000"),
        }],
    })

    assert buffer.read(4) == b"%PDF"
