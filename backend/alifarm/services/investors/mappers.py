"""Row -> calculator value mapping, one pure function per entity"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from alifarm.models.livestock.sheep import BirthType
from .settlement import AllocationEntry, ContractTerms, ExpenseEntry


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() keeps floats coming from SQLite at their printed value
    return Decimal(str(value))


def _status_value(value: Any) -> str:
    return getattr(value, "value", value)


def contract_terms_from_row(row: Any) -> ContractTerms:
    return ContractTerms(
        contract_id=row.id,
        investment_amount=to_decimal(row.investment_amount),
        profit_sharing_percentage=to_decimal(row.profit_sharing_percentage),
        start_date=row.start_date,
        status=_status_value(row.status),
        total_revenue=to_decimal(row.total_revenue),
        total_expenses=to_decimal(row.total_expenses),
        investor_profit=to_decimal(row.investor_profit),
        actual_roi=to_decimal(row.actual_roi),
    )


def allocation_from_row(row: Any) -> AllocationEntry:
    """`row.sheep` is the joined animal; it may be missing."""
    sheep = getattr(row, "sheep", None)
    return AllocationEntry(
        sheep_id=row.sheep_id,
        purchase_price=to_decimal(row.purchase_price),
        status=_status_value(row.status),
        market_value=to_decimal(sheep.market_value) if sheep is not None else None,
        sale_price=to_decimal(row.sale_price),
        born_in_farm=sheep is not None and sheep.birth_type == BirthType.BORN.value,
    )


def expense_from_row(row: Any) -> ExpenseEntry:
    return ExpenseEntry(
        amount=to_decimal(row.amount),
        category=_status_value(row.category),
        expense_date=row.expense_date,
    )


def allocation_to_response_dict(row: Any) -> dict:
    """Flatten an allocation and its animal for ContractSheepResponse"""
    sheep = getattr(row, "sheep", None)
    return {
        "id": row.id,
        "contract_id": row.contract_id,
        "sheep_id": row.sheep_id,
        "allocation_date": row.allocation_date,
        "purchase_price": row.purchase_price,
        "sale_date": row.sale_date,
        "sale_price": row.sale_price,
        "status": row.status,
        "notes": row.notes,
        "tag_id": sheep.tag_id if sheep is not None else None,
        "breed": sheep.breed if sheep is not None else None,
        "market_value": sheep.market_value if sheep is not None else None,
        "birth_type": sheep.birth_type if sheep is not None else None,
        "created_at": row.created_at,
    }


def expense_to_response_dict(row: Any) -> dict:
    sheep = getattr(row, "sheep", None)
    return {
        "id": row.id,
        "contract_id": row.contract_id,
        "expense_date": row.expense_date,
        "category": row.category,
        "description": row.description,
        "amount": row.amount,
        "sheep_id": row.sheep_id,
        "sheep_tag_id": sheep.tag_id if sheep is not None else None,
        "receipt_url": row.receipt_url,
        "created_at": row.created_at,
    }
