"""
ContractExpense schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal

from alifarm.models.investors.contract_expense import ExpenseCategory


class ExpenseCreate(BaseModel):
    category: ExpenseCategory = Field(..., description="Feed, Medicine, Vaccination, Labor, Transport, Maintenance, Other")
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    # Today when omitted; never before the contract start date
    expense_date: Optional[date] = None
    sheep_id: Optional[int] = None
    receipt_url: Optional[str] = None


class ExpenseResponse(BaseModel):
    id: int
    contract_id: int
    expense_date: date
    category: str
    description: str
    amount: Decimal
    sheep_id: Optional[int] = None
    sheep_tag_id: Optional[str] = None
    receipt_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
