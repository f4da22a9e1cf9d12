"""
FinancialReport schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


class FinancialReportCreate(BaseModel):
    report_period: str = Field(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM")
    highlights: Optional[str] = None
    notes: Optional[str] = None
    # Taken from the contract summary when omitted
    opening_value: Optional[Decimal] = Field(None, ge=0)
    closing_value: Optional[Decimal] = Field(None, ge=0)


class FinancialReportResponse(BaseModel):
    id: int
    contract_id: int
    report_period: str
    report_date: date
    opening_value: Decimal
    closing_value: Decimal
    total_expenses: Decimal
    total_revenue: Decimal
    sheep_count: int
    sheep_born: int
    sheep_sold: int
    sheep_deceased: int
    highlights: Optional[str] = None
    notes: Optional[str] = None
    status: str
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
