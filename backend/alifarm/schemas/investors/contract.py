"""
InvestorContract schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


class ContractCreate(BaseModel):
    """Terms of a new contract; number and end date are generated"""
    investor_id: str = Field(..., max_length=36)
    investment_amount: Decimal = Field(..., gt=0, description="Principal in Rupiah")
    profit_sharing_percentage: Decimal = Field(
        Decimal("70"), ge=0, le=100, description="Investor share of the gain; the owner keeps the rest"
    )
    duration_months: int = Field(12, ge=1)
    # Today when omitted
    start_date: Optional[date] = None


class ContractResponse(BaseModel):
    id: int
    contract_number: str
    investor_id: str
    investor_name: Optional[str] = None
    investor_email: Optional[str] = None

    investment_amount: Decimal
    profit_sharing_percentage: Decimal
    owner_sharing_percentage: Decimal

    start_date: date
    duration_months: int
    end_date: date
    status: str

    total_revenue: Optional[Decimal] = None
    total_expenses: Optional[Decimal] = None
    net_profit: Optional[Decimal] = None
    investor_profit: Optional[Decimal] = None
    actual_roi: Optional[Decimal] = None
    settlement_date: Optional[date] = None
    settlement_notes: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContractSettlementRequest(BaseModel):
    """Figures frozen at settlement; the live summary is used for the omitted ones"""
    total_revenue: Optional[Decimal] = Field(None, ge=0)
    total_expenses: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None


class ContractSummaryResponse(BaseModel):
    contract_id: int
    status: str
    settled: bool

    total_sheep: int
    sheep_born: int
    sheep_sold: int
    sheep_deceased: int

    total_purchase_value: Decimal
    total_current_value: Decimal
    total_expenses: Decimal
    total_revenue: Decimal
    net_result: Decimal
    estimated_profit: Decimal
    estimated_investor_profit: Decimal
    estimated_owner_profit: Decimal
    estimated_roi: Decimal

    class Config:
        from_attributes = True
