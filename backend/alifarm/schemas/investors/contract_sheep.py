"""
ContractSheep schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


class AllocationCreate(BaseModel):
    sheep_id: int
    purchase_price: Decimal = Field(..., gt=0, description="Price recorded at allocation time")


class SaleRequest(BaseModel):
    sale_price: Decimal = Field(..., gt=0)
    sale_date: Optional[date] = None
    notes: Optional[str] = None


class DeceasedRequest(BaseModel):
    notes: Optional[str] = None


class ContractSheepResponse(BaseModel):
    id: int
    contract_id: int
    sheep_id: int
    allocation_date: date
    purchase_price: Decimal
    sale_date: Optional[date] = None
    sale_price: Optional[Decimal] = None
    status: str
    notes: Optional[str] = None

    # From the joined sheep row
    tag_id: Optional[str] = None
    breed: Optional[str] = None
    market_value: Optional[Decimal] = None
    birth_type: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
