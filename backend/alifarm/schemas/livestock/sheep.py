"""
Sheep schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


class SheepBase(BaseModel):
    breed: str = Field(..., max_length=50)
    dob: Optional[date] = None
    gender: str = Field(..., pattern="^(Male|Female)$")
    cage_id: Optional[str] = Field(None, max_length=20)
    image_url: Optional[str] = None
    notes: Optional[str] = None
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    market_value: Optional[Decimal] = Field(None, ge=0)
    parent_male_id: Optional[int] = None
    parent_female_id: Optional[int] = None
    birth_type: Optional[str] = Field(None, pattern="^(Purchased|Born)$")


class SheepCreate(SheepBase):
    # Generated (AF-NNN) when omitted
    tag_id: Optional[str] = Field(None, max_length=20)
    status: str = Field("Healthy", pattern="^(Healthy|Sick|Sold|Deceased|Quarantine)$")


class SheepUpdate(BaseModel):
    breed: Optional[str] = Field(None, max_length=50)
    dob: Optional[date] = None
    gender: Optional[str] = Field(None, pattern="^(Male|Female)$")
    status: Optional[str] = Field(None, pattern="^(Healthy|Sick|Sold|Deceased|Quarantine)$")
    cage_id: Optional[str] = Field(None, max_length=20)
    image_url: Optional[str] = None
    notes: Optional[str] = None
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    # Mutable market value read by the contract summary
    market_value: Optional[Decimal] = Field(None, ge=0)
    birth_type: Optional[str] = Field(None, pattern="^(Purchased|Born)$")


class SheepResponse(SheepBase):
    id: int
    tag_id: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
