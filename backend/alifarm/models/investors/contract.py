"""
InvestorContract model - Profit-sharing contracts between the farm and an investor
"""
import enum

from sqlalchemy import Column, Integer, String, Date, Numeric, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class ContractStatus(str, enum.Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class InvestorContract(Base):
    """
    The investor puts up `investment_amount` and receives
    `profit_sharing_percentage` of the gain; the owner keeps the complement.
    Settlement columns stay NULL until the contract is completed.
    """
    __tablename__ = "investor_contracts"

    id = Column(Integer, primary_key=True, index=True)
    contract_number = Column(String(30), unique=True, nullable=False)
    investor_id = Column(String(36), ForeignKey("profiles.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Terms
    investment_amount = Column(Numeric(14, 2), nullable=False)
    profit_sharing_percentage = Column(Numeric(5, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    duration_months = Column(Integer, nullable=False)
    end_date = Column(Date, nullable=False)

    status = Column(String(20), nullable=False, server_default=ContractStatus.ACTIVE.value, index=True)

    # Settlement (frozen when completed)
    total_revenue = Column(Numeric(14, 2), nullable=True)
    total_expenses = Column(Numeric(14, 2), nullable=True)
    net_profit = Column(Numeric(14, 2), nullable=True)
    investor_profit = Column(Numeric(14, 2), nullable=True)
    actual_roi = Column(Numeric(18, 4), nullable=True)
    settlement_date = Column(Date, nullable=True)
    settlement_notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    investor = relationship("Profile", back_populates="contracts")
    sheep = relationship("ContractSheep", back_populates="contract", cascade="all, delete-orphan")
    expenses = relationship("ContractExpense", back_populates="contract", cascade="all, delete-orphan")
    reports = relationship("FinancialReport", back_populates="contract", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Completed', 'Cancelled')"),
        CheckConstraint("investment_amount >= 0"),
        CheckConstraint("profit_sharing_percentage >= 0 AND profit_sharing_percentage <= 100"),
        CheckConstraint("duration_months >= 1"),
    )

    @property
    def owner_sharing_percentage(self):
        """Owner's share, always derived from the investor's percentage."""
        if self.profit_sharing_percentage is None:
            return None
        return 100 - self.profit_sharing_percentage

    @property
    def investor_name(self):
        return self.investor.name if self.investor else None

    @property
    def investor_email(self):
        return self.investor.email if self.investor else None

    def __repr__(self):
        return f"<InvestorContract(id={self.id}, number='{self.contract_number}', status='{self.status}')>"
