"""
ContractExpense model - Costs charged to an investor contract
"""
import enum

from sqlalchemy import Column, Integer, String, Date, Numeric, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class ExpenseCategory(str, enum.Enum):
    FEED = "Feed"
    MEDICINE = "Medicine"
    VACCINATION = "Vaccination"
    LABOR = "Labor"
    TRANSPORT = "Transport"
    MAINTENANCE = "Maintenance"
    OTHER = "Other"


class ContractExpense(Base):
    __tablename__ = "contract_expenses"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(Integer, ForeignKey("investor_contracts.id", ondelete="CASCADE"), nullable=False, index=True)

    expense_date = Column(Date, nullable=False)
    category = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)

    # Optional: expense tied to a single animal
    sheep_id = Column(Integer, ForeignKey("sheep.id", ondelete="SET NULL"), nullable=True)
    receipt_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    contract = relationship("InvestorContract", back_populates="expenses")
    sheep = relationship("Sheep")

    __table_args__ = (
        CheckConstraint(
            "category IN ('Feed', 'Medicine', 'Vaccination', 'Labor', 'Transport', 'Maintenance', 'Other')"
        ),
        CheckConstraint("amount > 0"),
    )

    def __repr__(self):
        return f"<ContractExpense(id={self.id}, contract_id={self.contract_id}, amount={self.amount})>"
