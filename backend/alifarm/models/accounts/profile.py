"""
Profile model - User profiles (owner, staff, investors)
"""
import enum

from sqlalchemy import Column, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class Role(str, enum.Enum):
    OWNER = "OWNER"
    STAFF = "STAFF"
    INVESTOR = "INVESTOR"
    GUEST = "GUEST"


class Profile(Base):
    """
    One row per authenticated user; `id` is the identity provider UUID.
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, server_default=Role.GUEST.value)
    status = Column(String(20), nullable=False, server_default="Active")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    contracts = relationship("InvestorContract", back_populates="investor")

    __table_args__ = (
        CheckConstraint("role IN ('OWNER', 'STAFF', 'INVESTOR', 'GUEST')"),
        CheckConstraint("status IN ('Active', 'Inactive')"),
    )

    def __repr__(self):
        return f"<Profile(id={self.id}, email='{self.email}', role='{self.role}')>"
