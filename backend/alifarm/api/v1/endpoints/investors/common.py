"""
Common dependencies for the Investors module
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from alifarm.core.database import get_db
from alifarm.services.investors.contract_repository import ContractRepository
from alifarm.services.investors.contract_service import ContractService


def get_contract_service(db: Session = Depends(get_db)) -> ContractService:
    return ContractService(ContractRepository(db))
