"""
Operating expenses charged to investor contracts
"""
from typing import List

from fastapi import APIRouter, Depends, status

from alifarm.schemas.investors import ExpenseCreate, ExpenseResponse
from alifarm.services.investors import mappers
from alifarm.services.investors.contract_service import ContractService
from .common import get_contract_service

router = APIRouter()


@router.get("/contracts/{contract_id}/expenses", response_model=List[ExpenseResponse])
async def list_contract_expenses_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return [mappers.expense_to_response_dict(row) for row in service.list_contract_expenses(contract_id)]


@router.post(
    "/contracts/{contract_id}/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_expense_api(
    contract_id: int,
    expense: ExpenseCreate,
    service: ContractService = Depends(get_contract_service),
):
    row = service.add_expense(
        contract_id,
        category=expense.category,
        description=expense.description,
        amount=expense.amount,
        expense_date=expense.expense_date,
        sheep_id=expense.sheep_id,
        receipt_url=expense.receipt_url,
    )
    return mappers.expense_to_response_dict(row)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense_api(
    expense_id: int,
    service: ContractService = Depends(get_contract_service),
):
    service.delete_expense(expense_id)
    return None
