"""
Investor contract service: summary, settlement, allocations and expenses.

All public operations go through `ContractRepository`; business rules and
validation live here, arithmetic lives in `settlement`.
"""
from __future__ import annotations

import functools
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from alifarm.core.config import settings
from alifarm.models.accounts.profile import Role
from alifarm.models.investors import (
    AllocationStatus,
    ContractExpense,
    ContractSheep,
    ContractStatus,
    ExpenseCategory,
    InvestorContract,
)
from alifarm.models.livestock.sheep import SheepStatus
from alifarm.utils.retry import retry_read
from . import mappers
from .contract_repository import ContractRepository
from .errors import Conflict, ContractError, InvalidState, NotFound, ValidationError
from .settlement import ContractSummary, summarize_contract, settle

logger = logging.getLogger(__name__)

# Column limits: Numeric(14, 2) for money, Numeric(18, 4) for ROI
MAX_AMOUNT = Decimal("1e12")
MAX_ROI = Decimal("1e14")


def compute_end_date(start_date: date, duration_months: int) -> date:
    """Calendar-aware: Jan 31 + 1 month is the last day of February."""
    return start_date + relativedelta(months=duration_months)


def format_contract_number(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}-{year}-{sequence:03d}"


def next_contract_number(last_number: Optional[str], prefix: str, year: int) -> str:
    sequence = 1
    if last_number:
        try:
            sequence = int(last_number.rsplit("-", 1)[1]) + 1
        except (IndexError, ValueError):
            logger.warning(f"Unparsable contract number {last_number!r}, restarting sequence")
    return format_contract_number(prefix, year, sequence)


def _write_operation(method):
    """Roll back the session when a write is rejected half-way."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ContractError:
            self.repo.rollback()
            raise

    return wrapper


def _positive(value, field_name: str) -> Decimal:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    amount = mappers.to_decimal(value)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


class ContractService:
    def __init__(self, repo: ContractRepository, today=date.today):
        self.repo = repo
        self._today = today

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _require_contract(self, contract_id: int, for_update: bool = False) -> InvestorContract:
        contract = self.repo.get_contract(contract_id, for_update=for_update)
        if contract is None:
            raise NotFound(f"Contract {contract_id} not found")
        return contract

    def _require_active(self, contract_id: int, action: str) -> InvestorContract:
        contract = self._require_contract(contract_id, for_update=True)
        if contract.status != ContractStatus.ACTIVE.value:
            logger.warning(f"Rejected {action} on contract {contract_id}: status {contract.status}")
            raise InvalidState(f"Cannot {action}: contract is {contract.status}")
        return contract

    @retry_read()
    def get_contract(self, contract_id: int) -> InvestorContract:
        return self._require_contract(contract_id)

    @retry_read()
    def list_contracts(
        self,
        investor_id: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[InvestorContract]:
        return self.repo.list_contracts(investor_id=investor_id, status=status, skip=skip, limit=limit)

    @retry_read()
    def list_contract_sheep(self, contract_id: int) -> List[ContractSheep]:
        self._require_contract(contract_id)
        return self.repo.list_contract_sheep(contract_id)

    @retry_read()
    def list_contract_expenses(self, contract_id: int) -> List[ContractExpense]:
        self._require_contract(contract_id)
        return self.repo.list_contract_expenses(contract_id)

    # ------------------------------------------------------------------
    # Summary & settlement
    # ------------------------------------------------------------------

    @retry_read()
    def get_contract_summary(self, contract_id: int) -> ContractSummary:
        # Ledgers first, contract row last: a settlement committed before the
        # contract read always wins over live figures.
        sheep_rows = self.repo.list_contract_sheep(contract_id)
        expense_rows = self.repo.list_contract_expenses(contract_id)
        contract = self._require_contract(contract_id)

        return summarize_contract(
            mappers.contract_terms_from_row(contract),
            [mappers.allocation_from_row(row) for row in sheep_rows],
            [mappers.expense_from_row(row) for row in expense_rows],
        )

    @_write_operation
    def complete_contract(
        self,
        contract_id: int,
        total_revenue,
        total_expenses,
        notes: Optional[str] = None,
    ) -> InvestorContract:
        revenue = mappers.to_decimal(total_revenue)
        expenses = mappers.to_decimal(total_expenses)
        if revenue is None or revenue < 0:
            raise ValidationError("total_revenue must be zero or positive")
        if expenses is None or expenses < 0:
            raise ValidationError("total_expenses must be zero or positive")
        if revenue >= MAX_AMOUNT or expenses >= MAX_AMOUNT:
            raise ValidationError("Settlement amounts are out of range")

        contract = self._require_contract(contract_id)
        if contract.status != ContractStatus.ACTIVE.value:
            raise InvalidState(f"Contract {contract.contract_number} is already {contract.status}")

        figures = settle(mappers.contract_terms_from_row(contract), revenue, expenses)
        if abs(figures.actual_roi) >= MAX_ROI or abs(figures.net_profit) >= MAX_AMOUNT:
            raise ValidationError("Settlement figures are out of range for this contract")
        updated = self.repo.update_contract_settlement(
            contract_id,
            {
                "total_revenue": figures.total_revenue,
                "total_expenses": figures.total_expenses,
                "net_profit": figures.net_profit,
                "investor_profit": figures.investor_profit,
                "actual_roi": figures.actual_roi,
                "settlement_date": self._today(),
                "settlement_notes": notes,
            },
        )
        if not updated:
            # Lost the race against another settlement or a cancellation
            logger.warning(f"Settlement of contract {contract_id} rejected: no longer Active")
            raise InvalidState(f"Contract {contract_id} is no longer Active")

        logger.info(
            f"Contract {contract_id} settled: revenue={figures.total_revenue} "
            f"expenses={figures.total_expenses} investor_profit={figures.investor_profit}"
        )
        return self._require_contract(contract_id)

    # ------------------------------------------------------------------
    # Contract lifecycle
    # ------------------------------------------------------------------

    @_write_operation
    def create_contract(
        self,
        investor_id: str,
        investment_amount,
        profit_sharing_percentage,
        duration_months: int,
        start_date: Optional[date] = None,
    ) -> InvestorContract:
        amount = _positive(investment_amount, "investment_amount")
        percentage = mappers.to_decimal(profit_sharing_percentage)
        if percentage is None or not (0 <= percentage <= 100):
            raise ValidationError("profit_sharing_percentage must be between 0 and 100")
        if duration_months is None or int(duration_months) < 1:
            raise ValidationError("duration_months must be at least 1")

        investor = self.repo.get_profile(investor_id)
        if investor is None:
            raise NotFound(f"Investor {investor_id} not found")
        if investor.role != Role.INVESTOR.value:
            raise ValidationError(f"Profile {investor.email} is not an investor")

        start = start_date or self._today()
        prefix = f"{settings.CONTRACT_NUMBER_PREFIX}-{start.year}-"
        number = next_contract_number(
            self.repo.last_contract_number(prefix), settings.CONTRACT_NUMBER_PREFIX, start.year
        )

        contract = self.repo.insert_contract(
            InvestorContract(
                contract_number=number,
                investor_id=investor_id,
                investment_amount=amount,
                profit_sharing_percentage=percentage,
                duration_months=int(duration_months),
                start_date=start,
                end_date=compute_end_date(start, int(duration_months)),
                status=ContractStatus.ACTIVE.value,
            )
        )
        logger.info(f"Created contract {contract.contract_number} for investor {investor_id}")
        return contract

    @_write_operation
    def cancel_contract(self, contract_id: int) -> InvestorContract:
        contract = self._require_contract(contract_id)
        updated = self.repo.update_contract_status(
            contract_id, ContractStatus.ACTIVE.value, ContractStatus.CANCELLED.value
        )
        if not updated:
            raise InvalidState(f"Contract {contract.contract_number} is {contract.status}, only Active contracts can be cancelled")
        logger.info(f"Contract {contract_id} cancelled")
        return self._require_contract(contract_id)

    # ------------------------------------------------------------------
    # Allocations
    # ------------------------------------------------------------------

    @_write_operation
    def allocate_sheep(self, contract_id: int, sheep_id: int, purchase_price) -> ContractSheep:
        price = _positive(purchase_price, "purchase_price")
        self._require_active(contract_id, "allocate sheep")

        sheep = self.repo.get_sheep(sheep_id)
        if sheep is None:
            raise NotFound(f"Sheep {sheep_id} not found")
        if sheep.status != SheepStatus.HEALTHY.value:
            raise ValidationError(f"Sheep {sheep.tag_id} is {sheep.status}, only Healthy sheep can be allocated")

        existing = self.repo.find_active_allocation(sheep_id)
        if existing is not None:
            raise Conflict(
                f"Sheep {sheep.tag_id} is already allocated to contract {existing.contract_id}"
            )

        # The partial unique index still guards concurrent callers
        allocation = self.repo.insert_contract_sheep(contract_id, sheep_id, price, self._today())
        logger.info(f"Allocated sheep {sheep.tag_id} to contract {contract_id} at {price}")
        return allocation

    @_write_operation
    def deallocate_sheep(self, contract_id: int, sheep_id: int) -> None:
        self._require_active(contract_id, "remove sheep")
        # Sold and Deceased rows carry realized results and stay
        allocation = self._require_active_allocation(contract_id, sheep_id)
        if not self.repo.delete_contract_sheep(allocation.id):
            raise InvalidState(f"Sheep {sheep_id} is no longer Active in contract {contract_id}")
        logger.info(f"Removed sheep {sheep_id} from contract {contract_id}")

    def _require_active_allocation(self, contract_id: int, sheep_id: int) -> ContractSheep:
        allocation = self.repo.get_allocation(contract_id, sheep_id)
        if allocation is None:
            raise NotFound(f"Sheep {sheep_id} is not allocated to contract {contract_id}")
        if allocation.status != AllocationStatus.ACTIVE.value:
            raise InvalidState(f"Sheep {sheep_id} is already {allocation.status}")
        return allocation

    @_write_operation
    def mark_sheep_sold(
        self,
        contract_id: int,
        sheep_id: int,
        sale_price,
        sale_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> ContractSheep:
        price = _positive(sale_price, "sale_price")
        contract = self._require_active(contract_id, "record a sale")
        sold_on = sale_date or self._today()
        if sold_on < contract.start_date:
            raise ValidationError("sale_date cannot be before the contract start date")

        allocation = self._require_active_allocation(contract_id, sheep_id)
        allocation = self.repo.update_allocation_disposition(
            allocation,
            status=AllocationStatus.SOLD.value,
            sheep_status=SheepStatus.SOLD.value,
            sale_price=price,
            sale_date=sold_on,
            notes=notes,
        )
        logger.info(f"Sheep {sheep_id} of contract {contract_id} sold for {price}")
        return allocation

    @_write_operation
    def mark_sheep_deceased(self, contract_id: int, sheep_id: int, notes: Optional[str] = None) -> ContractSheep:
        self._require_active(contract_id, "record a death")
        allocation = self._require_active_allocation(contract_id, sheep_id)
        allocation = self.repo.update_allocation_disposition(
            allocation,
            status=AllocationStatus.DECEASED.value,
            sheep_status=SheepStatus.DECEASED.value,
            notes=notes,
        )
        logger.info(f"Sheep {sheep_id} of contract {contract_id} recorded as deceased")
        return allocation

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    @_write_operation
    def add_expense(
        self,
        contract_id: int,
        category,
        description: str,
        amount,
        expense_date: Optional[date] = None,
        sheep_id: Optional[int] = None,
        receipt_url: Optional[str] = None,
    ) -> ContractExpense:
        value = _positive(amount, "amount")
        category_value = getattr(category, "value", category)
        if category_value not in {c.value for c in ExpenseCategory}:
            raise ValidationError(f"Unknown expense category {category_value!r}")
        if not description or not description.strip():
            raise ValidationError("description is required")

        contract = self._require_active(contract_id, "add an expense")
        spent_on = expense_date or self._today()
        if spent_on < contract.start_date:
            raise ValidationError(
                f"expense_date {spent_on.isoformat()} is before the contract start date "
                f"{contract.start_date.isoformat()}"
            )
        if sheep_id is not None and self.repo.get_sheep(sheep_id) is None:
            raise NotFound(f"Sheep {sheep_id} not found")

        expense = self.repo.insert_expense(
            ContractExpense(
                contract_id=contract_id,
                category=category_value,
                description=description.strip(),
                amount=value,
                expense_date=spent_on,
                sheep_id=sheep_id,
                receipt_url=receipt_url,
            )
        )
        logger.info(f"Expense {expense.id} ({category_value} {value}) added to contract {contract_id}")
        return expense

    @_write_operation
    def delete_expense(self, expense_id: int) -> None:
        expense = self.repo.get_expense(expense_id)
        if expense is None:
            raise NotFound(f"Expense {expense_id} not found")
        contract_id = expense.contract_id
        self._require_active(contract_id, "delete an expense")
        self.repo.delete_expense(expense_id)
        logger.info(f"Expense {expense_id} deleted from contract {contract_id}")
