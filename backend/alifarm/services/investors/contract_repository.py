"""
Storage collaborator for investor contracts.

The only place that talks SQL for the contract ledger. Every call maps
connection failures to `TransientStorageError`; the allocation insert maps
the partial unique index violation to `Conflict`.
"""
from __future__ import annotations

import functools
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, joinedload

from alifarm.models.accounts.profile import Profile
from alifarm.models.investors import (
    AllocationStatus,
    ContractExpense,
    ContractSheep,
    ContractStatus,
    FinancialReport,
    InvestorContract,
)
from alifarm.models.livestock.sheep import Sheep
from .errors import Conflict, TransientStorageError

logger = logging.getLogger(__name__)


def _storage_call(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OperationalError as exc:
            self.db.rollback()
            error_msg = str(exc.orig) if hasattr(exc, "orig") else str(exc)
            logger.error(f"Database operational error in {method.__name__}: {error_msg}")
            raise TransientStorageError("Database temporarily unavailable") from exc

    return wrapper


class ContractRepository:
    """SQLAlchemy implementation of the contract store."""

    def __init__(self, db: Session):
        self.db = db

    def rollback(self) -> None:
        self.db.rollback()

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    @_storage_call
    def get_contract(self, contract_id: int, for_update: bool = False) -> Optional[InvestorContract]:
        query = self.db.query(InvestorContract).filter(InvestorContract.id == contract_id)
        if for_update:
            # Serializes ledger writes against settlement on PostgreSQL
            query = query.with_for_update()
        else:
            query = query.options(joinedload(InvestorContract.investor))
        return query.first()

    @_storage_call
    def list_contracts(
        self,
        investor_id: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[InvestorContract]:
        query = self.db.query(InvestorContract).options(joinedload(InvestorContract.investor))
        if investor_id:
            query = query.filter(InvestorContract.investor_id == investor_id)
        if status:
            query = query.filter(InvestorContract.status == status)
        return (
            query.order_by(InvestorContract.created_at.desc(), InvestorContract.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    @_storage_call
    def last_contract_number(self, prefix: str) -> Optional[str]:
        """Highest number under `prefix`, compared on the numeric suffix.

        A string ORDER BY would rank "-999" above "-1000".
        """
        rows = (
            self.db.query(InvestorContract.contract_number)
            .filter(InvestorContract.contract_number.like(f"{prefix}%"))
            .all()
        )
        numbers = [row[0] for row in rows if row[0][len(prefix):].isdigit()]
        if not numbers:
            return None
        return max(numbers, key=lambda number: int(number[len(prefix):]))

    @_storage_call
    def insert_contract(self, contract: InvestorContract) -> InvestorContract:
        self.db.add(contract)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict(f"Contract number {contract.contract_number} already exists, retry") from exc
        self.db.refresh(contract)
        return contract

    def _release_active_allocations(self, contract_id: int) -> int:
        """Drop the contract's Active allocations; the caller commits."""
        released = (
            self.db.query(ContractSheep)
            .filter(
                ContractSheep.contract_id == contract_id,
                ContractSheep.status == AllocationStatus.ACTIVE.value,
            )
            .delete(synchronize_session=False)
        )
        if released:
            logger.info(f"Released {released} active sheep from contract {contract_id}")
        return released

    @_storage_call
    def update_contract_status(self, contract_id: int, from_status: str, to_status: str) -> int:
        """Conditional status transition; returns the number of rows changed (0 or 1).

        Leaving Active frees the animals still allocated, in the same commit.
        """
        updated = (
            self.db.query(InvestorContract)
            .filter(InvestorContract.id == contract_id, InvestorContract.status == from_status)
            .update({InvestorContract.status: to_status}, synchronize_session=False)
        )
        if updated and from_status == ContractStatus.ACTIVE.value:
            self._release_active_allocations(contract_id)
        self.db.commit()
        return updated

    @_storage_call
    def update_contract_settlement(self, contract_id: int, fields: Dict) -> int:
        """Single conditional UPDATE guarded by status = Active.

        Two concurrent settlements cannot both match the WHERE clause, so at
        most one of them sees a row count of 1.
        """
        values = {getattr(InvestorContract, key): value for key, value in fields.items()}
        values[InvestorContract.status] = ContractStatus.COMPLETED.value
        updated = (
            self.db.query(InvestorContract)
            .filter(
                InvestorContract.id == contract_id,
                InvestorContract.status == ContractStatus.ACTIVE.value,
            )
            .update(values, synchronize_session=False)
        )
        if updated:
            self._release_active_allocations(contract_id)
        self.db.commit()
        return updated

    # ------------------------------------------------------------------
    # Profiles & sheep (read-only here)
    # ------------------------------------------------------------------

    @_storage_call
    def get_profile(self, profile_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.id == profile_id).first()

    @_storage_call
    def get_sheep(self, sheep_id: int) -> Optional[Sheep]:
        return self.db.query(Sheep).filter(Sheep.id == sheep_id).first()

    # ------------------------------------------------------------------
    # Contract sheep
    # ------------------------------------------------------------------

    @_storage_call
    def list_contract_sheep(self, contract_id: int) -> List[ContractSheep]:
        return (
            self.db.query(ContractSheep)
            .options(joinedload(ContractSheep.sheep))
            .filter(ContractSheep.contract_id == contract_id)
            .order_by(ContractSheep.allocation_date.desc(), ContractSheep.id.desc())
            .all()
        )

    @_storage_call
    def find_active_allocation(self, sheep_id: int) -> Optional[ContractSheep]:
        return (
            self.db.query(ContractSheep)
            .filter(
                ContractSheep.sheep_id == sheep_id,
                ContractSheep.status == AllocationStatus.ACTIVE.value,
            )
            .first()
        )

    @_storage_call
    def get_allocation(self, contract_id: int, sheep_id: int) -> Optional[ContractSheep]:
        return (
            self.db.query(ContractSheep)
            .options(joinedload(ContractSheep.sheep))
            .filter(ContractSheep.contract_id == contract_id, ContractSheep.sheep_id == sheep_id)
            .order_by(ContractSheep.id.desc())
            .first()
        )

    @_storage_call
    def insert_contract_sheep(
        self,
        contract_id: int,
        sheep_id: int,
        purchase_price,
        allocation_date: date,
    ) -> ContractSheep:
        allocation = ContractSheep(
            contract_id=contract_id,
            sheep_id=sheep_id,
            purchase_price=purchase_price,
            allocation_date=allocation_date,
            status=AllocationStatus.ACTIVE.value,
        )
        self.db.add(allocation)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict(f"Sheep {sheep_id} is already allocated to an active contract") from exc
        self.db.refresh(allocation)
        return allocation

    @_storage_call
    def delete_contract_sheep(self, allocation_id: int) -> int:
        deleted = (
            self.db.query(ContractSheep)
            .filter(
                ContractSheep.id == allocation_id,
                ContractSheep.status == AllocationStatus.ACTIVE.value,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    @_storage_call
    def update_allocation_disposition(
        self,
        allocation: ContractSheep,
        status: str,
        sheep_status: str,
        sale_price=None,
        sale_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> ContractSheep:
        allocation.status = status
        allocation.sale_price = sale_price
        allocation.sale_date = sale_date
        if notes is not None:
            allocation.notes = notes
        if allocation.sheep is not None:
            allocation.sheep.status = sheep_status
        self.db.commit()
        self.db.refresh(allocation)
        return allocation

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    @_storage_call
    def list_contract_expenses(self, contract_id: int) -> List[ContractExpense]:
        return (
            self.db.query(ContractExpense)
            .options(joinedload(ContractExpense.sheep))
            .filter(ContractExpense.contract_id == contract_id)
            .order_by(ContractExpense.expense_date.desc(), ContractExpense.id.desc())
            .all()
        )

    @_storage_call
    def get_expense(self, expense_id: int) -> Optional[ContractExpense]:
        return self.db.query(ContractExpense).filter(ContractExpense.id == expense_id).first()

    @_storage_call
    def insert_expense(self, expense: ContractExpense) -> ContractExpense:
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return expense

    @_storage_call
    def delete_expense(self, expense_id: int) -> int:
        deleted = (
            self.db.query(ContractExpense)
            .filter(ContractExpense.id == expense_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    # ------------------------------------------------------------------
    # Financial reports
    # ------------------------------------------------------------------

    @_storage_call
    def list_reports(self, contract_id: int) -> List[FinancialReport]:
        return (
            self.db.query(FinancialReport)
            .filter(FinancialReport.contract_id == contract_id)
            .order_by(FinancialReport.report_period.desc())
            .all()
        )

    @_storage_call
    def get_report(self, report_id: int) -> Optional[FinancialReport]:
        return self.db.query(FinancialReport).filter(FinancialReport.id == report_id).first()

    @_storage_call
    def insert_report(self, report: FinancialReport) -> FinancialReport:
        self.db.add(report)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict(f"A report for period {report.report_period} already exists") from exc
        self.db.refresh(report)
        return report

    @_storage_call
    def publish_report(self, report_id: int, from_status: str, to_status: str, published_at) -> int:
        updated = (
            self.db.query(FinancialReport)
            .filter(FinancialReport.id == report_id, FinancialReport.status == from_status)
            .update(
                {FinancialReport.status: to_status, FinancialReport.published_at: published_at},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated
