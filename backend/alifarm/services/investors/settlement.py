"""
Contract settlement calculator

Pure arithmetic over values already mapped from storage rows (see
`mappers`), so it can be exercised without a database.

    net_result        = current value of active sheep + revenue - expenses
    gain              = net_result - investment_amount
    roi (%)           = gain / investment_amount * 100   (0 when the principal is 0)
    investor profit   = gain * profit_sharing_percentage / 100

Losses are shared with the same linear formula: a negative gain yields a
negative investor profit, never clamped to zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from alifarm.models.investors.contract import ContractStatus
from alifarm.models.investors.contract_sheep import AllocationStatus

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ContractTerms:
    contract_id: int
    investment_amount: Decimal
    profit_sharing_percentage: Decimal
    start_date: date
    status: str
    # Frozen at settlement
    total_revenue: Optional[Decimal] = None
    total_expenses: Optional[Decimal] = None
    investor_profit: Optional[Decimal] = None
    actual_roi: Optional[Decimal] = None

    @property
    def owner_sharing_percentage(self) -> Decimal:
        return HUNDRED - self.profit_sharing_percentage

    @property
    def is_completed(self) -> bool:
        return self.status == ContractStatus.COMPLETED.value


@dataclass(frozen=True)
class AllocationEntry:
    sheep_id: int
    purchase_price: Decimal
    status: str
    market_value: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    born_in_farm: bool = False

    @property
    def current_value(self) -> Decimal:
        """Value still held in the contract; sold or dead animals hold none."""
        if self.status != AllocationStatus.ACTIVE.value:
            return ZERO
        if self.market_value is not None:
            return self.market_value
        return self.purchase_price


@dataclass(frozen=True)
class ExpenseEntry:
    amount: Decimal
    category: str
    expense_date: date


@dataclass(frozen=True)
class SettlementFigures:
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    investor_profit: Decimal
    actual_roi: Decimal


@dataclass(frozen=True)
class ContractSummary:
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


def compute_roi(gain: Decimal, investment_amount: Decimal) -> Decimal:
    if not investment_amount:
        return ZERO
    return gain / investment_amount * HUNDRED


def compute_share(gain: Decimal, percentage: Decimal) -> Decimal:
    return gain * percentage / HUNDRED


def settle(terms: ContractTerms, total_revenue: Decimal, total_expenses: Decimal) -> SettlementFigures:
    """Figures frozen on the contract when it is completed.

    At settlement the herd is expected to be realized into `total_revenue`,
    so no unrealized current value enters the result.
    """
    net_profit = total_revenue - total_expenses - terms.investment_amount
    return SettlementFigures(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=net_profit,
        investor_profit=compute_share(net_profit, terms.profit_sharing_percentage),
        actual_roi=compute_roi(net_profit, terms.investment_amount),
    )


def summarize_contract(
    terms: ContractTerms,
    allocations: Iterable[AllocationEntry],
    expenses: Iterable[ExpenseEntry],
) -> ContractSummary:
    allocations = list(allocations)
    expenses = list(expenses)

    active = [a for a in allocations if a.status == AllocationStatus.ACTIVE.value]
    sold = [a for a in allocations if a.status == AllocationStatus.SOLD.value]
    deceased = [a for a in allocations if a.status == AllocationStatus.DECEASED.value]
    born = [a for a in allocations if a.born_in_farm]

    total_purchase_value = sum((a.purchase_price for a in allocations), ZERO)

    if terms.is_completed:
        # Only frozen figures: market values keep moving after settlement
        total_revenue = terms.total_revenue or ZERO
        total_expenses = terms.total_expenses or ZERO
        total_current_value = ZERO
        net_result = total_revenue - total_expenses
        gain = net_result - terms.investment_amount
        investor_profit = terms.investor_profit if terms.investor_profit is not None else compute_share(
            gain, terms.profit_sharing_percentage
        )
        roi = terms.actual_roi if terms.actual_roi is not None else compute_roi(gain, terms.investment_amount)
    else:
        total_current_value = sum((a.current_value for a in active), ZERO)
        total_revenue = sum((a.sale_price or ZERO for a in sold), ZERO)
        total_expenses = sum((e.amount for e in expenses), ZERO)
        net_result = total_current_value + total_revenue - total_expenses
        gain = net_result - terms.investment_amount
        investor_profit = compute_share(gain, terms.profit_sharing_percentage)
        roi = compute_roi(gain, terms.investment_amount)

    return ContractSummary(
        contract_id=terms.contract_id,
        status=terms.status,
        settled=terms.is_completed,
        total_sheep=len(active),
        sheep_born=len(born),
        sheep_sold=len(sold),
        sheep_deceased=len(deceased),
        total_purchase_value=total_purchase_value,
        total_current_value=total_current_value,
        total_expenses=total_expenses,
        total_revenue=total_revenue,
        net_result=net_result,
        estimated_profit=gain,
        estimated_investor_profit=investor_profit,
        estimated_owner_profit=gain - investor_profit,
        estimated_roi=roi,
    )
