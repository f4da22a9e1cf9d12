"""
ContractService tests against an in-memory SQLite database.
"""
from datetime import date
from decimal import Decimal

import pytest

from alifarm.models import AllocationStatus, ContractStatus, InvestorContract, SheepStatus
from alifarm.services.investors import report_service
from alifarm.services.investors.contract_service import compute_end_date, next_contract_number
from alifarm.services.investors.errors import Conflict, InvalidState, NotFound, ValidationError


class TestContractLifecycle:

    @pytest.mark.parametrize(
        "start, months, expected",
        [
            (date(2026, 1, 31), 1, date(2026, 2, 28)),
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2026, 3, 15), 12, date(2027, 3, 15)),
            (date(2026, 8, 31), 6, date(2027, 2, 28)),
        ],
    )
    def test_end_date_month_arithmetic(self, start, months, expected):
        assert compute_end_date(start, months) == expected

    def test_next_contract_number(self):
        assert next_contract_number(None, "INV", 2026) == "INV-2026-001"
        assert next_contract_number("INV-2026-041", "INV", 2026) == "INV-2026-042"
        assert next_contract_number("garbage", "INV", 2026) == "INV-2026-001"

    def test_create_contract(self, contract, investor, today):
        assert contract.contract_number == f"INV-{today.year}-001"
        assert contract.status == ContractStatus.ACTIVE.value
        assert contract.start_date == today
        assert contract.end_date == date(2027, 3, 15)
        assert contract.owner_sharing_percentage == Decimal("30")
        assert contract.investor_name == investor.name

    def test_contract_numbers_are_sequential(self, service, contract, investor):
        second = service.create_contract(investor.id, Decimal("1000000"), Decimal("60"), 6)
        assert second.contract_number.endswith("-002")

    def test_numbering_compares_numeric_suffix(self, service, investor, db, today):
        for number in ("INV-2026-999", "INV-2026-1000"):
            db.add(InvestorContract(
                contract_number=number,
                investor_id=investor.id,
                investment_amount=Decimal("1000000"),
                profit_sharing_percentage=Decimal("70"),
                duration_months=12,
                start_date=today,
                end_date=compute_end_date(today, 12),
                status=ContractStatus.ACTIVE.value,
            ))
        db.commit()

        created = service.create_contract(investor.id, Decimal("1000000"), Decimal("70"), 12)
        assert created.contract_number == "INV-2026-1001"

    def test_create_requires_investor_role(self, service, staff):
        with pytest.raises(ValidationError):
            service.create_contract(staff.id, Decimal("1000000"), Decimal("70"), 12)

    def test_create_rejects_zero_investment(self, service, investor):
        with pytest.raises(ValidationError):
            service.create_contract(investor.id, Decimal("0"), Decimal("70"), 12)

    def test_create_unknown_investor(self, service):
        with pytest.raises(NotFound):
            service.create_contract("00000000-0000-0000-0000-000000000000", Decimal("1"), Decimal("70"), 12)

    def test_cancel_only_once(self, service, contract):
        cancelled = service.cancel_contract(contract.id)
        assert cancelled.status == ContractStatus.CANCELLED.value

        with pytest.raises(InvalidState):
            service.cancel_contract(contract.id)

    def test_get_missing_contract(self, service):
        with pytest.raises(NotFound):
            service.get_contract(9999)

    def test_list_contracts_by_investor(self, service, contract, investor, staff):
        assert [c.id for c in service.list_contracts(investor_id=investor.id)] == [contract.id]
        assert service.list_contracts(investor_id=staff.id) == []


class TestSummary:

    def test_single_sheep_gain(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))

        summary = service.get_contract_summary(contract.id)
        assert summary.total_sheep == 1
        assert summary.total_purchase_value == Decimal("4500000")
        assert summary.total_current_value == Decimal("5200000")
        assert summary.net_result == Decimal("5200000")
        assert summary.estimated_investor_profit == Decimal("490000")
        assert round(summary.estimated_roi, 2) == Decimal("15.56")

    def test_expense_reduces_result(self, service, contract, sheep, today):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.add_expense(contract.id, "Feed", "Hay", Decimal("200000"), expense_date=today)

        summary = service.get_contract_summary(contract.id)
        assert summary.total_expenses == Decimal("200000")
        assert summary.net_result == Decimal("5000000")
        assert summary.estimated_investor_profit == Decimal("350000")
        assert round(summary.estimated_roi, 2) == Decimal("11.11")

    def test_market_value_change_moves_live_summary(self, service, contract, sheep, db):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        sheep.market_value = Decimal("6000000")
        db.commit()

        summary = service.get_contract_summary(contract.id)
        assert summary.total_current_value == Decimal("6000000")
        # purchase price is recorded at allocation time
        assert summary.total_purchase_value == Decimal("4500000")

    def test_summary_is_idempotent(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        assert service.get_contract_summary(contract.id) == service.get_contract_summary(contract.id)

    def test_summary_missing_contract(self, service):
        with pytest.raises(NotFound):
            service.get_contract_summary(9999)


class TestSettlement:

    @pytest.fixture
    def small_contract(self, service, investor, today):
        return service.create_contract(investor.id, Decimal("2000000"), Decimal("50"), 12, start_date=today)

    def test_complete_freezes_figures(self, service, small_contract, sheep, db):
        service.allocate_sheep(small_contract.id, sheep.id, Decimal("2000000"))

        completed = service.complete_contract(small_contract.id, Decimal("1000000"), Decimal("300000"), notes="Eid sale")
        assert completed.status == ContractStatus.COMPLETED.value
        assert completed.net_profit == Decimal("-1300000")
        assert completed.investor_profit == Decimal("-650000")
        assert completed.actual_roi == Decimal("-65")
        assert completed.settlement_notes == "Eid sale"

        before = service.get_contract_summary(small_contract.id)
        sheep.market_value = Decimal("9900000")
        db.commit()
        after = service.get_contract_summary(small_contract.id)

        assert before == after
        assert after.settled is True
        assert after.total_current_value == Decimal("0")
        assert after.estimated_investor_profit == Decimal("-650000")
        assert after.estimated_roi == Decimal("-65")

    def test_settlement_is_single_use(self, service, small_contract):
        service.complete_contract(small_contract.id, Decimal("3000000"), Decimal("100000"))

        with pytest.raises(InvalidState):
            service.complete_contract(small_contract.id, Decimal("1"), Decimal("1"))

        contract = service.get_contract(small_contract.id)
        assert contract.total_revenue == Decimal("3000000")
        assert contract.total_expenses == Decimal("100000")
        assert contract.net_profit == Decimal("900000")

    def test_settlement_update_matches_only_once(self, service, small_contract, today):
        fields = {"total_revenue": Decimal("3000000"), "total_expenses": Decimal("0"), "settlement_date": today}

        assert service.repo.update_contract_settlement(small_contract.id, fields) == 1
        assert service.repo.update_contract_settlement(
            small_contract.id, dict(fields, total_revenue=Decimal("1"))
        ) == 0
        assert service.get_contract(small_contract.id).total_revenue == Decimal("3000000")

    def test_concurrent_settlement_loses_after_precheck(self, service, small_contract, today, monkeypatch):
        write = service.repo.update_contract_settlement

        def rival_settles_first(contract_id, fields):
            # Another request commits between our status check and our UPDATE
            write(contract_id, {
                "total_revenue": Decimal("2500000"),
                "total_expenses": Decimal("100000"),
                "net_profit": Decimal("400000"),
                "investor_profit": Decimal("200000"),
                "actual_roi": Decimal("10"),
                "settlement_date": today,
            })
            return write(contract_id, fields)

        monkeypatch.setattr(service.repo, "update_contract_settlement", rival_settles_first)

        with pytest.raises(InvalidState):
            service.complete_contract(small_contract.id, Decimal("9000000"), Decimal("0"))

        contract = service.get_contract(small_contract.id)
        assert contract.status == ContractStatus.COMPLETED.value
        assert contract.total_revenue == Decimal("2500000")
        assert contract.investor_profit == Decimal("200000")
        assert contract.actual_roi == Decimal("10")

    def test_out_of_range_settlement_rejected(self, service, investor):
        tiny = service.create_contract(investor.id, Decimal("0.01"), Decimal("70"), 12)

        with pytest.raises(ValidationError):
            service.complete_contract(tiny.id, Decimal("100000000000"), Decimal("0"))
        with pytest.raises(ValidationError):
            service.complete_contract(tiny.id, Decimal("1000000000000"), Decimal("0"))
        assert service.get_contract(tiny.id).status == ContractStatus.ACTIVE.value

    def test_cancelled_contract_cannot_be_settled(self, service, small_contract):
        service.cancel_contract(small_contract.id)
        with pytest.raises(InvalidState):
            service.complete_contract(small_contract.id, Decimal("1"), Decimal("0"))

    def test_negative_figures_rejected(self, service, small_contract):
        with pytest.raises(ValidationError):
            service.complete_contract(small_contract.id, Decimal("-1"), Decimal("0"))
        assert service.get_contract(small_contract.id).status == ContractStatus.ACTIVE.value


class TestAllocations:

    def test_sheep_cannot_be_in_two_active_contracts(self, service, contract, investor, sheep):
        other = service.create_contract(investor.id, Decimal("1000000"), Decimal("70"), 12)
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))

        with pytest.raises(Conflict):
            service.allocate_sheep(other.id, sheep.id, Decimal("4500000"))

    def test_unique_index_guards_concurrent_insert(self, service, contract, sheep, today):
        service.repo.insert_contract_sheep(contract.id, sheep.id, Decimal("1"), today)
        with pytest.raises(Conflict):
            service.repo.insert_contract_sheep(contract.id, sheep.id, Decimal("1"), today)

    def test_only_healthy_sheep(self, service, contract, make_sheep):
        sick = make_sheep(status="Sick")
        with pytest.raises(ValidationError):
            service.allocate_sheep(contract.id, sick.id, Decimal("100"))

    def test_unknown_sheep(self, service, contract):
        with pytest.raises(NotFound):
            service.allocate_sheep(contract.id, 9999, Decimal("100"))

    def test_allocation_requires_active_contract(self, service, contract, sheep):
        service.cancel_contract(contract.id)
        with pytest.raises(InvalidState):
            service.allocate_sheep(contract.id, sheep.id, Decimal("100"))

    def test_allocation_rejects_non_positive_price(self, service, contract, sheep):
        with pytest.raises(ValidationError):
            service.allocate_sheep(contract.id, sheep.id, Decimal("0"))

    def test_deallocate(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.deallocate_sheep(contract.id, sheep.id)

        assert service.list_contract_sheep(contract.id) == []
        with pytest.raises(NotFound):
            service.deallocate_sheep(contract.id, sheep.id)

    def test_deallocated_sheep_can_be_reallocated(self, service, contract, investor, sheep):
        other = service.create_contract(investor.id, Decimal("1000000"), Decimal("70"), 12)
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.deallocate_sheep(contract.id, sheep.id)

        allocation = service.allocate_sheep(other.id, sheep.id, Decimal("4600000"))
        assert allocation.contract_id == other.id

    def test_mark_sold_feeds_revenue(self, service, contract, sheep, today):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        allocation = service.mark_sheep_sold(contract.id, sheep.id, Decimal("6000000"))

        assert allocation.status == AllocationStatus.SOLD.value
        assert allocation.sale_date == today
        assert allocation.sheep.status == SheepStatus.SOLD.value

        summary = service.get_contract_summary(contract.id)
        assert summary.total_sheep == 0
        assert summary.sheep_sold == 1
        assert summary.total_current_value == Decimal("0")
        assert summary.total_revenue == Decimal("6000000")

        with pytest.raises(InvalidState):
            service.mark_sheep_sold(contract.id, sheep.id, Decimal("1"))

    def test_mark_deceased(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        allocation = service.mark_sheep_deceased(contract.id, sheep.id, notes="Bloat")

        assert allocation.status == AllocationStatus.DECEASED.value
        assert allocation.notes == "Bloat"
        summary = service.get_contract_summary(contract.id)
        assert summary.sheep_deceased == 1
        assert summary.total_current_value == Decimal("0")

    def test_sale_ends_the_active_allocation(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.mark_sheep_sold(contract.id, sheep.id, Decimal("5000000"))
        assert service.repo.find_active_allocation(sheep.id) is None

    def test_sold_sheep_cannot_be_deallocated(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.mark_sheep_sold(contract.id, sheep.id, Decimal("6000000"))

        with pytest.raises(InvalidState):
            service.deallocate_sheep(contract.id, sheep.id)

        summary = service.get_contract_summary(contract.id)
        assert summary.sheep_sold == 1
        assert summary.total_revenue == Decimal("6000000")
        assert [row.status for row in service.list_contract_sheep(contract.id)] == ["Sold"]

    def test_deceased_sheep_cannot_be_deallocated(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.mark_sheep_deceased(contract.id, sheep.id)

        with pytest.raises(InvalidState):
            service.deallocate_sheep(contract.id, sheep.id)
        assert service.get_contract_summary(contract.id).sheep_deceased == 1

    def test_cancel_releases_active_sheep(self, service, contract, investor, make_sheep):
        kept, sold = make_sheep(), make_sheep()
        service.allocate_sheep(contract.id, kept.id, Decimal("4500000"))
        service.allocate_sheep(contract.id, sold.id, Decimal("4500000"))
        service.mark_sheep_sold(contract.id, sold.id, Decimal("5000000"))

        service.cancel_contract(contract.id)

        assert [row.sheep_id for row in service.list_contract_sheep(contract.id)] == [sold.id]
        other = service.create_contract(investor.id, Decimal("1000000"), Decimal("70"), 12)
        allocation = service.allocate_sheep(other.id, kept.id, Decimal("4600000"))
        assert allocation.contract_id == other.id

    def test_settlement_releases_active_sheep(self, service, contract, investor, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        service.complete_contract(contract.id, Decimal("5000000"), Decimal("0"))

        assert service.repo.find_active_allocation(sheep.id) is None
        other = service.create_contract(investor.id, Decimal("1000000"), Decimal("70"), 12)
        allocation = service.allocate_sheep(other.id, sheep.id, Decimal("5000000"))
        assert allocation.contract_id == other.id


class TestExpenses:

    def test_expense_on_start_date_allowed(self, service, contract, today):
        expense = service.add_expense(contract.id, "Medicine", "Deworming", Decimal("50000"), expense_date=today)
        assert expense.expense_date == today
        assert expense.category == "Medicine"

    def test_expense_before_start_rejected(self, service, contract):
        with pytest.raises(ValidationError):
            service.add_expense(contract.id, "Feed", "Hay", Decimal("1000"), expense_date=date(2026, 3, 14))

    def test_expense_validation(self, service, contract):
        with pytest.raises(ValidationError):
            service.add_expense(contract.id, "Feed", "Hay", Decimal("0"))
        with pytest.raises(ValidationError):
            service.add_expense(contract.id, "Fuel", "Diesel", Decimal("10"))
        with pytest.raises(ValidationError):
            service.add_expense(contract.id, "Feed", "   ", Decimal("10"))

    def test_expense_on_completed_contract_rejected(self, service, contract):
        service.complete_contract(contract.id, Decimal("5000000"), Decimal("0"))
        with pytest.raises(InvalidState):
            service.add_expense(contract.id, "Feed", "Hay", Decimal("1000"))

    def test_delete_expense(self, service, contract):
        expense_id = service.add_expense(contract.id, "Labor", "Shepherd wage", Decimal("750000")).id
        service.delete_expense(expense_id)

        assert service.list_contract_expenses(contract.id) == []
        with pytest.raises(NotFound):
            service.delete_expense(expense_id)


class TestReports:

    def test_report_defaults_from_summary(self, service, contract, sheep):
        service.allocate_sheep(contract.id, sheep.id, Decimal("4500000"))
        report = report_service.create_report(service, contract.id, "2026-03", highlights="First month")

        assert report.status == "Draft"
        assert report.sheep_count == 1
        assert report.opening_value == Decimal("4500000")
        assert report.closing_value == Decimal("5200000")

    def test_one_report_per_period(self, service, contract):
        report_service.create_report(service, contract.id, "2026-03")
        with pytest.raises(Conflict):
            report_service.create_report(service, contract.id, "2026-03")

    def test_publish_once(self, service, contract):
        report = report_service.create_report(service, contract.id, "2026-04")
        published = report_service.publish_report(service, report.id)

        assert published.status == "Published"
        assert published.published_at is not None
        with pytest.raises(InvalidState):
            report_service.publish_report(service, report.id)

    def test_list_reports(self, service, contract):
        report_service.create_report(service, contract.id, "2026-03")
        report_service.create_report(service, contract.id, "2026-04")
        assert [r.report_period for r in report_service.list_reports(service, contract.id)] == ["2026-04", "2026-03"]
