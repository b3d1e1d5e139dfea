"""
Tests for area management, storage, reports and audit logging.

All tests run against in-memory storage.
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.areas import (
    AREA_COLORS,
    AreaService,
    AreaValidationError,
    DuplicateKeywordError,
    next_area_color,
)
from finance_tracker.audit import AuditLogger, create_correlation_id
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.models import (
    Area,
    AuditEventBuilder,
    AuditEventType,
    Expense,
    FixedCost,
    Income,
)
from finance_tracker.records import FixedCostService
from finance_tracker.reports import AreaReportService
from finance_tracker.services.storage import (
    DuplicateError,
    InMemoryAreaStorage,
    InMemoryAuditStorage,
    InMemoryRecordStorage,
    NotFoundError,
    StorageError,
)


@pytest.fixture
def area_storage():
    return InMemoryAreaStorage()


@pytest.fixture
def record_storage():
    return InMemoryRecordStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(storage=audit_storage)


@pytest.fixture
def area_service(area_storage, audit_logger):
    return AreaService(area_storage, audit_logger)


class FailingRecordStorage(InMemoryRecordStorage):
    async def list_expenses(self, user_id, year, month=None):
        raise StorageError("backend unavailable")


class FailingAuditStorage(InMemoryAuditStorage):
    async def append_event(self, event):
        raise StorageError("audit backend unavailable")


class TestAreaService:
    """Tests for creating and editing areas."""

    @pytest.mark.asyncio
    async def test_create_area(self, area_service, audit_storage):
        area = await area_service.create_area("u1", "  Food  ")
        assert area.name == "Food"
        assert area.keywords == []
        assert area.priority == 1
        assert area.color == AREA_COLORS[0]

        events = await audit_storage.get_events_by_entity("area", area.id)
        assert [e.event_type for e in events] == [AuditEventType.AREA_CREATED]

    @pytest.mark.asyncio
    async def test_new_areas_get_higher_priority_and_next_color(self, area_service):
        first = await area_service.create_area("u1", "Food")
        second = await area_service.create_area("u1", "Drugstore")
        assert second.priority > first.priority
        assert second.color == AREA_COLORS[1]

    @pytest.mark.asyncio
    async def test_priority_counts_only_own_areas(self, area_service):
        await area_service.create_area("u1", "Food")
        other = await area_service.create_area("u2", "Food")
        assert other.priority == 1

    @pytest.mark.asyncio
    async def test_create_area_rejects_blank_name(self, area_service):
        with pytest.raises(AreaValidationError):
            await area_service.create_area("u1", "   ")

    @pytest.mark.asyncio
    async def test_add_keyword(self, area_service, area_storage):
        area = await area_service.create_area("u1", "Food")
        await area_service.add_keyword(area.id, "  REWE ")
        stored = await area_storage.get_area(area.id)
        assert stored.keywords == ["REWE"]

    @pytest.mark.asyncio
    async def test_duplicate_keyword_rejected_case_insensitively(self, area_service, audit_storage):
        area = await area_service.create_area("u1", "Food")
        await area_service.add_keyword(area.id, "REWE")
        with pytest.raises(DuplicateKeywordError):
            await area_service.add_keyword(area.id, "rewe")

        events = await audit_storage.get_events_by_entity("area", area.id)
        assert events[-1].event_type == AuditEventType.KEYWORD_REJECTED

    @pytest.mark.asyncio
    async def test_blank_keyword_rejected(self, area_service):
        area = await area_service.create_area("u1", "Food")
        with pytest.raises(AreaValidationError):
            await area_service.add_keyword(area.id, "   ")

    @pytest.mark.asyncio
    async def test_accent_only_keyword_rejected(self, area_service, area_storage):
        area = await area_service.create_area("u1", "Food")
        with pytest.raises(AreaValidationError):
            await area_service.add_keyword(area.id, "\u0301")
        assert (await area_storage.get_area(area.id)).keywords == []

    @pytest.mark.asyncio
    async def test_remove_keyword(self, area_service):
        area = await area_service.create_area("u1", "Food")
        await area_service.add_keyword(area.id, "rewe")
        await area_service.add_keyword(area.id, "aldi")
        updated = await area_service.remove_keyword(area.id, "rewe")
        assert updated.keywords == ["aldi"]

    @pytest.mark.asyncio
    async def test_remove_unknown_keyword_is_noop(self, area_service):
        area = await area_service.create_area("u1", "Food")
        await area_service.add_keyword(area.id, "rewe")
        updated = await area_service.remove_keyword(area.id, "lidl")
        assert updated.keywords == ["rewe"]

    @pytest.mark.asyncio
    async def test_unknown_area_raises_not_found(self, area_service):
        with pytest.raises(NotFoundError):
            await area_service.add_keyword("missing", "rewe")
        with pytest.raises(NotFoundError):
            await area_service.delete_area("missing")

    @pytest.mark.asyncio
    async def test_delete_area(self, area_service, area_storage):
        area = await area_service.create_area("u1", "Food")
        assert await area_service.delete_area(area.id) is True
        assert await area_storage.get_area(area.id) is None

    def test_next_area_color_wraps(self):
        existing = [Area(name=f"A{i}", color=c, user_id="u1") for i, c in enumerate(AREA_COLORS)]
        assert next_area_color(existing) == AREA_COLORS[0]


class TestInMemoryStorage:
    """Tests for user scoping and ordering in the in-memory backend."""

    @pytest.mark.asyncio
    async def test_areas_listed_by_priority_stable(self, area_storage):
        await area_storage.save_area(Area(id="low", name="Low", priority=1, user_id="u1"))
        await area_storage.save_area(Area(id="tie1", name="T1", priority=5, user_id="u1"))
        await area_storage.save_area(Area(id="tie2", name="T2", priority=5, user_id="u1"))
        await area_storage.save_area(Area(id="other", name="O", priority=9, user_id="u2"))

        areas = await area_storage.list_areas("u1")
        assert [a.id for a in areas] == ["tie1", "tie2", "low"]

    @pytest.mark.asyncio
    async def test_returned_areas_are_copies(self, area_storage):
        await area_storage.save_area(Area(id="a", name="A", keywords=["x"], user_id="u1"))
        area = await area_storage.get_area("a")
        area.keywords.append("y")
        assert (await area_storage.get_area("a")).keywords == ["x"]

    @pytest.mark.asyncio
    async def test_expenses_by_month_and_year(self, record_storage):
        for day in [date(2025, 3, 5), date(2025, 4, 1), date(2024, 3, 5)]:
            await record_storage.add_expense(Expense(amount=Decimal("1"), date=day, user_id="u1"))
        await record_storage.add_expense(Expense(amount=Decimal("1"), date=date(2025, 3, 6), user_id="u2"))

        assert len(await record_storage.list_expenses("u1", 2025, 3)) == 1
        assert len(await record_storage.list_expenses("u1", 2025)) == 2

    @pytest.mark.asyncio
    async def test_duplicate_expense_rejected(self, record_storage):
        expense = Expense(amount=Decimal("1"), date=date(2025, 3, 5), user_id="u1")
        await record_storage.add_expense(expense)
        with pytest.raises(DuplicateError):
            await record_storage.add_expense(expense)

    @pytest.mark.asyncio
    async def test_update_missing_fixed_cost(self, record_storage):
        cost = FixedCost(name="Rent", amount=Decimal("900"), year_month=202503, user_id="u1")
        with pytest.raises(NotFoundError):
            await record_storage.update_fixed_cost(cost)


class TestFixedCostService:
    """Tests for marking fixed costs paid."""

    @pytest.mark.asyncio
    async def test_toggle_persists_and_audits(self, record_storage, audit_logger, audit_storage):
        cost = FixedCost(name="Rent", amount=Decimal("900"), year_month=202503, user_id="u1")
        await record_storage.add_fixed_cost(cost)
        service = FixedCostService(record_storage, audit_logger)

        updated = await service.toggle_paid(cost)

        stored = await record_storage.list_fixed_costs("u1", 2025, 3)
        assert updated.is_paid()
        assert stored[0].paid_months == [202503]

        events = await audit_storage.get_events_by_entity("fixed_cost", cost.id)
        assert [e.event_type for e in events] == [AuditEventType.FIXED_COST_PAYMENT_TOGGLED]
        assert events[0].details == {"year_month": 202503, "paid": True}

    @pytest.mark.asyncio
    async def test_toggle_twice_unpays(self, record_storage):
        cost = FixedCost(name="Rent", amount=Decimal("900"), year_month=202503, user_id="u1")
        await record_storage.add_fixed_cost(cost)
        service = FixedCostService(record_storage)

        paid = await service.toggle_paid(cost)
        unpaid = await service.toggle_paid(paid)

        assert unpaid.paid_months == []
        assert (await record_storage.list_fixed_costs("u1", 2025, 3))[0].paid_months == []

    @pytest.mark.asyncio
    async def test_toggle_unknown_cost_raises(self, record_storage):
        cost = FixedCost(name="Rent", amount=Decimal("900"), year_month=202503, user_id="u1")
        with pytest.raises(NotFoundError):
            await FixedCostService(record_storage).toggle_paid(cost)


class TestAreaReportService:
    """Tests for reports built from storage snapshots."""

    @pytest.fixture
    async def populated(self, area_storage, record_storage):
        await area_storage.save_area(Area(id="A1", name="Food", keywords=["rewe"], priority=1, user_id="u1"))
        await area_storage.save_area(Area(id="A2", name="Drugstore", keywords=["rewe", "dm"], priority=2, user_id="u1"))
        await area_storage.save_area(Area(id="X", name="Foreign", keywords=["kino"], priority=9, user_id="u2"))

        await record_storage.add_expense(Expense(description="REWE City Berlin", amount=Decimal("50"), date=date(2025, 3, 3), user_id="u1"))
        await record_storage.add_expense(Expense(description="Kino", amount=Decimal("12"), date=date(2025, 3, 4), user_id="u1"))
        await record_storage.add_expense(Expense(description="dm", amount=Decimal("5"), date=date(2025, 4, 4), user_id="u1"))
        await record_storage.add_fixed_cost(FixedCost(name="REWE Abo", amount=Decimal("20"), year_month=202503, user_id="u1"))
        await record_storage.add_income(Income(name="Salary", amount=Decimal("1000"), year_month=202503, user_id="u1"))

    @pytest.mark.asyncio
    async def test_monthly_report(self, populated, area_storage, record_storage, audit_logger, audit_storage):
        service = AreaReportService(area_storage, record_storage, audit_logger)
        stats = await service.monthly_report("u1", 202503)

        assert [a.area_id for a in stats.areas] == ["A2", "A1"]
        assert stats.areas[0].total_amount == Decimal("70")
        assert stats.areas[0].expense_count == 2
        assert stats.areas[1].expense_count == 0
        # another user's "kino" area never applies
        assert stats.unassigned.total_amount == Decimal("12")

        events = await audit_storage.get_recent_events()
        assert events[0].event_type == AuditEventType.MONTHLY_REPORT_GENERATED

    @pytest.mark.asyncio
    async def test_yearly_report(self, populated, area_storage, record_storage):
        service = AreaReportService(area_storage, record_storage)
        stats = await service.yearly_report("u1", 2025)

        drugstore = stats.areas[0]
        assert drugstore.area_id == "A2"
        assert drugstore.monthly_totals[2].amount == Decimal("70")
        assert drugstore.monthly_totals[3].amount == Decimal("5")
        assert drugstore.year_total == Decimal("75")
        assert stats.unassigned_total == Decimal("12")

    @pytest.mark.asyncio
    async def test_report_reflects_fresh_snapshot(self, populated, area_storage, record_storage):
        service = AreaReportService(area_storage, record_storage)
        before = await service.monthly_report("u1", 202503)

        await area_storage.delete_area("A2")
        after = await service.monthly_report("u1", 202503)

        assert len(before.areas) == 2
        assert [a.area_id for a in after.areas] == ["A1"]
        assert after.areas[0].total_amount == Decimal("70")

    @pytest.mark.asyncio
    async def test_month_balance(self, populated, area_storage, record_storage):
        service = AreaReportService(area_storage, record_storage)
        balance = await service.month_balance("u1", 202503, today=date(2025, 4, 1))
        assert balance.total_income == Decimal("1000")
        assert balance.total_fixed_costs == Decimal("20")
        assert balance.total_expenses == Decimal("62")
        assert balance.balance == Decimal("918")

    @pytest.mark.asyncio
    async def test_storage_failure_is_audited_and_raised(self, area_storage, audit_logger, audit_storage):
        service = AreaReportService(area_storage, FailingRecordStorage(), audit_logger)
        correlation_id = create_correlation_id()

        with pytest.raises(StorageError):
            await service.monthly_report("u1", 202503, correlation_id=correlation_id)

        events = await audit_storage.get_events_by_correlation_id(correlation_id)
        assert [e.event_type for e in events] == [AuditEventType.SYSTEM_ERROR]


class TestAuditLogger:
    """Tests for the audit logger itself."""

    @pytest.mark.asyncio
    async def test_logs_without_storage(self):
        logger = AuditLogger()
        await logger.log_area_created("a1", "u1", "Food", 1)

    @pytest.mark.asyncio
    async def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(storage=FailingAuditStorage())
        event = AuditEventBuilder.area_deleted("a1", "u1", "Food")
        assert await logger.log(event) is False


class TestSettings:
    """Tests for configuration loading."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.tracker.weekly_expense_allowance == Decimal("200")
        assert settings.tracker.schedule_horizon_months == 12
        assert settings.app.currency_code == "EUR"

    def test_validate_all_settings(self):
        results = validate_all_settings()
        assert results["tracker"] is True
        assert results["app"] is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TRACKER_WEEKLY_EXPENSE_ALLOWANCE", "150")
        assert get_settings().tracker.weekly_expense_allowance == Decimal("150")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
