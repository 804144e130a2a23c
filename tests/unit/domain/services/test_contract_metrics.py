"""
Unit tests for ContractMetricsService.
"""

from datetime import date, datetime, timedelta
from app.domain.models.contract import Contract, Milestone, MilestoneStatus, Timesheet
from app.domain.models.payment import Payment, PaymentStatus
from app.domain.services.contract_metrics import ContractMetricsService


class TestContractMetricsService:

    def setup_method(self):
        self.service = ContractMetricsService()
        self.contract = Contract(id=1, company_id=1, va_profile_id=2, job_posting_id=3, amount=500.0)

    def milestone(self, status):
        return Milestone(contract_id=1, title="M", amount=100, due_date=datetime(2026, 2, 1), status=status)

    def test_empty_contract(self):
        metrics = self.service.calculate(self.contract, [], [], [])
        assert metrics["total_milestones"] == 0
        assert metrics["milestone_progress"] == 0
        assert metrics["amount_remaining"] == 500.0

    def test_progress_and_payments(self):
        milestones = [
            self.milestone(MilestoneStatus.APPROVED),
            self.milestone(MilestoneStatus.COMPLETED),
            self.milestone(MilestoneStatus.PENDING),
            self.milestone(MilestoneStatus.IN_PROGRESS),
        ]
        start = datetime(2026, 1, 5, 9)
        approved = Timesheet(
            contract_id=1, va_profile_id=2, date=date(2026, 1, 5),
            start_time=start, end_time=start + timedelta(hours=2), status="approved",
        )
        pending = Timesheet(
            contract_id=1, va_profile_id=2, date=date(2026, 1, 6),
            start_time=start, end_time=start + timedelta(hours=4),
        )
        paid = Payment(payer_id="c", amount=15000, stripe_payment_intent_id="pi_1",
                       status=PaymentStatus.SUCCEEDED)
        unpaid = Payment(payer_id="c", amount=5000, stripe_payment_intent_id="pi_2")

        metrics = self.service.calculate(self.contract, milestones, [approved, pending], [paid, unpaid])

        assert metrics["completed_milestones"] == 2
        assert metrics["approved_milestones"] == 1
        assert metrics["milestone_progress"] == 50
        assert metrics["total_hours"] == 2.0
        assert metrics["total_paid"] == 150.0
        assert metrics["amount_remaining"] == 350.0
