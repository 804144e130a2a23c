"""Contract progress metrics.
Aggregates milestones, timesheets and payments of one contract.
"""

from typing import Any, Dict, Iterable

from app.domain.models.contract import (
    Contract,
    Milestone,
    MilestoneStatus,
    Timesheet,
    TimesheetStatus,
)
from app.domain.models.payment import Payment, PaymentStatus


class ContractMetricsService:
    """
    Domain service summarising the state of a contract.
    """

    def calculate(
        self,
        contract: Contract,
        milestones: Iterable[Milestone],
        timesheets: Iterable[Timesheet],
        payments: Iterable[Payment],
    ) -> Dict[str, Any]:
        milestones = list(milestones)
        done = [
            m for m in milestones
            if m.status in (MilestoneStatus.COMPLETED, MilestoneStatus.APPROVED)
        ]
        approved = [m for m in milestones if m.status == MilestoneStatus.APPROVED]

        total_hours = sum(
            t.total_hours for t in timesheets if t.status == TimesheetStatus.APPROVED
        )
        # Payments are stored in cents, contract amounts in currency units
        total_paid = sum(
            p.amount for p in payments if p.status == PaymentStatus.SUCCEEDED
        ) / 100

        progress = round(len(done) / len(milestones) * 100) if milestones else 0

        return {
            "total_milestones": len(milestones),
            "completed_milestones": len(done),
            "approved_milestones": len(approved),
            "milestone_progress": progress,
            "total_hours": round(total_hours, 2),
            "total_paid": round(total_paid, 2),
            "amount_remaining": round(max(contract.amount - total_paid, 0), 2),
        }
