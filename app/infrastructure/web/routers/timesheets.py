"""
Timesheet router for operations addressed by timesheet id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.application.use_cases.contract_use_cases import ReviewTimesheetUseCase, DeleteTimesheetUseCase
from app.infrastructure.auth import CurrentUser
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyTimesheetRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_contract_repository,
    get_timesheet_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import message_response, success_response, unwrap_result


router = APIRouter()


class TimesheetRepositories:
    """Bundle of the repositories every timesheet use case takes."""

    def __init__(
        self,
        timesheet_repository: Annotated[SQLAlchemyTimesheetRepository, Depends(get_timesheet_repository)],
        contract_repository: Annotated[SQLAlchemyContractRepository, Depends(get_contract_repository)],
        company_repository: Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)],
        va_profile_repository: Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
    ):
        self.args = (timesheet_repository, contract_repository, company_repository, va_profile_repository)


Repositories = Annotated[TimesheetRepositories, Depends()]


@router.put("/{timesheet_id}/approve")
async def approve_timesheet(timesheet_id: int, user: CurrentUser, repositories: Repositories):
    use_case = ReviewTimesheetUseCase(*repositories.args, approve=True).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(timesheet_id)), "Timesheet approved")


@router.put("/{timesheet_id}/reject")
async def reject_timesheet(timesheet_id: int, user: CurrentUser, repositories: Repositories):
    use_case = ReviewTimesheetUseCase(*repositories.args, approve=False).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(timesheet_id)), "Timesheet rejected")


@router.delete("/{timesheet_id}")
async def delete_timesheet(timesheet_id: int, user: CurrentUser, repositories: Repositories):
    use_case = DeleteTimesheetUseCase(*repositories.args).set_current_user(user)
    unwrap_result(await use_case.execute(timesheet_id))
    return message_response("Timesheet deleted successfully")
