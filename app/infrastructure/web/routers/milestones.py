"""
Milestone router for operations addressed by milestone id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.application.dto.contract_dto import UpdateMilestoneRequestDTO
from app.application.use_cases.contract_use_cases import (
    UpdateMilestoneUseCase,
    DeleteMilestoneUseCase,
    ApproveMilestoneUseCase,
)
from app.infrastructure.auth import CurrentUser
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyMilestoneRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_contract_repository,
    get_milestone_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import message_response, success_response, unwrap_result


router = APIRouter()


class MilestoneRepositories:
    """Bundle of the repositories every milestone use case takes."""

    def __init__(
        self,
        milestone_repository: Annotated[SQLAlchemyMilestoneRepository, Depends(get_milestone_repository)],
        contract_repository: Annotated[SQLAlchemyContractRepository, Depends(get_contract_repository)],
        company_repository: Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)],
        va_profile_repository: Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
    ):
        self.args = (milestone_repository, contract_repository, company_repository, va_profile_repository)


Repositories = Annotated[MilestoneRepositories, Depends()]


@router.put("/{milestone_id}")
async def update_milestone(
    milestone_id: int,
    request: UpdateMilestoneRequestDTO,
    user: CurrentUser,
    repositories: Repositories
):
    """
    Update a milestone. The VA may only move it to in_progress or completed.
    """
    use_case = UpdateMilestoneUseCase(*repositories.args)
    use_case.set_current_user(user).for_milestone(milestone_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Milestone updated successfully")


@router.delete("/{milestone_id}")
async def delete_milestone(milestone_id: int, user: CurrentUser, repositories: Repositories):
    use_case = DeleteMilestoneUseCase(*repositories.args).set_current_user(user)
    unwrap_result(await use_case.execute(milestone_id))
    return message_response("Milestone deleted successfully")


@router.put("/{milestone_id}/approve")
async def approve_milestone(milestone_id: int, user: CurrentUser, repositories: Repositories):
    use_case = ApproveMilestoneUseCase(*repositories.args).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(milestone_id)), "Milestone approved successfully")
