"""
Payment router.
Stripe payment intents for the contact unlock fee and contract payments,
refunds and the Stripe webhook.
"""

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from app.application.dto.payment_dto import (
    CreateUnlockIntentRequestDTO,
    ConfirmPaymentRequestDTO,
    ContractPaymentRequestDTO,
    ListPaymentsRequestDTO,
    RefundPaymentRequestDTO,
)
from app.application.use_cases.payment_use_cases import (
    CreateUnlockIntentUseCase,
    ConfirmPaymentUseCase,
    GetMatchPaymentUseCase,
    CreateContractPaymentUseCase,
    ListPaymentsUseCase,
    GetPaymentUseCase,
    RefundPaymentUseCase,
    HandleWebhookUseCase,
)
from app.config import Settings
from app.domain.events.base import EventDispatcher
from app.domain.services.gateways import PaymentGateway
from app.infrastructure.auth import CurrentUser
from app.infrastructure.pagination import PaginationParams, pagination_params
from app.infrastructure.rate_limiting import payment_rate_limit
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyMatchRepository,
    SQLAlchemyMilestoneRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_app_settings,
    get_company_repository,
    get_contract_repository,
    get_event_dispatcher,
    get_match_repository,
    get_milestone_repository,
    get_payment_gateway,
    get_payment_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import page_response, serialize, success_response, unwrap_result


router = APIRouter()

PaymentRepository = Annotated[SQLAlchemyPaymentRepository, Depends(get_payment_repository)]
MatchRepository = Annotated[SQLAlchemyMatchRepository, Depends(get_match_repository)]
CompanyRepository = Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)]
VAProfileRepository = Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
Gateway = Annotated[PaymentGateway, Depends(get_payment_gateway)]
Dispatcher = Annotated[EventDispatcher, Depends(get_event_dispatcher)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


@router.post("/create-intent")
async def create_unlock_intent(
    request: CreateUnlockIntentRequestDTO,
    user: CurrentUser,
    payment_repository: PaymentRepository,
    match_repository: MatchRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    gateway: Gateway,
    settings: AppSettings,
    _: None = Depends(payment_rate_limit)
):
    """
    Create the payment intent for a match's contact unlock fee.
    The client completes it with the returned client secret.
    """
    use_case = CreateUnlockIntentUseCase(
        payment_repository, match_repository, company_repository, va_profile_repository,
        gateway, unlock_fee_cents=settings.unlock_fee_cents, currency=settings.payment_currency
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)))


@router.post("/confirm")
async def confirm_payment(
    request: ConfirmPaymentRequestDTO,
    user: CurrentUser,
    payment_repository: PaymentRepository,
    gateway: Gateway,
    event_dispatcher: Dispatcher,
    _: None = Depends(payment_rate_limit)
):
    """
    Check the intent with Stripe and store the outcome.
    An unfinished payment answers 400 but its stored status is still updated.
    """
    use_case = ConfirmPaymentUseCase(
        payment_repository, gateway, event_dispatcher=event_dispatcher
    ).set_current_user(user)
    result = unwrap_result(await use_case.execute(request))

    if not result.succeeded:
        # Returned rather than raised so the request transaction still commits
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": {"error": "Payment not completed", "code": "PAYMENT_NOT_COMPLETED"},
                "data": serialize(result.payment),
            }
        )
    return success_response(result.payment, "Payment confirmed successfully")


@router.get("/match/{match_id}")
async def get_match_payment(
    match_id: int,
    user: CurrentUser,
    payment_repository: PaymentRepository,
    match_repository: MatchRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository
):
    """Unlock payment for a match, or null when none was started."""
    use_case = GetMatchPaymentUseCase(
        payment_repository, match_repository, company_repository, va_profile_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(match_id)))


@router.post("/contract")
async def create_contract_payment(
    request: ContractPaymentRequestDTO,
    user: CurrentUser,
    payment_repository: PaymentRepository,
    contract_repository: Annotated[SQLAlchemyContractRepository, Depends(get_contract_repository)],
    milestone_repository: Annotated[SQLAlchemyMilestoneRepository, Depends(get_milestone_repository)],
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    gateway: Gateway,
    settings: AppSettings,
    _: None = Depends(payment_rate_limit)
):
    """
    Pay the VA on a contract, optionally for one milestone.

    - **amount**: USD; platform and processing fees are deducted from the VA's net amount
    """
    use_case = CreateContractPaymentUseCase(
        payment_repository, contract_repository, milestone_repository, company_repository,
        va_profile_repository, gateway, platform_fee_percentage=settings.platform_fee_percentage
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)))


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    payment_repository: PaymentRepository,
    gateway: Gateway,
    event_dispatcher: Dispatcher,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature")
):
    """Stripe webhook. The raw body is needed to verify the signature."""
    if not stripe_signature:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Missing Stripe signature", "code": "VALIDATION_ERROR"}
        )

    payload = await request.body()
    use_case = HandleWebhookUseCase(payment_repository, gateway, event_dispatcher=event_dispatcher)
    result = unwrap_result(await use_case.execute((payload, stripe_signature)))
    return serialize(result)


@router.get("")
async def list_payments(
    user: CurrentUser,
    payment_repository: PaymentRepository,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    type: Literal["sent", "received", "all"] = Query("all", description="sent, received or all")
):
    request = ListPaymentsRequestDTO(page=pagination.page, limit=pagination.limit, type=type)
    use_case = ListPaymentsUseCase(payment_repository).set_current_user(user)
    return page_response(unwrap_result(await use_case.execute(request)))


@router.get("/{payment_id}")
async def get_payment(payment_id: int, user: CurrentUser, payment_repository: PaymentRepository):
    use_case = GetPaymentUseCase(payment_repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(payment_id)))


@router.post("/{payment_id}/refund")
async def refund_payment(
    payment_id: int,
    user: CurrentUser,
    payment_repository: PaymentRepository,
    gateway: Gateway,
    event_dispatcher: Dispatcher,
    request: Optional[RefundPaymentRequestDTO] = None,
    _: None = Depends(payment_rate_limit)
):
    """
    Refund a succeeded payment. Payer only.

    - **amount**: optional partial refund in USD
    """
    use_case = RefundPaymentUseCase(payment_repository, gateway, event_dispatcher=event_dispatcher)
    use_case.set_current_user(user).for_payment(payment_id)
    result = await use_case.execute(request or RefundPaymentRequestDTO())
    return success_response(unwrap_result(result), "Payment refunded successfully")
