"""
Payment use cases for the application layer.
Covers the contact-unlock fee, contract payments, refunds and Stripe webhooks.
"""

import logging
from typing import Optional

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.use_cases.contract_use_cases import ContractAccessMixin, ContractParty
from app.application.use_cases.matching_use_cases import MatchVisibilityMixin
from app.application.dto.base_dto import PageDTO
from app.application.dto.payment_dto import (
    CreateUnlockIntentRequestDTO, ConfirmPaymentRequestDTO, ContractPaymentRequestDTO,
    ListPaymentsRequestDTO, RefundPaymentRequestDTO, PaymentResponseDTO,
    PaymentIntentResponseDTO, ConfirmPaymentResultDTO, WebhookResultDTO
)
from app.domain.models.base import (
    EntityNotFoundError, PermissionDeniedError, BusinessRuleViolation
)
from app.domain.models.payment import Payment, PaymentStatus, PaymentType
from app.domain.models.user import Role
from app.domain.repositories.contract_repository import ContractRepository, MilestoneRepository
from app.domain.repositories.matching_repository import MatchRepository
from app.domain.repositories.payment_repository import PaymentRepository
from app.domain.repositories.profile_repository import CompanyRepository, VAProfileRepository
from app.domain.services.fee_service import FeeService
from app.domain.services.gateways import PaymentGateway, PaymentIntent
from app.domain.services.matching_service import MatchingService


logger = logging.getLogger(__name__)

INTENT_SUCCEEDED = "succeeded"
INTENT_FAILED_STATUSES = ("canceled", "failed")


def _intent_response(intent: PaymentIntent, payment: Payment) -> PaymentIntentResponseDTO:
    return PaymentIntentResponseDTO(
        client_secret=intent.client_secret,
        payment_intent_id=intent.id,
        amount=payment.amount,
        currency=payment.currency,
        payment=PaymentResponseDTO.from_domain(payment),
    )


class CreateUnlockIntentUseCase(AuthorizedUseCase, MatchVisibilityMixin,
                                CommandUseCase[CreateUnlockIntentRequestDTO, PaymentIntentResponseDTO]):
    """Start the fixed-fee payment that unlocks a match's contact details."""

    def __init__(self, payment_repository: PaymentRepository, match_repository: MatchRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository,
                 payment_gateway: PaymentGateway, unlock_fee_cents: int, currency: str = "usd"):
        super().__init__()
        self.payment_repository = payment_repository
        self.match_repository = match_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.payment_gateway = payment_gateway
        self.matching_service = MatchingService()
        self.unlock_fee_cents = unlock_fee_cents
        self.currency = currency

    async def _check_authorization(self, request: CreateUnlockIntentRequestDTO) -> None:
        self._require_role(Role.COMPANY, message="Only companies can unlock contact information")

    async def _execute_command_logic(self, request: CreateUnlockIntentRequestDTO) -> PaymentIntentResponseDTO:
        match = self._visible_match(self.match_repository, request.match_id)
        if self.payment_repository.find_succeeded_for_match(match.id):
            raise BusinessRuleViolation("Payment already completed for this match")

        intent = self.payment_gateway.create_payment_intent(
            self.unlock_fee_cents,
            self.currency,
            metadata={
                "matchId": str(match.id),
                "payerId": self.current_user_id,
                "type": PaymentType.UNLOCK.value,
            },
        )
        payment = self.payment_repository.save(Payment(
            payer_id=self.current_user_id,
            match_id=match.id,
            amount=self.unlock_fee_cents,
            currency=self.currency,
            stripe_payment_intent_id=intent.id,
            payment_type=PaymentType.UNLOCK,
            description=f"Contact unlock for match {match.id}",
        ))
        logger.info(f"Unlock intent {intent.id} created for match {match.id}")
        return _intent_response(intent, payment)


class ConfirmPaymentUseCase(AuthorizedUseCase, CommandUseCase[ConfirmPaymentRequestDTO, ConfirmPaymentResultDTO]):
    """
    Check the intent with Stripe and persist the outcome. A payment only
    succeeds when Stripe says so for the exact amount we stored.
    """

    def __init__(self, payment_repository: PaymentRepository, payment_gateway: PaymentGateway,
                 event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.payment_repository = payment_repository
        self.payment_gateway = payment_gateway

    async def _execute_command_logic(self, request: ConfirmPaymentRequestDTO) -> ConfirmPaymentResultDTO:
        payment = self.payment_repository.find_by_intent_id(request.payment_intent_id)
        if not payment:
            raise EntityNotFoundError("Payment")
        self._require_owner(payment.payer_id)

        intent = self.payment_gateway.retrieve_payment_intent(request.payment_intent_id)
        if intent.status == INTENT_SUCCEEDED and intent.amount == payment.amount:
            payment.mark_succeeded()
        elif intent.status in INTENT_FAILED_STATUSES:
            payment.mark_failed()
        else:
            logger.info(
                f"Intent {intent.id} not completed (status {intent.status}, "
                f"amount {intent.amount} vs {payment.amount})"
            )

        payment = self.payment_repository.save(payment)
        self._collect_events(payment)
        return ConfirmPaymentResultDTO(
            succeeded=payment.is_succeeded,
            payment=PaymentResponseDTO.from_domain(payment),
        )


class GetMatchPaymentUseCase(AuthorizedUseCase, MatchVisibilityMixin,
                             QueryUseCase[int, Optional[PaymentResponseDTO]]):
    """Latest payment for a match, or None."""

    def __init__(self, payment_repository: PaymentRepository, match_repository: MatchRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.payment_repository = payment_repository
        self.match_repository = match_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.matching_service = MatchingService()

    async def _execute_query_logic(self, match_id: int) -> Optional[PaymentResponseDTO]:
        match = self._visible_match(self.match_repository, match_id)
        payment = self.payment_repository.find_latest_for_match(match.id)
        return PaymentResponseDTO.from_domain(payment) if payment else None


class CreateContractPaymentUseCase(AuthorizedUseCase, ContractAccessMixin,
                                   CommandUseCase[ContractPaymentRequestDTO, PaymentIntentResponseDTO]):
    """Company pays the VA of one of its contracts, with platform and card fees split out."""

    def __init__(self, payment_repository: PaymentRepository, contract_repository: ContractRepository,
                 milestone_repository: MilestoneRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, payment_gateway: PaymentGateway,
                 platform_fee_percentage: float = 10.0):
        super().__init__()
        self.payment_repository = payment_repository
        self.contract_repository = contract_repository
        self.milestone_repository = milestone_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.payment_gateway = payment_gateway
        self.fee_service = FeeService(platform_fee_percentage)

    async def _execute_command_logic(self, request: ContractPaymentRequestDTO) -> PaymentIntentResponseDTO:
        contract, party = self._load_contract(request.contract_id)
        self._require_party(party, ContractParty.COMPANY, "Only the company can pay a contract")

        profile = self.va_profile_repository.find_by_id(contract.va_profile_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        if profile.user_id == self.current_user_id:
            raise BusinessRuleViolation("Cannot make payment to yourself")

        if request.milestone_id is not None:
            milestone = self.milestone_repository.find_by_id(request.milestone_id)
            if not milestone or milestone.contract_id != contract.id:
                raise EntityNotFoundError("Milestone")

        fees = self.fee_service.breakdown(FeeService.to_cents(request.amount))
        currency = contract.currency.lower()
        intent = self.payment_gateway.create_payment_intent(
            fees.amount,
            currency,
            metadata={
                "contractId": str(contract.id),
                "milestoneId": str(request.milestone_id or ""),
                "payerId": self.current_user_id,
                "receiverId": profile.user_id,
                "type": PaymentType.PAYMENT.value,
            },
        )
        payment = self.payment_repository.save(Payment(
            payer_id=self.current_user_id,
            receiver_id=profile.user_id,
            contract_id=contract.id,
            milestone_id=request.milestone_id,
            amount=fees.amount,
            currency=currency,
            platform_fee=fees.platform_fee,
            stripe_fee=fees.stripe_fee,
            net_amount=fees.net_amount,
            stripe_payment_intent_id=intent.id,
            payment_type=PaymentType.PAYMENT,
            description=request.description,
        ))
        return _intent_response(intent, payment)


class ListPaymentsUseCase(AuthorizedUseCase, QueryUseCase[ListPaymentsRequestDTO, PageDTO]):

    def __init__(self, payment_repository: PaymentRepository):
        super().__init__()
        self.payment_repository = payment_repository

    async def _execute_query_logic(self, request: ListPaymentsRequestDTO) -> PageDTO:
        payments, total = self.payment_repository.find_for_user(
            self.current_user_id, direction=request.type,
            offset=request.offset, limit=request.limit,
        )
        return PageDTO.create(
            [PaymentResponseDTO.from_domain(payment) for payment in payments],
            total, request.page, request.limit,
        )


class GetPaymentUseCase(AuthorizedUseCase, QueryUseCase[int, PaymentResponseDTO]):

    def __init__(self, payment_repository: PaymentRepository):
        super().__init__()
        self.payment_repository = payment_repository

    async def _execute_query_logic(self, payment_id: int) -> PaymentResponseDTO:
        payment = self.payment_repository.find_by_id(payment_id)
        if not payment:
            raise EntityNotFoundError("Payment")
        if not payment.involves(self.current_user_id):
            raise PermissionDeniedError("Access denied")
        return PaymentResponseDTO.from_domain(payment)


class RefundPaymentUseCase(AuthorizedUseCase, CommandUseCase[RefundPaymentRequestDTO, PaymentResponseDTO]):
    """Full or partial refund of a succeeded payment, requested by its payer."""

    def __init__(self, payment_repository: PaymentRepository, payment_gateway: PaymentGateway,
                 event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.payment_repository = payment_repository
        self.payment_gateway = payment_gateway
        self.payment_id: Optional[int] = None

    def for_payment(self, payment_id: int) -> "RefundPaymentUseCase":
        self.payment_id = payment_id
        return self

    async def _execute_command_logic(self, request: RefundPaymentRequestDTO) -> PaymentResponseDTO:
        payment = self.payment_repository.find_by_id(self.payment_id)
        if not payment:
            raise EntityNotFoundError("Payment")
        self._require_owner(payment.payer_id)

        amount = FeeService.to_cents(request.amount) if request.amount is not None else None
        refunded = payment.refund(amount, request.reason)
        self.payment_gateway.refund(payment.stripe_payment_intent_id, refunded)

        payment = self.payment_repository.save(payment)
        self._collect_events(payment)
        logger.info(f"Payment {payment.id} refunded ({refunded} cents)")
        return PaymentResponseDTO.from_domain(payment)


class HandleWebhookUseCase(CommandUseCase[tuple, WebhookResultDTO]):
    """Apply Stripe payment intent events to stored payments."""

    def __init__(self, payment_repository: PaymentRepository, payment_gateway: PaymentGateway,
                 event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.payment_repository = payment_repository
        self.payment_gateway = payment_gateway

    async def _execute_command_logic(self, request: tuple) -> WebhookResultDTO:
        payload, signature = request
        event = self.payment_gateway.construct_event(payload, signature)
        event_type = event.get("type")
        intent = event.get("data", {}).get("object", {})

        if event_type not in (
            "payment_intent.succeeded",
            "payment_intent.payment_failed",
            "payment_intent.canceled",
        ):
            logger.debug(f"Ignoring webhook event {event_type}")
            return WebhookResultDTO(event_type=event_type)

        payment = self.payment_repository.find_by_intent_id(intent.get("id", ""))
        if not payment:
            logger.warning(f"Webhook {event_type} for unknown intent {intent.get('id')}")
            return WebhookResultDTO(event_type=event_type)

        if event_type == "payment_intent.succeeded":
            if payment.status == PaymentStatus.REFUNDED:
                # A refund is final
                logger.info(f"Ignoring {event_type} for refunded payment {payment.id}")
                return WebhookResultDTO(event_type=event_type)
            payment.mark_succeeded()
        else:
            payment.mark_failed()
        self.payment_repository.save(payment)
        self._collect_events(payment)
        return WebhookResultDTO(event_type=event_type)
