"""
Unit tests for payment use cases.
"""

import pytest
from unittest.mock import AsyncMock, Mock
from app.application.dto.payment_dto import (
    ConfirmPaymentRequestDTO, CreateUnlockIntentRequestDTO, RefundPaymentRequestDTO
)
from app.application.use_cases.payment_use_cases import (
    ConfirmPaymentUseCase, CreateUnlockIntentUseCase, HandleWebhookUseCase, RefundPaymentUseCase
)
from app.domain.events.marketplace_events import PaymentSucceeded
from app.domain.models.base import ValidationError
from app.domain.models.matching import Match
from app.domain.models.payment import Payment, PaymentStatus, PaymentType
from app.domain.models.profile import Company
from app.domain.models.user import AuthenticatedUser, Role
from app.domain.services.gateways import PaymentIntent


COMPANY_USER = AuthenticatedUser(uid="company-user", email="hr@acme.com", role=Role.COMPANY)


def make_payment(**overrides):
    data = dict(
        id=1, payer_id="company-user", match_id=100, amount=2999,
        stripe_payment_intent_id="pi_1", payment_type=PaymentType.UNLOCK,
    )
    data.update(overrides)
    return Payment(**data)


class TestConfirmPaymentUseCase:

    def setup_method(self):
        self.payment = make_payment()
        self.repository = Mock()
        self.repository.find_by_intent_id.return_value = self.payment
        self.repository.save.side_effect = lambda payment: payment
        self.gateway = Mock()
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    async def confirm(self, user=COMPANY_USER):
        use_case = ConfirmPaymentUseCase(self.repository, self.gateway, event_dispatcher=self.dispatcher)
        return await use_case.set_current_user(user).execute(ConfirmPaymentRequestDTO(payment_intent_id="pi_1"))

    @pytest.mark.asyncio
    async def test_succeeded_intent(self):
        self.gateway.retrieve_payment_intent.return_value = PaymentIntent(
            id="pi_1", amount=2999, currency="usd", status="succeeded"
        )

        result = await self.confirm()

        assert result.data.succeeded is True
        assert result.data.payment.status == PaymentStatus.SUCCEEDED
        events = self.dispatcher.dispatch_all.call_args[0][0]
        assert isinstance(events[0], PaymentSucceeded)

    @pytest.mark.asyncio
    async def test_amount_mismatch_does_not_succeed(self):
        self.gateway.retrieve_payment_intent.return_value = PaymentIntent(
            id="pi_1", amount=100, currency="usd", status="succeeded"
        )

        result = await self.confirm()

        assert result.data.succeeded is False
        assert self.payment.status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_canceled_intent_marks_failed(self):
        self.gateway.retrieve_payment_intent.return_value = PaymentIntent(
            id="pi_1", amount=2999, currency="usd", status="canceled"
        )

        result = await self.confirm()

        assert result.data.succeeded is False
        assert result.data.payment.status == PaymentStatus.FAILED
        self.repository.save.assert_called_once()

    @pytest.mark.asyncio
    async def test_processing_intent_stays_pending(self):
        self.gateway.retrieve_payment_intent.return_value = PaymentIntent(
            id="pi_1", amount=2999, currency="usd", status="processing"
        )

        result = await self.confirm()

        assert result.data.payment.status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_only_payer_confirms(self):
        other = AuthenticatedUser(uid="someone", email="s@x.com", role=Role.COMPANY)
        result = await self.confirm(other)
        assert result.error_code == "PERMISSION_DENIED"
        self.gateway.retrieve_payment_intent.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_intent(self):
        self.repository.find_by_intent_id.return_value = None
        result = await self.confirm()
        assert result.error_code == "ENTITY_NOT_FOUND"


class TestCreateUnlockIntentUseCase:

    def setup_method(self):
        self.payment_repository = Mock()
        self.payment_repository.find_succeeded_for_match.return_value = None
        self.payment_repository.save.side_effect = lambda payment: payment
        self.match_repository = Mock()
        self.match_repository.find_by_id.return_value = Match(
            id=100, job_posting_id=1, va_profile_id=9, company_id=5
        )
        self.company_repository = Mock()
        self.company_repository.find_by_user_id.return_value = Company(
            id=5, user_id="company-user", name="Acme Inc", country="USA"
        )
        self.va_profile_repository = Mock()
        self.gateway = Mock()
        self.gateway.create_payment_intent.return_value = PaymentIntent(
            id="pi_new", amount=2999, currency="usd", status="requires_payment_method",
            client_secret="pi_new_secret",
        )

    def use_case(self):
        return CreateUnlockIntentUseCase(
            self.payment_repository, self.match_repository, self.company_repository,
            self.va_profile_repository, self.gateway, unlock_fee_cents=2999,
        ).set_current_user(COMPANY_USER)

    @pytest.mark.asyncio
    async def test_creates_pending_unlock_payment(self):
        result = await self.use_case().execute(CreateUnlockIntentRequestDTO(match_id=100))

        assert result.data.client_secret == "pi_new_secret"
        assert result.data.amount == 2999
        assert result.data.payment.status == PaymentStatus.PENDING
        assert result.data.payment.payment_type == PaymentType.UNLOCK
        amount, currency = self.gateway.create_payment_intent.call_args[0]
        assert (amount, currency) == (2999, "usd")
        metadata = self.gateway.create_payment_intent.call_args[1]["metadata"]
        assert metadata["matchId"] == "100"

    @pytest.mark.asyncio
    async def test_already_paid(self):
        self.payment_repository.find_succeeded_for_match.return_value = make_payment(
            status=PaymentStatus.SUCCEEDED
        )

        result = await self.use_case().execute(CreateUnlockIntentRequestDTO(match_id=100))

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        self.gateway.create_payment_intent.assert_not_called()


class TestRefundPaymentUseCase:

    @pytest.mark.asyncio
    async def test_partial_refund_in_dollars(self):
        payment = make_payment(status=PaymentStatus.SUCCEEDED)
        repository = Mock()
        repository.find_by_id.return_value = payment
        repository.save.side_effect = lambda p: p
        gateway = Mock()

        use_case = RefundPaymentUseCase(repository, gateway).for_payment(1).set_current_user(COMPANY_USER)
        result = await use_case.execute(RefundPaymentRequestDTO(amount=10.0))

        assert result.data.status == PaymentStatus.REFUNDED
        assert result.data.refund_amount == 1000
        gateway.refund.assert_called_once_with("pi_1", 1000)

    @pytest.mark.asyncio
    async def test_pending_payment_cannot_be_refunded(self):
        repository = Mock()
        repository.find_by_id.return_value = make_payment()
        gateway = Mock()

        use_case = RefundPaymentUseCase(repository, gateway).for_payment(1).set_current_user(COMPANY_USER)
        result = await use_case.execute(RefundPaymentRequestDTO())

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        gateway.refund.assert_not_called()


class TestHandleWebhookUseCase:

    def setup_method(self):
        self.payment = make_payment()
        self.repository = Mock()
        self.repository.find_by_intent_id.return_value = self.payment
        self.gateway = Mock()

    def event(self, event_type, intent_id="pi_1"):
        return {"type": event_type, "data": {"object": {"id": intent_id}}}

    @pytest.mark.asyncio
    async def test_succeeded_event(self):
        self.gateway.construct_event.return_value = self.event("payment_intent.succeeded")

        result = await HandleWebhookUseCase(self.repository, self.gateway).execute((b"{}", "sig"))

        assert result.data.received is True
        assert self.payment.status == PaymentStatus.SUCCEEDED
        self.repository.save.assert_called_once_with(self.payment)

    @pytest.mark.asyncio
    async def test_failed_event(self):
        self.gateway.construct_event.return_value = self.event("payment_intent.payment_failed")

        await HandleWebhookUseCase(self.repository, self.gateway).execute((b"{}", "sig"))

        assert self.payment.status == PaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_other_events_ignored(self):
        self.gateway.construct_event.return_value = self.event("charge.refunded")

        result = await HandleWebhookUseCase(self.repository, self.gateway).execute((b"{}", "sig"))

        assert result.data.event_type == "charge.refunded"
        self.repository.find_by_intent_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_intent_acknowledged(self):
        self.repository.find_by_intent_id.return_value = None
        self.gateway.construct_event.return_value = self.event("payment_intent.succeeded", "pi_x")

        result = await HandleWebhookUseCase(self.repository, self.gateway).execute((b"{}", "sig"))

        assert result.success is True
        self.repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_bad_signature(self):
        self.gateway.construct_event.side_effect = ValidationError("Invalid webhook signature")

        result = await HandleWebhookUseCase(self.repository, self.gateway).execute((b"{}", "bad"))

        assert result.error_code == "VALIDATION_ERROR"
