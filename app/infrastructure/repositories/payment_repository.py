"""
Payment repository implementation using SQLAlchemy.
"""

from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.models.payment import Payment, PaymentStatus
from app.domain.repositories.payment_repository import PaymentRepository
from app.infrastructure.db.models import PaymentModel
from app.infrastructure.mappers.payment_mapper import PaymentMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyPaymentRepository(SQLAlchemyRepository, PaymentRepository):
    """SQLAlchemy implementation of payment repository."""

    model = PaymentModel
    entity_name = "Payment"

    def __init__(self, session: Session):
        super().__init__(session, PaymentMapper())

    def find_by_intent_id(self, intent_id: str) -> Optional[Payment]:
        return self._first(
            self.session.query(PaymentModel).filter_by(stripe_payment_intent_id=intent_id)
        )

    def find_latest_for_match(self, match_id: int) -> Optional[Payment]:
        return self._first(
            self.session.query(PaymentModel)
            .filter_by(match_id=match_id)
            .order_by(PaymentModel.id.desc())
        )

    def find_succeeded_for_match(self, match_id: int) -> Optional[Payment]:
        return self._first(
            self.session.query(PaymentModel)
            .filter_by(match_id=match_id, status=PaymentStatus.SUCCEEDED)
            .order_by(PaymentModel.id.desc())
        )

    def find_by_contract(self, contract_id: int) -> List[Payment]:
        return self._all(
            self.session.query(PaymentModel)
            .filter_by(contract_id=contract_id)
            .order_by(PaymentModel.id.desc())
        )

    def find_for_user(self, user_id: str, direction: str = "all",
                      offset: int = 0, limit: int = 20) -> Tuple[List[Payment], int]:
        query = self.session.query(PaymentModel)
        if direction == "sent":
            query = query.filter(PaymentModel.payer_id == user_id)
        elif direction == "received":
            query = query.filter(PaymentModel.receiver_id == user_id)
        else:
            query = query.filter(or_(
                PaymentModel.payer_id == user_id,
                PaymentModel.receiver_id == user_id,
            ))
        query = query.order_by(PaymentModel.id.desc())
        return self._page(query, offset, limit)
