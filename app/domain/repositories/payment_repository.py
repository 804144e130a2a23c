"""
Payment repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from app.domain.models.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for payments.
    """

    @abstractmethod
    def save(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    def find_by_id(self, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    def find_by_intent_id(self, intent_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    def find_latest_for_match(self, match_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    def find_succeeded_for_match(self, match_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    def find_by_contract(self, contract_id: int) -> List[Payment]:
        pass

    @abstractmethod
    def find_for_user(self, user_id: str, direction: str = "all",
                      offset: int = 0, limit: int = 20) -> Tuple[List[Payment], int]:
        """
        Payments the user sent, received or both ("sent", "received", "all"),
        newest first, with the total count.
        """
        pass
