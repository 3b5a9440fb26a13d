"""
Payment ledger and wallet repository interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple

from skilllink.domain.models.payment import Payment, PaymentType, PaymentStatus, Wallet


class PaymentRepository(ABC):
    """Repository interface for payments and materialized balances."""

    @abstractmethod
    def add(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    def list(
        self,
        page: int,
        limit: int,
        worker_id: Optional[int] = None,
        employer_id: Optional[int] = None,
        payment_type: Optional[PaymentType] = None,
    ) -> Tuple[List[Payment], int]:
        """Newest first."""
        pass

    @abstractmethod
    def total(
        self,
        worker_id: Optional[int] = None,
        employer_id: Optional[int] = None,
        payment_type: Optional[PaymentType] = None,
        status: Optional[PaymentStatus] = None,
    ) -> Decimal:
        pass

    @abstractmethod
    def get_wallet(self, user_id: int) -> Wallet:
        """Load the user's wallet, creating an empty one on first use."""
        pass

    @abstractmethod
    def save_wallet(self, wallet: Wallet) -> Wallet:
        """Raises ConcurrencyConflictError when the wallet version is stale."""
        pass
