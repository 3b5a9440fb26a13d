"""
Payment ledger and wallet repository implementation using SQLAlchemy.
"""

from decimal import Decimal
from typing import Optional, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from skilllink.domain.models.payment import Payment, PaymentType, PaymentStatus, Wallet
from skilllink.domain.models.base import ConcurrencyConflictError
from skilllink.domain.repositories.payment_repository import PaymentRepository
from skilllink.infrastructure.db.models import PaymentModel, WalletModel
from skilllink.infrastructure.mappers.payment_mapper import PaymentMapper, WalletMapper
from skilllink.infrastructure.pagination import paginator


class SQLAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of the payment ledger."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = PaymentMapper()
        self.wallet_mapper = WalletMapper()
        self.model = PaymentModel

    def add(self, payment: Payment) -> Payment:
        model = self.mapper.domain_to_model(payment)
        self.session.add(model)
        self.session.flush()
        payment.id = model.id
        return payment

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        model = self.session.get(PaymentModel, payment_id)
        return self.mapper.model_to_domain(model) if model else None

    def _filtered(self, query, worker_id=None, employer_id=None, payment_type=None, status=None):
        if worker_id is not None:
            query = query.filter(PaymentModel.worker_id == worker_id)
        if employer_id is not None:
            query = query.filter(PaymentModel.employer_id == employer_id)
        if payment_type is not None:
            query = query.filter(PaymentModel.type == PaymentType(payment_type).value)
        if status is not None:
            query = query.filter(PaymentModel.status == PaymentStatus(status).value)
        return query

    def list(
        self,
        page: int,
        limit: int,
        worker_id: Optional[int] = None,
        employer_id: Optional[int] = None,
        payment_type: Optional[PaymentType] = None,
    ) -> Tuple[List[Payment], int]:
        query = self._filtered(self.session.query(PaymentModel), worker_id, employer_id, payment_type)
        query = query.order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.model_to_domain(m) for m in models], meta.total

    def total(
        self,
        worker_id: Optional[int] = None,
        employer_id: Optional[int] = None,
        payment_type: Optional[PaymentType] = None,
        status: Optional[PaymentStatus] = None,
    ) -> Decimal:
        query = self.session.query(func.coalesce(func.sum(PaymentModel.amount), 0))
        value = self._filtered(query, worker_id, employer_id, payment_type, status).scalar()
        return Decimal(str(value or 0))

    def get_wallet(self, user_id: int) -> Wallet:
        model = self.session.query(WalletModel).filter(WalletModel.user_id == user_id).first()
        if model is None:
            model = WalletModel(user_id=user_id, balance=Decimal("0"))
            self.session.add(model)
            self.session.flush()
        return self.wallet_mapper.model_to_domain(model)

    def save_wallet(self, wallet: Wallet) -> Wallet:
        """
        Write the new balance.
        The UPDATE is guarded by the version column, so a writer that
        committed in between makes this flush fail.
        """
        model = self.session.get(WalletModel, wallet.id)
        if model is None or model.version != wallet.version:
            raise ConcurrencyConflictError("Wallet was modified concurrently, please retry")
        model.balance = wallet.balance
        model.updated_at = wallet.updated_at
        try:
            self.session.flush()
        except StaleDataError:
            self.session.rollback()
            raise ConcurrencyConflictError("Wallet was modified concurrently, please retry")
        wallet.version = model.version
        return wallet
