"""
Payment and wallet mappers.
"""

from decimal import Decimal

from skilllink.domain.models.payment import Payment, Wallet
from skilllink.infrastructure.db.models import PaymentModel, WalletModel


class PaymentMapper:
    """Maps between Payment domain entity and PaymentModel database model."""

    def domain_to_model(self, payment: Payment) -> PaymentModel:
        return PaymentModel(
            id=payment.id,
            type=payment.type.value,
            status=payment.status.value,
            worker_id=payment.worker_id,
            employer_id=payment.employer_id,
            project_id=payment.project_id,
            amount=payment.amount,
            currency=payment.currency,
            note=payment.note,
            created_at=payment.created_at,
            updated_at=payment.updated_at
        )

    def model_to_domain(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            type=model.type,
            status=model.status,
            worker_id=model.worker_id,
            employer_id=model.employer_id,
            project_id=model.project_id,
            amount=Decimal(str(model.amount)),
            currency=model.currency or "NGN",
            note=model.note,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class WalletMapper:
    """Maps between Wallet domain entity and WalletModel database model."""

    def domain_to_model(self, wallet: Wallet) -> WalletModel:
        return WalletModel(
            id=wallet.id,
            user_id=wallet.user_id,
            balance=wallet.balance,
            created_at=wallet.created_at,
            updated_at=wallet.updated_at
        )

    def model_to_domain(self, model: WalletModel) -> Wallet:
        return Wallet(
            id=model.id,
            user_id=model.user_id,
            balance=Decimal(str(model.balance or 0)),
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version or 1,
        )
