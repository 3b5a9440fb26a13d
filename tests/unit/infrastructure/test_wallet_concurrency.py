"""
Unit tests for the wallet's optimistic version check.
Two sessions share one file-backed SQLite database so that each holds
its own copy of the wallet row.
"""

import pytest
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from skilllink.domain.models.base import ConcurrencyConflictError
from skilllink.infrastructure.db.database import Base
from skilllink.infrastructure.db.models import UserModel, WalletModel
from skilllink.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'wallets.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def user_id(session_factory):
    """A user whose wallet holds 100."""
    uow = SQLAlchemyUnitOfWork(session_factory())
    user = UserModel(email="employer@example.com", name="Okafor Builds", account_type="employer")
    uow.session.add(user)
    uow.session.flush()
    wallet = uow.payments.get_wallet(user.id)
    wallet.credit(Decimal("100"))
    uow.payments.save_wallet(wallet)
    uow.commit()
    uow.session.close()
    return user.id


def stored_balance(session_factory, user_id) -> Decimal:
    session = session_factory()
    try:
        return session.query(WalletModel).filter(WalletModel.user_id == user_id).one().balance
    finally:
        session.close()


class TestWalletVersionCheck:
    """Test cases for concurrent wallet writers."""

    def test_second_writer_conflicts(self, session_factory, user_id):
        """Two debits of 80 from 100: one lands, the other is a conflict, never an overdraft."""
        first = SQLAlchemyUnitOfWork(session_factory())
        second = SQLAlchemyUnitOfWork(session_factory())
        first_wallet = first.payments.get_wallet(user_id)
        second_wallet = second.payments.get_wallet(user_id)

        first_wallet.debit(Decimal("80"))
        first.payments.save_wallet(first_wallet)
        first.commit()

        second_wallet.debit(Decimal("80"))
        with pytest.raises(ConcurrencyConflictError):
            second.payments.save_wallet(second_wallet)
            second.commit()

        first.session.close()
        second.session.close()
        assert stored_balance(session_factory, user_id) == Decimal("20.00")

    def test_stale_row_on_commit(self, session_factory, user_id):
        """A stale write that only flushes at commit maps to the same conflict."""
        first = SQLAlchemyUnitOfWork(session_factory())
        second = SQLAlchemyUnitOfWork(session_factory())
        stale = second.session.query(WalletModel).filter(WalletModel.user_id == user_id).one()

        wallet = first.payments.get_wallet(user_id)
        wallet.debit(Decimal("30"))
        first.payments.save_wallet(wallet)
        first.commit()

        stale.balance = Decimal("0")
        with pytest.raises(ConcurrencyConflictError):
            second.commit()

        first.session.close()
        second.session.close()
        assert stored_balance(session_factory, user_id) == Decimal("70.00")

    def test_sequential_writers_succeed(self, session_factory, user_id):
        for amount in ("10", "15"):
            uow = SQLAlchemyUnitOfWork(session_factory())
            wallet = uow.payments.get_wallet(user_id)
            wallet.debit(Decimal(amount))
            uow.payments.save_wallet(wallet)
            uow.commit()
            uow.session.close()

        assert stored_balance(session_factory, user_id) == Decimal("75.00")
