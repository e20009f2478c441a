"""Pytest fixtures for storefront tests."""

from decimal import Decimal

import pytest

from storefront.data.database import init_db, make_engine, make_session_factory
from storefront.data.models.product import ProductModel
from storefront.data.transaction import TransactionCoordinator
from storefront.repos.product_repo import ProductRepo
from storefront.services.account_service import AccountService
from storefront.services.order_service import OrderService


@pytest.fixture
def engine(tmp_path):
    """Plikowa baza SQLite, zeby watki mialy osobne polaczenia."""
    engine = make_engine(f"sqlite:///{tmp_path / 'storefront.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def run_transaction(session_factory):
    return TransactionCoordinator(session_factory)


@pytest.fixture
def order_service(run_transaction):
    return OrderService(run_transaction)


@pytest.fixture
def account_service(run_transaction):
    return AccountService(run_transaction)


@pytest.fixture
def make_product(run_transaction):
    def _make(name="Keyboard", price="199.99", count_in_stock=10, is_disabled=False):
        product = run_transaction(
            lambda db: ProductRepo(db).create_product(
                ProductModel(
                    name=name,
                    price=Decimal(price),
                    count_in_stock=count_in_stock,
                    is_disabled=is_disabled,
                )
            )
        )
        return product.id

    return _make


@pytest.fixture
def fetch(session_factory):
    """Swiezy odczyt obiektu z bazy poza jakakolwiek transakcja serwisu."""

    def _fetch(model, pk):
        with session_factory() as db:
            return db.get(model, pk)

    return _fetch


@pytest.fixture
def count_rows(session_factory):
    def _count(model, **filters):
        with session_factory() as db:
            return db.query(model).filter_by(**filters).count()

    return _count


@pytest.fixture
def user_id(account_service):
    return account_service.register("Alice", "alice@example.com", "secret").user.id

