"""Tests for the transaction coordinator."""

import sqlite3
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront.data.models.product import ProductModel
from storefront.data.transaction import TransactionCoordinator, is_transient_conflict
from storefront.errors import InsufficientStock


def _locked_error():
    return OperationalError("UPDATE products", {}, sqlite3.OperationalError("database is locked"))


class TestRunTransaction:
    def test_commits_and_returns_result(self, run_transaction, count_rows):
        def work(db):
            db.add(ProductModel(name="Mouse", price=Decimal("49.50"), count_in_stock=3))
            return "done"

        assert run_transaction(work) == "done"
        assert count_rows(ProductModel, name="Mouse") == 1

    def test_rolls_back_every_write_on_failure(self, run_transaction, count_rows):
        def work(db):
            db.add(ProductModel(name="Mouse", price=Decimal("49.50"), count_in_stock=3))
            db.flush()
            db.add(ProductModel(name="Monitor", price=Decimal("899.00"), count_in_stock=1))
            db.flush()
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_transaction(work)

        assert count_rows(ProductModel) == 0

    def test_rolls_back_when_commit_fails(self, run_transaction, count_rows):
        def work(db):
            db.add(ProductModel(name="Mouse", price=Decimal("49.50"), count_in_stock=-1))

        with pytest.raises(IntegrityError):
            run_transaction(work)

        assert count_rows(ProductModel) == 0

    def test_retries_transient_conflict(self, run_transaction):
        calls = []

        def work(db):
            calls.append(1)
            if len(calls) < 2:
                raise _locked_error()
            return "done"

        assert run_transaction(work) == "done"
        assert len(calls) == 2

    def test_gives_up_after_max_attempts(self, session_factory):
        calls = []
        coordinator = TransactionCoordinator(session_factory, max_attempts=2)

        def work(db):
            calls.append(1)
            raise _locked_error()

        with pytest.raises(OperationalError):
            coordinator(work)
        assert len(calls) == 2

    def test_business_failure_is_not_retried(self, run_transaction):
        calls = []

        def work(db):
            calls.append(1)
            raise InsufficientStock(1)

        with pytest.raises(InsufficientStock):
            run_transaction(work)
        assert len(calls) == 1


class TestIsTransientConflict:
    def test_sqlite_lock(self):
        assert is_transient_conflict(_locked_error())

    def test_postgres_serialization_failure(self):
        class PgError(Exception):
            pgcode = "40001"

        assert is_transient_conflict(OperationalError("UPDATE", {}, PgError()))

    def test_other_errors(self):
        assert not is_transient_conflict(ValueError("nope"))
        assert not is_transient_conflict(
            OperationalError("SELECT", {}, sqlite3.OperationalError("no such table: x"))
        )
