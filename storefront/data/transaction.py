# storefront/data/transaction.py
from typing import Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from storefront.data.database import SessionLocal
from storefront.utils.logging import get_logger
from storefront.utils.settings import TRANSACTION_MAX_ATTEMPTS

logger = get_logger(__name__)

T = TypeVar("T")
Work = Callable[[Session], T]

# serialization_failure, deadlock_detected
_PG_TRANSIENT_CODES = frozenset({"40001", "40P01"})


def is_transient_conflict(exc: BaseException) -> bool:
    """Konflikt bazy, po ktorym cala jednostke pracy mozna bezpiecznie powtorzyc."""
    if not isinstance(exc, DBAPIError):
        return False

    code = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if code in _PG_TRANSIENT_CODES:
        return True

    return isinstance(exc, OperationalError) and "database is locked" in str(exc.orig)


class TransactionCoordinator:
    """
    Wykonuje jednostke pracy atomowo: wszystko albo nic.

    work(session) dostaje sesje w otwartej transakcji, commit po sukcesie,
    rollback przy kazdym wyjatku (takze z commita) i ponowne rzucenie bledu.
    Powtarzane sa tylko przejsciowe konflikty bazy, nigdy bledy biznesowe.
    """

    def __init__(
        self,
        session_factory: sessionmaker = SessionLocal,
        max_attempts: int = TRANSACTION_MAX_ATTEMPTS,
    ):
        self.session_factory = session_factory
        self.max_attempts = max_attempts

    def __call__(self, work: Work) -> T:
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception(is_transient_conflict),
            before_sleep=lambda state: logger.warning(
                f"Transient conflict, retrying transaction "
                f"(attempt {state.attempt_number}/{self.max_attempts})"
            ),
        )
        return retrying(self._run_once, work)

    def _run_once(self, work: Work) -> T:
        session = self.session_factory()
        try:
            session.begin()
            result = work(session)
            session.commit()
            return result
        except Exception as e:
            session.rollback()
            logger.warning(f"Transaction aborted: {type(e).__name__}: {e}")
            raise
        finally:
            session.close()


_default_coordinator = TransactionCoordinator()


def run_transaction(work: Work) -> T:
    return _default_coordinator(work)


def get_coordinator() -> TransactionCoordinator:
    """FastAPI dependency, podmieniana w testach."""
    return _default_coordinator
