# storefront/services/account_service.py
from dataclasses import dataclass
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.refresh_token import RefreshTokenModel
from storefront.data.models.user import UserModel
from storefront.data.transaction import TransactionCoordinator
from storefront.errors import (
    DuplicateEmail,
    DuplicateName,
    HasOrders,
    InternalConsistency,
    NotFound,
    Unauthorized,
    ValidationError,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.comment_repo import CommentRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.refresh_token_repo import RefreshTokenRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger
from storefront.utils.security import generate_token, hash_password, verify_password
from storefront.utils.settings import (
    ACCESS_TOKEN_EXPIRES_SECONDS,
    ACCESS_TOKEN_SECRET,
    REFRESH_TOKEN_EXPIRES_SECONDS,
    REFRESH_TOKEN_SECRET,
)

logger = get_logger(__name__)


def derive_comment_disabled(own_disabled: bool, author_disabled: bool, product_disabled: bool) -> bool:
    """
    Widocznosc komentarza po przywroceniu autora.

    Ukryty komentarz wraca tylko gdy ani autor, ani komentowany produkt
    nie sa wylaczone. Widoczny komentarz zostaje widoczny.
    """
    return own_disabled and (author_disabled or product_disabled)


@dataclass
class AuthResult:
    user: UserModel
    token: str
    refresh_token: str | None = None


class AccountService:
    """
    Use case'y kont: rejestracja z koszykiem, logowanie,
    usuwanie z kaskada oraz wylaczanie/przywracanie (soft delete).
    """

    def __init__(self, run_transaction: TransactionCoordinator):
        self.run_transaction = run_transaction

    # =====================================================
    # COMMANDS
    # =====================================================
    def register(self, name: str, email: str, password: str) -> AuthResult:
        """
        Use Case: Rejestracja.

        User, refresh token i pusty koszyk powstaja w jednej transakcji,
        user bez koszyka nigdy nie zostaje zapisany.
        """
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not email or "@" not in email:
            raise ValidationError("Invalid email")
        if not password:
            raise ValidationError("Password is required")

        existing = self.run_transaction(lambda db: UserRepo(db).get_active_by_email(email))
        if existing:
            raise DuplicateEmail()

        password_hash = hash_password(password)

        def work(db: Session):
            user = UserRepo(db).create_user(
                UserModel(name=name, email=email, password=password_hash)
            )
            refresh_token = self._issue_refresh_token(db, user.id)
            CartRepo(db).create_cart(CartModel(user_id=user.id))
            return user, refresh_token

        try:
            user, refresh_token = self.run_transaction(work)
        except IntegrityError:
            # rownolegla rejestracja na ten sam email wygrala, unikalny indeks odrzucil nasza
            logger.info(f"Concurrent registration for {email} lost the race")
            raise DuplicateEmail()

        logger.info(f"Registered user {user.id} with cart")
        return AuthResult(user=user, token=self._issue_access_token(user.id), refresh_token=refresh_token)

    def login(self, email: str, password: str) -> AuthResult:
        def work(db: Session):
            user = UserRepo(db).get_active_by_email(email)
            if not user or not verify_password(user.password, password):
                raise Unauthorized("Invalid Email or Password")

            #stare refresh tokeny przestaja dzialac
            RefreshTokenRepo(db).delete_for_user(user.id)
            return user, self._issue_refresh_token(db, user.id)

        user, refresh_token = self.run_transaction(work)

        logger.info(f"User {user.id} logged in")
        return AuthResult(user=user, token=self._issue_access_token(user.id), refresh_token=refresh_token)

    def update_profile(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> AuthResult:
        """
        Use Case: Zmiana profilu.

        Puste pola zostaja bez zmian, nowe haslo jest hashowane,
        zwracany jest nowy access token.
        """
        if email and "@" not in email:
            raise ValidationError("Invalid email")

        def work(db: Session) -> UserModel:
            repo = UserRepo(db)
            user = repo.get_user_by_state(user_id, is_disabled=False)
            if not user:
                raise NotFound("User not Found")

            if email and email != user.email:
                if repo.get_active_by_email(email):
                    raise DuplicateEmail()
                user.email = email
            if name and name.strip():
                user.name = name
            if password:
                user.password = hash_password(password)

            db.flush()
            return user

        try:
            user = self.run_transaction(work)
        except IntegrityError:
            logger.info(f"Concurrent update for {email} lost the race")
            raise DuplicateEmail()

        logger.info(f"User {user_id} updated profile")
        return AuthResult(user=user, token=self._issue_access_token(user.id))

    def delete_user(self, user_id: int) -> None:
        """
        Use Case: Twarde usuniecie usera razem z koszykiem i komentarzami.

        Guardy przed transakcja, HasOrders sprawdzany jeszcze raz w transakcji.
        Brak usera lub koszyka w transakcji oznacza zepsute dane, nie zwykle not found.
        """
        def guard(db: Session):
            if not UserRepo(db).get_user(user_id):
                raise NotFound("User not found")
            if OrderRepo(db).has_active_orders(user_id):
                raise HasOrders("Cannot delete user who had ordered")

        self.run_transaction(guard)

        def work(db: Session):
            # zamowienie moglo wejsc miedzy guardem a ta transakcja
            if OrderRepo(db).has_active_orders(user_id):
                raise HasOrders("Cannot delete user who had ordered")

            if UserRepo(db).delete_user(user_id) == 0:
                raise InternalConsistency("Something wrong while deleting user")

            if CartRepo(db).delete_cart_by_user(user_id) == 0:
                raise InternalConsistency("Something wrong while deleting user cart")

            deleted_comments = CommentRepo(db).delete_by_user(user_id)
            RefreshTokenRepo(db).delete_for_user(user_id)
            return deleted_comments

        deleted_comments = self.run_transaction(work)

        logger.info(f"User {user_id} deleted with cart and {deleted_comments} comment(s)")

    def disable_user(self, user_id: int) -> UserModel:
        def work(db: Session) -> UserModel:
            repo = UserRepo(db)
            user = repo.get_user_by_state(user_id, is_disabled=False)
            if not user:
                raise NotFound("User not found")
            if OrderRepo(db).has_active_orders(user_id):
                raise HasOrders("Cannot disable user who had ordered")

            repo.set_disabled(user_id, True)
            CommentRepo(db).disable_by_user(user_id)
            db.refresh(user)
            return user

        user = self.run_transaction(work)
        logger.info(f"User {user_id} disabled")
        return user

    def restore_user(self, user_id: int) -> UserModel:
        def work(db: Session) -> UserModel:
            repo = UserRepo(db)
            user = repo.get_user_by_state(user_id, is_disabled=True)
            if not user:
                raise NotFound("User not found")
            if repo.get_active_by_name(user.name):
                raise DuplicateName("Restore this user will result in duplicated user name")
            if repo.get_active_by_email(user.email):
                raise DuplicateEmail("Restore this user will result in duplicated email")
            if OrderRepo(db).has_active_orders(user_id):
                raise HasOrders("Cannot restore user who had ordered")

            repo.set_disabled(user_id, False)
            db.refresh(user)

            restored = 0
            for comment in CommentRepo(db).list_disabled_by_user(user_id):
                comment.is_disabled = derive_comment_disabled(
                    comment.is_disabled,
                    comment.user.is_disabled,
                    comment.product.is_disabled,
                )
                if not comment.is_disabled:
                    restored += 1
            db.flush()

            logger.info(f"Restored {restored} comment(s) of user {user_id}")
            return user

        user = self.run_transaction(work)
        logger.info(f"User {user_id} restored")
        return user

    # =====================================================
    # QUERY
    # =====================================================
    def get_profile(self, user_id: int) -> UserModel:
        user = self.run_transaction(
            lambda db: UserRepo(db).get_user_by_state(user_id, is_disabled=False)
        )
        if not user:
            raise NotFound("User not Found")
        return user

    def list_users(self, disabled: bool = False) -> List[UserModel]:
        return self.run_transaction(lambda db: UserRepo(db).list_users(is_disabled=disabled))

    # =====================================================
    # TOKENS
    # =====================================================
    def _issue_access_token(self, user_id: int) -> str:
        return generate_token(user_id, ACCESS_TOKEN_SECRET, ACCESS_TOKEN_EXPIRES_SECONDS)

    def _issue_refresh_token(self, db: Session, user_id: int) -> str:
        value = generate_token(user_id, REFRESH_TOKEN_SECRET, REFRESH_TOKEN_EXPIRES_SECONDS)
        RefreshTokenRepo(db).create_token(RefreshTokenModel(user_id=user_id, token_value=value))
        return value
