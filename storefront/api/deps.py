# storefront/api/deps.py
from fastapi import Depends, Header

from storefront.data.transaction import TransactionCoordinator, get_coordinator
from storefront.domain.schemas import Principal
from storefront.errors import Forbidden, Unauthorized
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import decode_token
from storefront.utils.settings import ACCESS_TOKEN_SECRET


def get_current_user(
    authorization: str | None = Header(default=None),
    run_transaction: TransactionCoordinator = Depends(get_coordinator),
) -> Principal:
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthorized("Not authorized, no token")

    user_id = decode_token(authorization[len("Bearer "):], ACCESS_TOKEN_SECRET)

    user = run_transaction(
        lambda db: UserRepo(db).get_user_by_state(user_id, is_disabled=False)
    )
    if not user:
        raise Unauthorized("Not authorized, user not found")

    return Principal(id=user.id, is_admin=user.is_admin)


def require_admin(principal: Principal = Depends(get_current_user)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Not authorized as an Admin")
    return principal
