from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_user, require_admin
from storefront.data.transaction import TransactionCoordinator, get_coordinator
from storefront.domain.schemas import (
    AuthOut,
    LoginIn,
    MessageOut,
    Principal,
    ProfileOut,
    ProfileUpdateIn,
    RegisterIn,
    UserOut,
)
from storefront.services.account_service import AccountService, AuthResult

router = APIRouter(prefix="/api/users", tags=["users"])


def get_service(run_transaction: TransactionCoordinator = Depends(get_coordinator)):
    return AccountService(run_transaction)


def _auth_out(result: AuthResult) -> AuthOut:
    return AuthOut(
        **UserOut.model_validate(result.user).model_dump(),
        token=result.token,
        refresh_token=result.refresh_token,
    )


@router.post("", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, svc: AccountService = Depends(get_service)):
    return _auth_out(svc.register(payload.name, payload.email, payload.password))


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, svc: AccountService = Depends(get_service)):
    return _auth_out(svc.login(payload.email, payload.password))


@router.get("/profile", response_model=UserOut)
def profile(
    principal: Principal = Depends(get_current_user),
    svc: AccountService = Depends(get_service),
):
    return svc.get_profile(principal.id)


@router.put("/profile", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdateIn,
    principal: Principal = Depends(get_current_user),
    svc: AccountService = Depends(get_service),
):
    result = svc.update_profile(
        principal.id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return ProfileOut(**UserOut.model_validate(result.user).model_dump(), token=result.token)


@router.get("", response_model=List[UserOut])
def list_users(
    _: Principal = Depends(require_admin),
    svc: AccountService = Depends(get_service),
):
    return svc.list_users(disabled=False)


@router.get("/disabled", response_model=List[UserOut])
def list_disabled_users(
    _: Principal = Depends(require_admin),
    svc: AccountService = Depends(get_service),
):
    return svc.list_users(disabled=True)


@router.patch("/{user_id}/disable", response_model=UserOut)
def disable_user(
    user_id: int,
    _: Principal = Depends(require_admin),
    svc: AccountService = Depends(get_service),
):
    return svc.disable_user(user_id)


@router.patch("/{user_id}/restore", response_model=UserOut)
def restore_user(
    user_id: int,
    _: Principal = Depends(require_admin),
    svc: AccountService = Depends(get_service),
):
    return svc.restore_user(user_id)


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: int,
    _: Principal = Depends(require_admin),
    svc: AccountService = Depends(get_service),
):
    svc.delete_user(user_id)
    return MessageOut(message="User has been deleted")
