# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_user, require_admin
from storefront.data.transaction import TransactionCoordinator, get_coordinator
from storefront.domain.schemas import OrderCreate, OrderOut, PaymentResultIn, Principal
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(run_transaction: TransactionCoordinator = Depends(get_coordinator)):
    return OrderService(run_transaction)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    principal: Principal = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Tworzy zamówienie i rezerwuje towar w jednej transakcji.
    """
    order = svc.create_order(
        user_id=principal.id,
        order_items=payload.order_items,
        shipping_address=payload.shipping_address,
        payment_method=payload.payment_method,
        prices=payload.prices(),
    )
    return OrderOut.from_model(order)


@router.get("/all", response_model=List[OrderOut])
def list_all_orders(
    _: Principal = Depends(require_admin),
    svc: OrderService = Depends(get_service),
):
    return [OrderOut.from_model(o) for o in svc.list_all_orders()]


@router.get("", response_model=List[OrderOut])
def list_my_orders(
    principal: Principal = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return [OrderOut.from_model(o) for o in svc.list_orders_for_user(principal.id)]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    principal: Principal = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return OrderOut.from_model(svc.get_order(order_id, principal))


@router.patch("/{order_id}/pay", response_model=OrderOut)
def pay_order(
    order_id: int,
    payload: PaymentResultIn,
    _: Principal = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return OrderOut.from_model(svc.mark_paid(order_id, payload.model_dump()))


@router.patch("/{order_id}/delivered", response_model=OrderOut)
def deliver_order(
    order_id: int,
    _: Principal = Depends(require_admin),
    svc: OrderService = Depends(get_service),
):
    return OrderOut.from_model(svc.mark_delivered(order_id))
