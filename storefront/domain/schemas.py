# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.utils.settings import DEFAULT_AVATAR_URL


class Principal(BaseModel):
    """Zalogowany uzytkownik wyciagniety z tokena."""

    id: int
    is_admin: bool = False


# =====================================================
# ORDERS
# =====================================================
class OrderItemIn(BaseModel):
    """Pozycja zamowienia (request), cena i nazwa brane z produktu."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    qty: int = Field(..., description="Ilosc, walidowana w OrderService")


class ShippingAddress(BaseModel):
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class PriceBreakdown(BaseModel):
    items_price: Decimal = Field(Decimal("0.00"), ge=0)
    tax_price: Decimal = Field(Decimal("0.00"), ge=0)
    shipping_price: Decimal = Field(Decimal("0.00"), ge=0)
    total_price: Decimal = Field(Decimal("0.00"), ge=0)


class OrderCreate(PriceBreakdown):
    """Schema dla tworzenia zamówienia."""

    order_items: List[OrderItemIn]
    shipping_address: ShippingAddress
    payment_method: str = Field("Paypal", min_length=1)

    def prices(self) -> PriceBreakdown:
        return PriceBreakdown(
            items_price=self.items_price,
            tax_price=self.tax_price,
            shipping_price=self.shipping_price,
            total_price=self.total_price,
        )


class PaymentResultIn(BaseModel):
    """Odpowiedz bramki platnosci, zapisywana bez interpretacji."""

    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


class OrderItemOut(BaseModel):
    product_id: int
    name: str
    image: str | None = None
    price: Decimal
    qty: int

    model_config = ConfigDict(from_attributes=True)


class OrderUserOut(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int | None
    user: OrderUserOut | None = None
    order_items: List[OrderItemOut]
    shipping_address: ShippingAddress
    payment_method: str
    items_price: Decimal
    tax_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    is_paid: bool
    paid_at: datetime | None = None
    payment_result: dict[str, Any] | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_model(cls, order) -> "OrderOut":
        return cls(
            id=order.id,
            user_id=order.user_id,
            user=OrderUserOut.model_validate(order.user) if order.user else None,
            order_items=[OrderItemOut.model_validate(i) for i in order.items],
            shipping_address=ShippingAddress(
                address=order.address,
                city=order.city,
                postal_code=order.postal_code,
                country=order.country,
            ),
            payment_method=order.payment_method,
            items_price=order.items_price,
            tax_price=order.tax_price,
            shipping_price=order.shipping_price,
            total_price=order.total_price,
            is_paid=order.is_paid,
            paid_at=order.paid_at,
            payment_result=order.payment_result,
            is_delivered=order.is_delivered,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
        )


# =====================================================
# USERS
# =====================================================
class RegisterIn(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    name: str
    email: str
    avatar_url: str
    is_admin: bool
    is_disabled: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("avatar_url", mode="before")
    @classmethod
    def default_avatar(cls, value):
        # brak avatara -> domyslny obrazek
        return value or DEFAULT_AVATAR_URL


class ProfileUpdateIn(BaseModel):
    """Puste pola zostaja bez zmian."""

    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    password: str | None = None


class ProfileOut(UserOut):
    token: str


class AuthOut(UserOut):
    token: str
    refresh_token: str


class MessageOut(BaseModel):
    message: str
