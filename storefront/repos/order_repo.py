# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        # refresh doczytuje tez eager relacje (user, items)
        self.db.refresh(order)
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders_for_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.id.desc())
            ).scalars()
        )

    def list_all_orders(self) -> list[OrderModel]:
        return list(
            self.db.execute(select(OrderModel).order_by(OrderModel.id.desc())).scalars()
        )

    def has_active_orders(self, user_id: int) -> bool:
        found = self.db.execute(
            select(OrderModel.id)
            .where(OrderModel.user_id == user_id, OrderModel.is_disabled.is_(False))
            .limit(1)
        ).first()
        return found is not None

    def save(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order
