# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.transaction import TransactionCoordinator
from storefront.domain.schemas import OrderItemIn, PriceBreakdown, Principal, ShippingAddress
from storefront.errors import EmptyOrder, Forbidden, NotFound, ValidationError
from storefront.repos.order_repo import OrderRepo
from storefront.services.inventory_service import InventoryLedger
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.

    commands (create, mark_paid, mark_delivered) ida przez TransactionCoordinator,
    query (get, list) tylko odczyt.
    """

    def __init__(
        self,
        run_transaction: TransactionCoordinator,
        ledger: InventoryLedger | None = None,
    ):
        self.run_transaction = run_transaction
        self.ledger = ledger or InventoryLedger()

    #commands
    def create_order(
        self,
        user_id: int,
        order_items: List[OrderItemIn],
        shipping_address: ShippingAddress,
        payment_method: str,
        prices: PriceBreakdown,
    ) -> OrderModel:
        """
        Use Case: Złożenie zamówienia.

        1. Odrzuca puste zamowienie zanim otworzy transakcje
        2. Rezerwuje kazda pozycje po kolei, pierwszy brak towaru przerywa calosc
        3. Zapisuje zamowienie ze snapshotem pozycji
        """
        if not order_items:
            raise EmptyOrder()

        for item in order_items:
            if item.qty < 1:
                raise ValidationError(
                    f"Quantity for product {item.product_id} must be at least 1"
                )

        def work(db: Session) -> OrderModel:
            snapshots = []
            for item in order_items:
                product = self.ledger.reserve(db, item.product_id, item.qty)
                snapshots.append(
                    OrderItemModel(
                        product_id=product.id,
                        name=product.name,
                        image=product.image,
                        price=product.price,
                        qty=item.qty,
                    )
                )

            order = OrderModel(
                user_id=user_id,
                address=shipping_address.address,
                city=shipping_address.city,
                postal_code=shipping_address.postal_code,
                country=shipping_address.country,
                payment_method=payment_method,
                items_price=prices.items_price,
                tax_price=prices.tax_price,
                shipping_price=prices.shipping_price,
                total_price=prices.total_price,
                is_paid=False,
                is_delivered=False,
                created_at=datetime.now(timezone.utc),
                items=snapshots,
            )
            return OrderRepo(db).create_order(order)

        created = self.run_transaction(work)

        logger.info(
            f"Order {created.id} created for user {user_id} "
            f"with {len(order_items)} item(s)"
        )
        return created

    def mark_paid(self, order_id: int, payment_result: Dict[str, Any]) -> OrderModel:
        def work(db: Session) -> OrderModel:
            repo = OrderRepo(db)
            order = repo.get_order(order_id)
            if not order:
                raise NotFound("Order Not Found")

            order.is_paid = True
            order.paid_at = datetime.now(timezone.utc)
            order.payment_result = dict(payment_result)
            return repo.save(order)

        order = self.run_transaction(work)
        logger.info(f"Order {order_id} marked as paid")
        return order

    def mark_delivered(self, order_id: int) -> OrderModel:
        def work(db: Session) -> OrderModel:
            repo = OrderRepo(db)
            order = repo.get_order(order_id)
            if not order:
                raise NotFound("Order Not Found")

            order.is_delivered = True
            order.delivered_at = datetime.now(timezone.utc)
            return repo.save(order)

        order = self.run_transaction(work)
        logger.info(f"Order {order_id} marked as delivered")
        return order

    #query - odczyt
    def get_order(self, order_id: int, principal: Principal) -> OrderModel:
        order = self.run_transaction(lambda db: OrderRepo(db).get_order(order_id))

        if not order:
            raise NotFound("Order Not Found")

        if not principal.is_admin and order.user_id != principal.id:
            raise Forbidden("Not authorized to view this order")

        return order

    def list_orders_for_user(self, user_id: int) -> List[OrderModel]:
        return self.run_transaction(lambda db: OrderRepo(db).list_orders_for_user(user_id))

    def list_all_orders(self) -> List[OrderModel]:
        return self.run_transaction(lambda db: OrderRepo(db).list_all_orders())
