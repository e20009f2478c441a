# storefront/services/inventory_service.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.errors import InsufficientStock, ValidationError
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryLedger:
    """
    Jedyne miejsce, ktore zmienia count_in_stock i total_sales.

    Sprawdzenie stanu i zmiana to jeden warunkowy UPDATE w transakcji
    wywolujacego, wiec dwa rownolegle zamowienia nie zejda ponizej zera.
    0 zmienionych wierszy = brak towaru, transakcja musi byc przerwana.
    """

    def reserve(self, db: Session, product_id: int, qty: int) -> ProductModel:
        if qty < 1:
            raise ValidationError(f"Quantity for product {product_id} must be at least 1")

        repo = ProductRepo(db)
        rowcount = repo.decrement_stock(product_id, qty)

        if rowcount == 0:
            product = repo.get_product(product_id)
            if not product:
                raise InsufficientStock(product_id, f"Product {product_id} not found")
            logger.info(
                f"Insufficient stock for product {product_id}: "
                f"requested {qty}, available {product.count_in_stock}"
            )
            raise InsufficientStock(
                product_id,
                f"Ordered quantity of {product.name} exceeds available quantity",
            )

        logger.info(f"Reserved {qty} of product {product_id}")
        return repo.get_product(product_id)

    def release(self, db: Session, product_id: int, qty: int) -> ProductModel:
        if qty < 1:
            raise ValidationError(f"Quantity for product {product_id} must be at least 1")

        repo = ProductRepo(db)
        if repo.increment_stock(product_id, qty) == 0:
            raise ValidationError(
                f"Cannot release {qty} of product {product_id} beyond its sales"
            )

        logger.info(f"Released {qty} of product {product_id}")
        return repo.get_product(product_id)
