# storefront/repos/product_repo.py
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        # zawsze swiezy stan, update-y ida z pominieciem identity map
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def decrement_stock(self, product_id: int, qty: int) -> int:
        #warunkowy update jednym zapytaniem
        #update products set stock = stock - 3, sales = sales + 3 where id = 1 and stock >= 3
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.count_in_stock >= qty,
            )
            .values(
                count_in_stock=ProductModel.count_in_stock - qty,
                total_sales=ProductModel.total_sales + qty,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def increment_stock(self, product_id: int, qty: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.total_sales >= qty,
            )
            .values(
                count_in_stock=ProductModel.count_in_stock + qty,
                total_sales=ProductModel.total_sales - qty,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
