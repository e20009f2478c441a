from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, Numeric, String

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    image = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    # modyfikowane tylko przez InventoryLedger
    count_in_stock = Column(Integer, nullable=False, default=0)
    total_sales = Column(Integer, nullable=False, default=0)

    is_disabled = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("count_in_stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("total_sales >= 0", name="ck_products_sales_non_negative"),
    )
