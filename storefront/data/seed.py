# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import init_db
from storefront.data.models.product import ProductModel
from storefront.data.transaction import run_transaction
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.account_service import AccountService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "count_in_stock": 25},
    {"name": "Mouse", "price": Decimal("49.50"), "count_in_stock": 100},
    {"name": "Monitor", "price": Decimal("899.00"), "count_in_stock": 5},
]


def seed(admin_email: str = "admin@example.com", admin_password: str = "admin"):
    init_db()

    # not forcing: only seed if empty
    if run_transaction(lambda db: UserRepo(db).get_active_by_email(admin_email)):
        return

    admin = AccountService(run_transaction).register("Admin", admin_email, admin_password).user

    def work(db):
        UserRepo(db).get_user(admin.id).is_admin = True
        repo = ProductRepo(db)
        for p in PRODUCTS:
            repo.create_product(ProductModel(**p))

    run_transaction(work)
    logger.info(f"Seeded admin {admin_email} and {len(PRODUCTS)} products")


if __name__ == "__main__":
    seed()
