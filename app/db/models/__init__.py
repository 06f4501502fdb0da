from app.db.models.role import Role, user_roles
from app.db.models.user import User
from app.db.models.team import Team
from app.db.models.customer import Address, Customer
from app.db.models.product import Product, ProductCategory
from app.db.models.quotation import Item, Quotation

__all__ = [
    "Role",
    "user_roles",
    "User",
    "Team",
    "Address",
    "Customer",
    "Product",
    "ProductCategory",
    "Item",
    "Quotation",
]
