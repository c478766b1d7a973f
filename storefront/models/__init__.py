from storefront.models.product import Product
from storefront.models.store import Store
from storefront.models.user import User

__all__ = [
    "Product",
    "Store",
    "User",
]
