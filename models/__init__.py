from models.users import User
from models.categories import Category
from models.products import Product
from models.cart_items import CartItem
from models.orders import Order
from models.order_items import OrderItem
from models.reviews import Review

__all__ = ["User", "Category", "Product", "CartItem", "Order", "OrderItem", "Review"]
