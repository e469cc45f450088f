from core.database import Base
from sqlalchemy import (Column, Integer, ForeignKey, UniqueConstraint)

class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),
    )

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    # The product is resolved per row by the storage layer, a dangling id is tolerated
    product_id = Column(Integer, ForeignKey("products.id"))

    quantity = Column(Integer, nullable=False)
