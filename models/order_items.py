from core.database import Base
from sqlalchemy import (Column, Integer, ForeignKey, Numeric)
from sqlalchemy.orm import relationship

class OrderItem(Base):
    __tablename__ = "order_items"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    order_id = Column(Integer, ForeignKey("orders.id"), index=True)
    product_id = Column(Integer, ForeignKey("products.id"))

    #relationships
    order = relationship("Order", back_populates="items")

    quantity = Column(Integer, nullable=False)
    # Unit price at purchase time, never re-read from the product
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
