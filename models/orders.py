from core.database import Base
from sqlalchemy.orm import relationship
from sqlalchemy import (Column, Integer, ForeignKey, Numeric, String)
from .mixins import CreatedAtMixin

class Order(Base, CreatedAtMixin):
    __tablename__ = "orders"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    user_id = Column(Integer, ForeignKey("users.id"), index=True)

    #relationships
    items = relationship("OrderItem", back_populates="order")

    total = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(String, nullable=False, default="pending")

    shipping_address = Column(String)
    shipping_city = Column(String)
    shipping_state = Column(String)
    shipping_zip = Column(String)
    shipping_country = Column(String)
