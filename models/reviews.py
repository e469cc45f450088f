from core.database import Base
from sqlalchemy import (Column, Integer, ForeignKey, String)
from .mixins import CreatedAtMixin

class Review(Base, CreatedAtMixin):
    __tablename__ = "reviews"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    user_id = Column(Integer, ForeignKey("users.id"))
    product_id = Column(Integer, ForeignKey("products.id"), index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(String)
