from core.database import Base
from sqlalchemy import (Column, Integer, String, ForeignKey, Numeric, Float, Boolean, JSON)
from sqlalchemy.orm import relationship

class Product(Base):
    __tablename__ = "products"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    #relationships
    category = relationship("Category", back_populates="products")

    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    description = Column(String)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    sale_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    image = Column(String)
    images = Column(JSON, default=list)
    featured = Column(Boolean, default=False, nullable=False)
    new_arrival = Column(Boolean, default=False, nullable=False)
    # Derived from reviews
    rating = Column(Float, default=0, nullable=False)
    num_reviews = Column(Integer, default=0, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
