from core.database import Base
from sqlalchemy import (Column, Integer, String)
from sqlalchemy.orm import relationship

class Category(Base):
    __tablename__ = "categories"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #relationships
    products = relationship("Product", back_populates="category")

    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    description = Column(String)
    image = Column(String)
