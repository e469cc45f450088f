from core.database import Base
from sqlalchemy import (Column, Integer, String)

class User(Base):
    __tablename__ = "users"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    # Uniqueness lives in the table so concurrent registrations cannot both win
    username = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    first_name = Column(String)
    last_name = Column(String)
    address = Column(String)
    city = Column(String)
    state = Column(String)
    zip = Column(String)
    country = Column(String)
    phone = Column(String)
