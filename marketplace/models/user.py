"""User model."""

from sqlalchemy import Column, Integer, String

from marketplace.database import Base


class User(Base):
    """Registered account; owns listings."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column("password", String(255), nullable=False)
