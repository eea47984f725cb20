"""Listing model."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text

from marketplace.database import Base


class Listing(Base):
    """Marketplace listing created by a user."""

    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False, index=True)
    price = Column(Float, nullable=False, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image = Column(String(512), nullable=True)  # public URL of the uploaded image
