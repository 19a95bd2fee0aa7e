import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from catalog.db import Base
from catalog.models.category import Subcategory  # noqa: F401


def _utcnow():
    return datetime.now(timezone.utc)


class Size(str, enum.Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"


SIZES = frozenset(s.value for s in Size)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
BRAND_MAX_LENGTH = 50
IMAGE_URL_PATTERN = r"^https?://.+"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)
    # no FK constraint: subcategories are owned elsewhere and may disappear
    subcategory_id = Column(Integer, nullable=False, index=True)
    images = Column(JSON, nullable=False, default=list)
    brand = Column(String(BRAND_MAX_LENGTH), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    variations = relationship(
        "ProductVariation",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariation.position",
    )
    subcategory = relationship(
        "Subcategory",
        primaryjoin="foreign(Product.subcategory_id) == Subcategory.id",
        viewonly=True,
        uselist=False,
    )

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"


class ProductVariation(Base):
    __tablename__ = "product_variations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    size = Column(String(8), nullable=False, index=True)  # one of Size
    price = Column(Float, nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="variations")

    def __repr__(self):
        return f"<ProductVariation product_id={self.product_id} size={self.size}>"
