# backend/catalog/schemas/product_schema.py
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, StringConstraints, field_validator

from catalog.models.product import (
    BRAND_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    IMAGE_URL_PATTERN,
    NAME_MAX_LENGTH,
    Size,
)
from catalog.schemas.common import CamelModel

ProductName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]
Description = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LENGTH)
]
Brand = Annotated[str, StringConstraints(strip_whitespace=True, max_length=BRAND_MAX_LENGTH)]
ImageUrl = Annotated[str, StringConstraints(strip_whitespace=True, pattern=IMAGE_URL_PATTERN)]


class VariationIn(CamelModel):
    size: Size
    price: float = Field(..., ge=0, allow_inf_nan=False)
    stock: int = Field(0, ge=0)


class ProductCreate(CamelModel):
    name: ProductName
    description: Optional[Description] = None
    subcategory_id: int = Field(..., alias="subcategory")
    # absent or empty is reported as EmptyVariations by the service
    variations: Optional[List[VariationIn]] = None
    images: List[ImageUrl] = Field(default_factory=list)
    brand: Optional[Brand] = None
    is_active: bool = True


class ProductUpdate(CamelModel):
    """
    Partial update. Which keys the caller actually sent is read from
    `model_fields_set`, so `{"isActive": false}` and `{}` differ.
    """

    name: Optional[ProductName] = None
    description: Optional[Description] = None
    subcategory_id: Optional[int] = Field(None, alias="subcategory")
    variations: Optional[List[VariationIn]] = None
    images: Optional[List[ImageUrl]] = None
    brand: Optional[Brand] = None
    is_active: Optional[bool] = None

    @field_validator("is_active")
    @classmethod
    def _is_active_not_null(cls, value):
        if value is None:
            raise ValueError("isActive must be true or false")
        return value

    def supplied(self, field: str) -> bool:
        return field in self.model_fields_set


class VariationOut(CamelModel):
    size: str
    price: float
    stock: int


class SubcategoryOut(CamelModel):
    id: int
    name: Optional[str] = None
    category_id: Optional[int] = None


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    subcategory_id: int
    subcategory: Optional[SubcategoryOut] = None
    images: List[str] = Field(default_factory=list)
    variations: List[VariationOut] = Field(default_factory=list)
    brand: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
