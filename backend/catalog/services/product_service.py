import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import structlog
from sqlalchemy.orm import Session

from catalog.errors import CatalogError, ProductNotFound, SubcategoryNotFound, ValidationFailed
from catalog.models.product import IMAGE_URL_PATTERN, Product, ProductVariation
from catalog.repositories.category_repo import SubcategoryRepository
from catalog.repositories.product_repo import ProductRepository
from catalog.schemas.product_schema import ProductCreate, ProductUpdate, VariationIn
from catalog.services.variation_validator import validate_variations
from catalog.utils.transactions import unit_of_work

logger = structlog.get_logger()

_IMAGE_URL = re.compile(IMAGE_URL_PATTERN)


class ProductService:
    """
    The only writer of product rows. Every check runs before the first
    write, so a rejected create/update leaves the store as it was.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.subcategories = SubcategoryRepository(db)

    def _rejected(self, error: CatalogError, operation: str, **context) -> CatalogError:
        logger.warning(
            "Product mutation rejected",
            operation=operation,
            error=error.kind,
            **context,
        )
        return error

    def _require_subcategory(self, subcategory_id: int, operation: str) -> None:
        if not self.subcategories.exists(subcategory_id):
            raise self._rejected(
                SubcategoryNotFound(subcategory_id), operation, subcategory_id=subcategory_id
            )

    def _check_variations(self, variations, required: bool, operation: str) -> None:
        check = validate_variations(variations, required=required)
        if not check.ok:
            raise self._rejected(check.error, operation)

    def _check_images(self, images: Iterable[str], operation: str) -> List[str]:
        images = list(images)
        bad = [url for url in images if not isinstance(url, str) or not _IMAGE_URL.match(url)]
        if bad:
            raise self._rejected(
                ValidationFailed("Image must be a valid URL", details={"images": bad}),
                operation,
            )
        return images

    def _build_variations(self, variations: List[VariationIn]) -> List[ProductVariation]:
        return [
            ProductVariation(
                position=position,
                size=getattr(v.size, "value", v.size),
                price=float(v.price),
                stock=int(v.stock),
            )
            for position, v in enumerate(variations)
        ]

    def get(self, product_id: int) -> Product:
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def create(self, payload: ProductCreate, images: Optional[Iterable[str]] = None) -> Product:
        """
        images: URLs already resolved by the upload layer; falls back to
        payload.images. May be empty.
        """
        self._require_subcategory(payload.subcategory_id, "create")
        self._check_variations(payload.variations, required=True, operation="create")
        images = self._check_images(payload.images if images is None else images, "create")

        product = Product(
            name=payload.name,
            description=payload.description,
            subcategory_id=payload.subcategory_id,
            images=images,
            brand=payload.brand,
            is_active=payload.is_active,
        )
        product.variations = self._build_variations(payload.variations)

        with unit_of_work(self.db):
            self.products.add(product)
            product_id = product.id

        logger.info("Product created", product_id=product_id, variations=len(payload.variations))
        return self.get(product_id)

    def update(
        self,
        product_id: int,
        payload: ProductUpdate,
        images: Optional[Iterable[str]] = None,
    ) -> Product:
        product = self.products.get(product_id)
        if product is None:
            raise self._rejected(ProductNotFound(product_id), "update", product_id=product_id)

        if payload.subcategory_id is not None:
            self._require_subcategory(payload.subcategory_id, "update")
        self._check_variations(payload.variations, required=False, operation="update")
        if images is None:
            images = payload.images
        if images is not None:
            images = self._check_images(images, "update")

        with unit_of_work(self.db):
            # replace-if-given fields
            if payload.name is not None:
                product.name = payload.name
            if payload.subcategory_id is not None:
                product.subcategory_id = payload.subcategory_id
            if payload.variations is not None:
                product.variations = self._build_variations(payload.variations)
            if images is not None:
                product.images = images
            # presence-checked fields: false, "" and null overwrite
            for field in ("description", "brand", "is_active"):
                if payload.supplied(field):
                    setattr(product, field, getattr(payload, field))
            product.updated_at = datetime.now(timezone.utc)

        logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(payload.model_fields_set | ({"images"} if images is not None else set())),
        )
        return self.get(product_id)

    def delete(self, product_id: int) -> None:
        product = self.products.get(product_id)
        if product is None:
            raise self._rejected(ProductNotFound(product_id), "delete", product_id=product_id)

        with unit_of_work(self.db):
            self.products.delete(product)

        logger.info("Product deleted", product_id=product_id)
