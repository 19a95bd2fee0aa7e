from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import and_, false, func
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from catalog.db import storable_id
from catalog.models.product import Product, ProductVariation


@dataclass
class ProductFilters:
    """Public listing filters; every set field narrows the result (AND)."""

    subcategory_id: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    size: Optional[str] = None


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self, query: Query) -> Query:
        # subcategory is a LEFT OUTER join, so a dangling reference still returns the product
        return query.options(
            joinedload(Product.subcategory),
            selectinload(Product.variations),
        )

    def _newest_first(self, query: Query) -> Query:
        return query.order_by(Product.created_at.desc(), Product.id.desc())

    def _active(self, filters: ProductFilters) -> Query:
        query = self.db.query(Product).filter(Product.is_active == True)  # noqa: E712
        if filters.subcategory_id is not None:
            if storable_id(filters.subcategory_id):
                query = query.filter(Product.subcategory_id == filters.subcategory_id)
            else:
                query = query.filter(false())

        # both bounds apply to the same variation
        price_range = []
        if filters.min_price is not None:
            price_range.append(ProductVariation.price >= filters.min_price)
        if filters.max_price is not None:
            price_range.append(ProductVariation.price <= filters.max_price)
        if price_range:
            query = query.filter(Product.variations.any(and_(*price_range)))

        if filters.size:
            size = getattr(filters.size, "value", filters.size)
            query = query.filter(Product.variations.any(ProductVariation.size == size))
        return query

    def get(self, product_id: int) -> Optional[Product]:
        """Fetch by id regardless of is_active."""
        if not storable_id(product_id):
            return None
        return (
            self._with_relations(self.db.query(Product))
            .filter(Product.id == product_id)
            .first()
        )

    def list(
        self, filters: Optional[ProductFilters] = None, page: int = 1, size: int = 10
    ) -> Tuple[List[Product], int]:
        filters = filters or ProductFilters()
        page = max(1, page)
        query = self._active(filters)
        total = query.with_entities(func.count(Product.id)).scalar() or 0
        items = (
            self._newest_first(self._with_relations(query))
            .offset((page - 1) * size)
            .limit(size)
            .all()
        )
        return items, total

    def list_by_subcategory(self, subcategory_id: int) -> List[Product]:
        query = self._active(ProductFilters(subcategory_id=subcategory_id))
        return self._newest_first(self._with_relations(query)).all()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()
