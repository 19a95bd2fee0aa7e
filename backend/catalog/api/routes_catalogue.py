import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.api.deps import require_admin
from catalog.config import settings
from catalog.db import get_db
from catalog.models.product import Size
from catalog.repositories.product_repo import ProductFilters, ProductRepository
from catalog.schemas.product_schema import ProductCreate, ProductOut, ProductUpdate
from catalog.services.product_service import ProductService

router = APIRouter(tags=["catalogue"])


def _to_dict(p) -> dict:
    return ProductOut.model_validate(p).to_wire()


@router.get("", summary="List active products")
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    subcategory: Optional[int] = Query(None, description="subcategory id"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0, allow_inf_nan=False),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0, allow_inf_nan=False),
    size: Optional[Size] = Query(None),
    db: Session = Depends(get_db),
):
    repo = ProductRepository(db)
    filters = ProductFilters(
        subcategory_id=subcategory, min_price=min_price, max_price=max_price, size=size
    )
    items, total = repo.list(filters, page=page, size=limit)
    return {
        "success": True,
        "message": "Products retrieved successfully",
        "count": len(items),
        "total": total,
        "totalPages": math.ceil(total / limit),
        "currentPage": page,
        "items": [_to_dict(p) for p in items],
    }


@router.get("/subcategory/{subcategory_id}", summary="List active products in a subcategory")
def list_by_subcategory(subcategory_id: int, db: Session = Depends(get_db)):
    items = ProductRepository(db).list_by_subcategory(subcategory_id)
    return {
        "success": True,
        "message": "Products retrieved successfully",
        "count": len(items),
        "items": [_to_dict(p) for p in items],
    }


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: int, db: Session = Depends(get_db)):
    # inactive products are still reachable by direct link
    p = ProductService(db).get(product_id)
    return {"success": True, "message": "Product retrieved successfully", "item": _to_dict(p)}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create product (admin)",
    dependencies=[Depends(require_admin)],
)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    p = ProductService(db).create(payload, images=payload.images)
    return {"success": True, "message": "Product created successfully", "item": _to_dict(p)}


@router.put(
    "/{product_id}",
    summary="Update product (admin)",
    dependencies=[Depends(require_admin)],
)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    p = ProductService(db).update(product_id, payload)
    return {"success": True, "message": "Product updated successfully", "item": _to_dict(p)}


@router.delete(
    "/{product_id}",
    summary="Delete product (admin)",
    dependencies=[Depends(require_admin)],
)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    ProductService(db).delete(product_id)
    return {"success": True, "message": "Product deleted successfully"}
