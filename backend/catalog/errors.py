"""Catalog error kinds.

Every failure the catalog reports to a caller is a CatalogError subclass.
`kind` is the stable name clients branch on; `status_code` is what the
HTTP layer answers with.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    kind = "CatalogError"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProductNotFound(CatalogError):
    kind = "NotFound"
    status_code = 404

    def __init__(self, product_id):
        super().__init__("Product not found", details={"product_id": product_id})


class SubcategoryNotFound(CatalogError):
    kind = "SubcategoryNotFound"

    def __init__(self, subcategory_id):
        super().__init__(
            "Subcategory not found", details={"subcategory_id": subcategory_id}
        )


class EmptyVariations(CatalogError):
    kind = "EmptyVariations"

    def __init__(self, message: str = "At least one variation is required"):
        super().__init__(message)


class DuplicateSize(CatalogError):
    kind = "DuplicateSize"

    def __init__(self, sizes=None):
        super().__init__(
            "Duplicate sizes are not allowed in variations",
            details={"sizes": sorted(sizes or [])},
        )


class ValidationFailed(CatalogError):
    kind = "ValidationFailed"


class StorageFault(CatalogError):
    """Unexpected persistence failure. The message never carries driver detail."""

    kind = "StorageFault"
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
