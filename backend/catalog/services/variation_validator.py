import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from catalog.errors import CatalogError, DuplicateSize, EmptyVariations, ValidationFailed
from catalog.models.product import SIZES


@dataclass(frozen=True)
class VariationCheck:
    error: Optional[CatalogError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[str]:
        return self.error.kind if self.error else None


def _field(entry: Any, name: str, default: Any = None) -> Any:
    if isinstance(entry, dict):
        return entry.get(name, default)
    return getattr(entry, name, default)


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def validate_variations(variations: Optional[Iterable[Any]], required: bool = True) -> VariationCheck:
    """
    Check a candidate variation list for one product.

    Entries may be VariationIn models or plain dicts. `required=False` is
    the update path, where an absent list means "not supplied" but an
    empty one is still rejected. Pure: nothing is read or written.
    """
    if variations is None:
        return VariationCheck(EmptyVariations()) if required else VariationCheck()

    entries = list(variations)
    if not entries:
        return VariationCheck(EmptyVariations())

    problems = []
    sizes = []
    for index, entry in enumerate(entries):
        size = _field(entry, "size")
        size = getattr(size, "value", size)
        price = _field(entry, "price")
        stock = _field(entry, "stock", 0)

        if not isinstance(size, str) or size not in SIZES:
            problems.append({"index": index, "field": "size", "msg": f"Size must be one of {sorted(SIZES)}"})
        if not _is_number(price) or price < 0:
            problems.append({"index": index, "field": "price", "msg": "Price must be a finite, non-negative number"})
        if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
            problems.append({"index": index, "field": "stock", "msg": "Stock must be a non-negative integer"})
        sizes.append(size)

    if problems:
        return VariationCheck(ValidationFailed("Invalid variation", details={"errors": problems}))

    if len(set(sizes)) != len(sizes):
        dupes = [size for size, n in Counter(sizes).items() if n > 1]
        return VariationCheck(DuplicateSize(dupes))

    return VariationCheck()
