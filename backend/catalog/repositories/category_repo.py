from typing import Optional

from sqlalchemy.orm import Session

from catalog.db import storable_id
from catalog.models.category import Subcategory


class SubcategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, subcategory_id: int) -> Optional[Subcategory]:
        if not storable_id(subcategory_id):
            return None
        return self.db.query(Subcategory).filter(Subcategory.id == subcategory_id).first()

    def exists(self, subcategory_id: int) -> bool:
        return self.get(subcategory_id) is not None
