from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.api.deps import require_admin
from catalog.db import get_db
from catalog.services.analytics_service import AnalyticsService

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/analytics/platform", summary="Platform overview counts")
def platform_analytics(db: Session = Depends(get_db)):
    data = AnalyticsService(db).platform_overview()
    return {
        "success": True,
        "message": "Analytics retrieved successfully",
        "data": data.to_wire(),
    }


@router.get("/analytics/detailed", summary="Counts, order metrics and products per subcategory")
def detailed_analytics(db: Session = Depends(get_db)):
    data = AnalyticsService(db).detailed()
    return {
        "success": True,
        "message": "Detailed analytics retrieved successfully",
        "data": data.to_wire(),
    }


@router.get("/analytics/users", summary="User counts by status and role")
def user_stats(db: Session = Depends(get_db)):
    data = AnalyticsService(db).user_stats()
    return {
        "success": True,
        "message": "User statistics retrieved successfully",
        "data": data.to_wire(),
    }
