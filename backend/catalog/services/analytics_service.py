"""Platform analytics.

Read-only aggregates over users, orders, products and categories,
computed on every call. Each figure is a plain count, group-by or
left-join query, so empty tables come back as zeros.
"""

from typing import List

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from catalog.models.category import Category, Subcategory
from catalog.models.order import Order
from catalog.models.product import Product
from catalog.models.user import User
from catalog.schemas.analytics_schema import (
    AnalyticsSummary,
    DetailedAnalytics,
    OrderMetrics,
    PlatformAnalytics,
    PlatformDistribution,
    PlatformOverview,
    RoleCount,
    SubcategoryProductCount,
    TotalOverview,
    UserStats,
)

logger = structlog.get_logger()

# Until vendors carry their own approval status, admins are counted as approved vendors.
APPROVED_VENDOR_ROLE = "admin"


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db

    def _count(self, column, *criteria) -> int:
        query = self.db.query(func.count(column))
        if criteria:
            query = query.filter(*criteria)
        return int(query.scalar() or 0)

    def _totals(self) -> TotalOverview:
        return TotalOverview(
            total_users=self._count(User.id),
            total_orders=self._count(Order.id),
            total_products=self._count(Product.id),
            total_categories=self._count(Category.id),
        )

    def _active_users(self) -> int:
        return self._count(User.id, User.is_active == True)  # noqa: E712

    def order_metrics(self) -> OrderMetrics:
        count, revenue, average = self.db.query(
            func.count(Order.id),
            func.coalesce(func.sum(Order.total_amount), 0),
            func.coalesce(func.avg(Order.total_amount), 0),
        ).one()
        return OrderMetrics(
            total_orders=int(count or 0),
            total_revenue=float(revenue or 0),
            avg_order_value=float(average or 0),
        )

    def products_by_subcategory(self) -> List[SubcategoryProductCount]:
        counts = (
            self.db.query(
                Product.subcategory_id.label("subcategory_id"),
                func.count(Product.id).label("product_count"),
            )
            .group_by(Product.subcategory_id)
            .subquery()
        )
        rows = (
            self.db.query(counts.c.subcategory_id, Subcategory.name, counts.c.product_count)
            .outerjoin(Subcategory, Subcategory.id == counts.c.subcategory_id)
            .order_by(counts.c.subcategory_id)
            .all()
        )
        return [
            SubcategoryProductCount(
                subcategory_id=subcategory_id,
                subcategory=name,
                product_count=product_count,
            )
            for subcategory_id, name, product_count in rows
        ]

    def users_by_role(self) -> List[RoleCount]:
        rows = (
            self.db.query(User.role, func.count(User.id))
            .group_by(User.role)
            .order_by(User.role)
            .all()
        )
        return [RoleCount(role=role, count=count) for role, count in rows]

    def platform_overview(self) -> PlatformAnalytics:
        totals = self._totals()
        overview = PlatformAnalytics(
            total_overview=totals,
            platform_overview=PlatformOverview(
                active_users=self._active_users(),
                approved_vendors=self._count(User.id, User.role == APPROVED_VENDOR_ROLE),
                pending_vendor_requests=0,
            ),
            platform_distribution=PlatformDistribution(
                users=totals.total_users,
                products=totals.total_products,
                categories=totals.total_categories,
                orders=totals.total_orders,
            ),
        )
        logger.info("Platform analytics computed", **totals.model_dump())
        return overview

    def detailed(self) -> DetailedAnalytics:
        totals = self._totals()
        active = self._active_users()
        return DetailedAnalytics(
            summary=AnalyticsSummary(
                total_users=totals.total_users,
                active_users=active,
                inactive_users=totals.total_users - active,
                total_orders=totals.total_orders,
                total_products=totals.total_products,
                total_categories=totals.total_categories,
            ),
            order_metrics=self.order_metrics(),
            products_by_category=self.products_by_subcategory(),
        )

    def user_stats(self) -> UserStats:
        total = self._count(User.id)
        active = self._active_users()
        return UserStats(
            total_users=total,
            active_users=active,
            inactive_users=total - active,
            users_by_role=self.users_by_role(),
        )
